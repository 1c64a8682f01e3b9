# =============================================================================
# lib/ocr.py - Image Text Extraction
# =============================================================================
# Runs Tesseract OCR over uploaded images.
#
# Images are converted to grayscale and auto-contrasted before recognition,
# which noticeably helps with phone photos of printed pages.
#
# Usage:
#   from lib.ocr import ocr_image_bytes
#   text = ocr_image_bytes(image_bytes, lang="eng")
# =============================================================================

from __future__ import annotations

import io
import logging

import pytesseract
from PIL import Image, ImageOps, UnidentifiedImageError

from lib.utils import ApplicationError, clean_text

logger = logging.getLogger(__name__)

# Page segmentation mode 6: assume a single uniform block of text
TESSERACT_CONFIG = "--psm 6"


class OCRError(ApplicationError):
    """Raised when an image cannot be decoded or Tesseract fails."""

    def __init__(self, message: str, **kwargs):
        super().__init__(message, code="OCR_ERROR", **kwargs)


def configure_tesseract(tesseract_cmd: str | None) -> None:
    """Point pytesseract at a specific binary (no-op when unset)."""
    if tesseract_cmd:
        pytesseract.pytesseract.tesseract_cmd = tesseract_cmd


def ocr_image_bytes(image_bytes: bytes, *, lang: str = "eng") -> str:
    """
    Extract text from raw image bytes.

    Args:
        image_bytes: Encoded image (PNG, JPEG, GIF, BMP, TIFF)
        lang: Tesseract language code

    Returns:
        Cleaned recognized text (may be empty)

    Raises:
        OCRError: If the image can't be opened or Tesseract isn't available
    """
    try:
        img = Image.open(io.BytesIO(image_bytes))
        img.load()
    except (UnidentifiedImageError, OSError) as e:
        raise OCRError(
            f"Could not open image: {e}",
            suggestion="Upload a valid JPG, PNG, GIF, BMP or TIFF image",
        ) from e

    img = ImageOps.grayscale(img)
    img = ImageOps.autocontrast(img)

    try:
        text = pytesseract.image_to_string(img, lang=lang, config=TESSERACT_CONFIG)
    except (pytesseract.TesseractNotFoundError, pytesseract.TesseractError) as e:
        raise OCRError(
            f"Tesseract failed: {e}",
            suggestion="Make sure Tesseract-OCR is installed or set TESSERACT_CMD",
        ) from e

    text = clean_text(text)
    logger.debug(f"OCR extracted {len(text)} characters")
    return text
