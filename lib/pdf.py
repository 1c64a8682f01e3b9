# =============================================================================
# lib/pdf.py - PDF Text Extraction
# =============================================================================
# Extracts the text layer of a PDF with pdfminer.six.
# Scanned PDFs without a text layer come back empty.
# =============================================================================

from __future__ import annotations

import io
import logging

from pdfminer.high_level import extract_text
from pdfminer.pdfparser import PDFSyntaxError

from lib.utils import ApplicationError, clean_text

logger = logging.getLogger(__name__)


class PDFExtractionError(ApplicationError):
    """Raised when a PDF can't be parsed."""

    def __init__(self, message: str, **kwargs):
        super().__init__(message, code="PDF_ERROR", **kwargs)


def extract_pdf_text(data: bytes) -> str:
    """
    Extract text from PDF bytes.

    Raises:
        PDFExtractionError: If the file isn't a readable PDF
    """
    try:
        text = extract_text(io.BytesIO(data))
    except PDFSyntaxError as e:
        raise PDFExtractionError(
            f"Failed to read PDF: {e}",
            suggestion="Check that the file is a valid, unencrypted PDF",
        ) from e

    text = clean_text(text or "")
    logger.debug(f"PDF extraction produced {len(text)} characters")
    return text
