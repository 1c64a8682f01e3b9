# =============================================================================
# core/services/file_service.py - Upload Text Extraction
# =============================================================================
# Validates uploads and routes them to the right extractor:
# - images       -> Tesseract OCR
# - spreadsheets -> pandas summary (headers, sample rows, size)
# - PDFs         -> pdfminer text layer
# - anything else allowed (text, markdown) -> UTF-8 decode
# =============================================================================

import logging
from dataclasses import dataclass
from pathlib import PurePath

from app.config import settings
from app.exceptions import (
    EmptyContentError,
    FileProcessingError,
    FileTooLargeError,
    UnsupportedFileTypeError,
)
from lib.ocr import OCRError, configure_tesseract, ocr_image_bytes
from lib.pdf import PDFExtractionError, extract_pdf_text
from lib.spreadsheet import SpreadsheetError, is_csv, summarize_spreadsheet

logger = logging.getLogger(__name__)

ALLOWED_MIME_TYPES = {
    "application/pdf",
    "text/plain",
    "text/markdown",
    "image/jpeg",
    "image/jpg",
    "image/png",
    "image/gif",
    "image/bmp",
    "image/tiff",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "application/vnd.ms-excel",
    "text/csv",
}

IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif", ".bmp", ".tiff", ".tif"}
SPREADSHEET_EXTENSIONS = {".xlsx", ".xls", ".csv"}
ALLOWED_EXTENSIONS = IMAGE_EXTENSIONS | SPREADSHEET_EXTENSIONS | {".pdf", ".txt", ".md", ".markdown"}

# Anything shorter is treated as "nothing readable"
MIN_CONTENT_LENGTH = 10


@dataclass
class ProcessedFile:
    """Text extracted from an upload and how it was obtained."""
    content: str
    file_type: str
    processing_method: str


def _extension(filename: str) -> str:
    return PurePath(filename).suffix.lower()


class FileService:
    """
    Service for turning uploaded files into text.

    Stateless; all methods are static.
    """

    @staticmethod
    def validate_upload(filename: str, mime_type: str, size_bytes: int) -> None:
        """
        Check type and size before any processing.

        Raises:
            UnsupportedFileTypeError: If neither MIME type nor extension is allowed
            FileTooLargeError: If the file exceeds MAX_UPLOAD_SIZE_MB
        """
        if mime_type not in ALLOWED_MIME_TYPES and _extension(filename) not in ALLOWED_EXTENSIONS:
            raise UnsupportedFileTypeError(filename, mime_type)

        if size_bytes > settings.max_upload_size_bytes:
            raise FileTooLargeError(size_bytes / (1024 * 1024), settings.MAX_UPLOAD_SIZE_MB)

    @staticmethod
    def is_image(filename: str, mime_type: str) -> bool:
        return mime_type.startswith("image/") or _extension(filename) in IMAGE_EXTENSIONS

    @staticmethod
    def is_spreadsheet(filename: str, mime_type: str) -> bool:
        return (
            _extension(filename) in SPREADSHEET_EXTENSIONS
            or "spreadsheet" in mime_type
            or "csv" in mime_type
            or "ms-excel" in mime_type
        )

    @staticmethod
    def is_pdf(filename: str, mime_type: str) -> bool:
        return mime_type == "application/pdf" or _extension(filename) == ".pdf"

    @staticmethod
    def process_image(data: bytes, filename: str) -> ProcessedFile:
        logger.info(f"Processing image: {filename}")
        configure_tesseract(settings.TESSERACT_CMD)

        try:
            text = ocr_image_bytes(data, lang=settings.OCR_LANGUAGE)
        except OCRError as e:
            logger.error(f"Image OCR processing error: {e}")
            raise FileProcessingError(
                filename,
                "Failed to process image. Please ensure the image contains clear, readable text.",
                file_type="image",
            ) from e

        if len(text.strip()) < MIN_CONTENT_LENGTH:
            raise FileProcessingError(
                filename,
                "No readable text found in image. The image may be too blurry, "
                "have poor contrast, or contain no text.",
                file_type="image",
            )

        return ProcessedFile(content=text.strip(), file_type="image", processing_method="OCR (Tesseract)")

    @staticmethod
    def process_spreadsheet(data: bytes, filename: str, mime_type: str | None = None) -> ProcessedFile:
        logger.info(f"Processing spreadsheet: {filename}")
        if is_csv(filename, mime_type):
            file_type = "csv"
        else:
            file_type = _extension(filename).lstrip(".") or "spreadsheet"

        try:
            summary = summarize_spreadsheet(data, filename, mime_type)
        except SpreadsheetError as e:
            logger.error(f"Spreadsheet processing error: {e}")
            raise FileProcessingError(
                filename,
                "Failed to process spreadsheet. Please ensure the file is a valid Excel or CSV file.",
                file_type=file_type,
            ) from e

        if not summary.strip():
            raise FileProcessingError(
                filename,
                "Spreadsheet appears to be empty or contains no readable data.",
                file_type=file_type,
            )

        return ProcessedFile(
            content=summary.strip(),
            file_type=file_type,
            processing_method="Spreadsheet Parser (pandas)",
        )

    @staticmethod
    def process_pdf(data: bytes, filename: str) -> ProcessedFile:
        logger.info(f"Processing PDF: {filename}")

        try:
            text = extract_pdf_text(data)
        except PDFExtractionError as e:
            logger.error(f"PDF processing error: {e}")
            raise FileProcessingError(
                filename,
                "Failed to read PDF. Please ensure the file is a valid, unencrypted PDF.",
                file_type="pdf",
            ) from e

        return ProcessedFile(content=text, file_type="pdf", processing_method="PDF text extraction")

    @staticmethod
    def process_text(data: bytes, filename: str) -> ProcessedFile:
        file_type = _extension(filename).lstrip(".") or "txt"
        text = data.decode("utf-8", errors="ignore")
        return ProcessedFile(content=text, file_type=file_type, processing_method="Basic text extraction")

    @staticmethod
    def process_file(data: bytes, filename: str, mime_type: str) -> ProcessedFile:
        """
        Extract text from an upload, routing by MIME type and extension.

        Returns:
            ProcessedFile with at least MIN_CONTENT_LENGTH characters of content

        Raises:
            FileProcessingError: If the extractor fails
            EmptyContentError: If nothing readable was extracted
        """
        if FileService.is_image(filename, mime_type):
            result = FileService.process_image(data, filename)
        elif FileService.is_spreadsheet(filename, mime_type):
            result = FileService.process_spreadsheet(data, filename, mime_type)
        elif FileService.is_pdf(filename, mime_type):
            result = FileService.process_pdf(data, filename)
        else:
            result = FileService.process_text(data, filename)

        if len(result.content.strip()) < MIN_CONTENT_LENGTH:
            raise EmptyContentError(filename)

        logger.info(
            f"Extracted {len(result.content)} characters from {filename} "
            f"via {result.processing_method}"
        )
        return result
