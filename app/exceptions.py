# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Errors should tell HOW to fix, not just WHAT failed.
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


class SimplifierException(Exception):
    """
    Base exception for the Content Simplifier API.

    All custom exceptions inherit from this class.
    Provides structured error responses with actionable suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "SIMPLIFIER_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "success": False,
            "detail": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# History Exceptions
# =============================================================================

class ExplanationNotFoundError(SimplifierException):
    """Raised when an explanation ID doesn't exist in the history."""

    def __init__(self, explanation_id: str):
        super().__init__(
            message=f"Explanation not found: {explanation_id}",
            code="EXPLANATION_NOT_FOUND",
            status_code=404,
            suggestion="Check that the explanation was saved to history and hasn't been deleted",
            details={"explanation_id": explanation_id}
        )


class DatabaseUnavailableError(SimplifierException):
    """Raised when the history database cannot be reached."""

    def __init__(self, error: str):
        super().__init__(
            message="History storage is unavailable",
            code="DATABASE_UNAVAILABLE",
            status_code=503,
            suggestion="Check DATABASE_URL and that PostgreSQL is running",
            details={"error": error}
        )


# =============================================================================
# Upload Exceptions
# =============================================================================

class NoFileUploadedError(SimplifierException):
    """Raised when the upload request carries no file."""

    def __init__(self):
        super().__init__(
            message="No file uploaded",
            code="NO_FILE",
            status_code=400,
            suggestion="Send the file as multipart/form-data in the 'file' field",
        )


class UnsupportedFileTypeError(SimplifierException):
    """Raised when uploaded file type is not allowed."""

    def __init__(self, filename: str, mime_type: str):
        super().__init__(
            message=(
                f"Unsupported file type: {mime_type}. Supported formats: PDF, text, markdown, "
                "images (JPG, PNG, GIF, BMP, TIFF), and spreadsheets (Excel, CSV)."
            ),
            code="UNSUPPORTED_FILE_TYPE",
            status_code=400,
            suggestion="Convert the document to one of the supported formats and upload it again",
            details={"filename": filename, "mime_type": mime_type}
        )


class FileTooLargeError(SimplifierException):
    """Raised when uploaded file exceeds size limit."""

    def __init__(self, size_mb: float, max_mb: int):
        super().__init__(
            message=f"File too large: {size_mb:.1f}MB (max: {max_mb}MB)",
            code="FILE_TOO_LARGE",
            status_code=413,
            suggestion=f"Upload a file smaller than {max_mb}MB",
            details={"size_mb": size_mb, "max_mb": max_mb}
        )


class FileProcessingError(SimplifierException):
    """Raised when text cannot be extracted from an uploaded file."""

    def __init__(self, filename: str, error: str, file_type: str | None = None):
        super().__init__(
            message=error,
            code="FILE_PROCESSING_ERROR",
            status_code=400,
            suggestion="Check that the file is not corrupted and contains readable text",
            details={"filename": filename, "file_type": file_type}
        )


class EmptyContentError(SimplifierException):
    """Raised when extraction succeeded but produced no usable text."""

    def __init__(self, filename: str):
        super().__init__(
            message="No readable content found in the file",
            code="EMPTY_CONTENT",
            status_code=400,
            suggestion="Upload a file that contains at least a sentence of text",
            details={"filename": filename}
        )


# =============================================================================
# LLM Exceptions
# =============================================================================

class LLMConfigurationError(SimplifierException):
    """Raised when the selected provider has no API key configured."""

    def __init__(self, provider: str, env_var: str):
        super().__init__(
            message=f"LLM provider '{provider}' is not configured",
            code="LLM_NOT_CONFIGURED",
            status_code=500,
            suggestion=f"Set {env_var} in your environment or .env file",
            details={"provider": provider}
        )


class LLMServiceError(SimplifierException):
    """Raised when the LLM provider call fails or returns an unusable answer."""

    def __init__(self, message: str, provider: str | None = None, error: str | None = None):
        details = {}
        if provider:
            details["provider"] = provider
        if error:
            details["error"] = error
        super().__init__(
            message=message,
            code="LLM_ERROR",
            status_code=502,
            suggestion="Try again in a moment; if it keeps failing, switch the provider",
            details=details
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def simplifier_exception_handler(
    request: Request,
    exc: SimplifierException
) -> JSONResponse:
    """
    Convert SimplifierException to JSON response.

    Returns structured error with:
    - detail: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle request validation errors.

    Invalid payloads are client errors and are reported as 400.
    """
    return JSONResponse(
        status_code=400,
        content={
            "success": False,
            "detail": "Invalid request data",
            "code": "VALIDATION_ERROR",
            "errors": jsonable_encoder(exc.errors()),
        }
    )
