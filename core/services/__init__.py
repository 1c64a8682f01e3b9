# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .explanation_service import ExplanationService
from .file_service import FileService, ProcessedFile

__all__ = [
    "ExplanationService",
    "FileService",
    "ProcessedFile",
]
