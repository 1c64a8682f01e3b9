# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application.
# =============================================================================

import re
import time
from typing import Any
from uuid import UUID


# =============================================================================
# Identifier Utilities
# =============================================================================

def parse_uuid(value: str | UUID | None) -> UUID | None:
    """
    Parse a UUID, returning None for anything that isn't one.

    Explanation IDs are either database UUIDs or session IDs like
    "session-1718000000000"; callers use this to tell them apart.

    Example:
        parse_uuid("550e8400-e29b-41d4-a716-446655440000")  # UUID(...)
        parse_uuid("session-1718000000000")                 # None
    """
    if value is None:
        return None
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except ValueError:
        return None


def session_id(prefix: str) -> str:
    """Build an ephemeral ID such as "session-1718000000000" (epoch millis)."""
    return f"{prefix}-{int(time.time() * 1000)}"


# =============================================================================
# Text Utilities
# =============================================================================

def clean_text(text: str) -> str:
    """Normalize line endings and collapse runs of spaces and blank lines."""
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    text = re.sub(r"[ \t]+", " ", text)
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()


def slugify(text: str) -> str:
    """Lowercase a title and replace anything non-alphanumeric with underscores."""
    return re.sub(r"[^a-z0-9]", "_", text.lower()) or "explanation"


# =============================================================================
# Base Error Class
# =============================================================================

class ApplicationError(Exception):
    """
    Base error class for library-level errors.

    Provides actionable error messages following the principle:
    "Errors should tell HOW to fix, not just WHAT failed."

    Attributes:
        code: Error code for categorization
        message: Human-readable error message
        suggestion: Actionable suggestion for fixing the error
        details: Additional context for debugging

    Example:
        class MyServiceError(ApplicationError):
            def __init__(self, message: str, **kwargs):
                super().__init__(message, code="MY_SERVICE_ERROR", **kwargs)
    """

    def __init__(
        self,
        message: str,
        code: str = "APPLICATION_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f"\n  Suggestion: {self.suggestion}"
        return result
