# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - ocr.py: Image text extraction with Tesseract
# - pdf.py: PDF text-layer extraction
# - spreadsheet.py: CSV/Excel summaries readable by an LLM
# - web_fetcher.py: Fetch a web page and reduce it to plain text
# - utils.py: Shared utilities (error base class, IDs, text cleanup)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.utils import ApplicationError, clean_text, parse_uuid, session_id, slugify

__all__ = [
    "ApplicationError",
    "clean_text",
    "parse_uuid",
    "session_id",
    "slugify",
]
