# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
# - simplify.py: Pasted text and URL simplification
# - upload.py: File upload, text extraction and simplification
# - followup.py: Follow-up questions about an explanation
# - explanations.py: Saved history, search, bookmarks and export
#
# Each router is mounted in main.py under the /api prefix.
# =============================================================================

from . import health
from . import simplify
from . import upload
from . import followup
from . import explanations

__all__ = [
    "health",
    "simplify",
    "upload",
    "followup",
    "explanations",
]
