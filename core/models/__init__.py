# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - explanation.py: Explanation / follow-up records and history search
# - simplify.py: Simplify and follow-up requests, response envelopes
#
# These models define the "contract" between API and clients.
# =============================================================================

from .explanation import (
    Category,
    ContentType,
    ExplanationCreate,
    ExplanationRead,
    FollowupRead,
    SearchFilters,
)
from .simplify import (
    DeleteResponse,
    ExplanationListResponse,
    ExplanationResponse,
    FileInfo,
    FollowupListResponse,
    FollowupRequest,
    FollowupResponse,
    LLMProvider,
    SimplifyRequest,
)

__all__ = [
    # Explanation
    "Category",
    "ContentType",
    "ExplanationCreate",
    "ExplanationRead",
    "FollowupRead",
    "SearchFilters",
    # Simplify
    "DeleteResponse",
    "ExplanationListResponse",
    "ExplanationResponse",
    "FileInfo",
    "FollowupListResponse",
    "FollowupRequest",
    "FollowupResponse",
    "LLMProvider",
    "SimplifyRequest",
]
