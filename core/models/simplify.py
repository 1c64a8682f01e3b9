# =============================================================================
# core/models/simplify.py - Simplify & Follow-up Schemas
# =============================================================================
# These models define the API contract for the simplification flow:
# - SimplifyRequest: Text or URL to explain
# - FollowupRequest: A question about an explanation
# - ExplanationResponse / FollowupResponse: Success envelopes
#
# Flow:
# 1. Client sends SimplifyRequest (or uploads a file) -> ExplanationResponse
# 2. Client asks questions with FollowupRequest -> FollowupResponse
# 3. Optionally the explanation is saved to history for bookmarking/search
# =============================================================================

from enum import Enum

from pydantic import BaseModel, Field

from .explanation import Category, ExplanationRead, FollowupRead


class LLMProvider(str, Enum):
    """
    Which LLM backend answers a request.

    - anthropic: Claude via the Anthropic SDK (default)
    - deepseek: DeepSeek via its OpenAI-compatible API
    """
    ANTHROPIC = "anthropic"
    DEEPSEEK = "deepseek"


class SimplifyRequest(BaseModel):
    """
    Schema for simplifying pasted text or a URL.

    Example:
        {
            "content": "https://example.com/what-is-a-roth-ira",
            "category": "money",
            "save_to_history": true
        }
    """

    content: str = Field(
        ...,
        min_length=1,
        description="Text to explain, or an http(s) URL to explain",
    )
    category: Category = Field(..., description="Topic the explanation is filed under")
    content_type: str | None = Field(None, description="Optional hint about the content's origin")
    file_name: str | None = Field(None, description="Original file name, when the text came from a file")
    save_to_history: bool = Field(False, description="Persist the result to the history")
    provider: LLMProvider | None = Field(None, description="Override the configured LLM provider")


class FollowupRequest(BaseModel):
    """
    Schema for asking a follow-up question.

    original_content is the context the answer builds on. For saved
    explanations it may be omitted; the stored explanation is used instead.
    """

    explanation_id: str = Field(..., min_length=1)
    question: str = Field(..., min_length=1, max_length=2000)
    original_content: str | None = None
    provider: LLMProvider | None = None


class FileInfo(BaseModel):
    """Details about a processed upload."""
    original_name: str
    size: int
    processing_method: str


class ExplanationResponse(BaseModel):
    """Envelope for a single explanation."""
    success: bool = True
    explanation: ExplanationRead
    file_info: FileInfo | None = None


class ExplanationListResponse(BaseModel):
    """Envelope for a list of explanations."""
    success: bool = True
    total: int
    explanations: list[ExplanationRead]


class FollowupResponse(BaseModel):
    """Envelope for a follow-up answer."""
    success: bool = True
    followup: FollowupRead
    saved: bool = Field(False, description="Whether the follow-up was stored with a saved explanation")


class FollowupListResponse(BaseModel):
    """Envelope for the follow-ups of a saved explanation."""
    success: bool = True
    total: int
    followups: list[FollowupRead]


class DeleteResponse(BaseModel):
    """Envelope for deletions."""
    success: bool = True
    message: str
