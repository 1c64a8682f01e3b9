# =============================================================================
# core/models/explanation.py - Explanation & Follow-up Schemas
# =============================================================================
# These models define the API contract for history records:
# - ExplanationRead: An explanation as returned to clients (saved or session)
# - ExplanationCreate: Input for saving an explanation to history
# - FollowupRead: A follow-up question with its answer
# - SearchFilters: Predicates for searching the history
#
# Session explanations (not saved) use string IDs like "session-1718000000000",
# so IDs are exposed as strings everywhere.
# =============================================================================

from datetime import datetime
from enum import Enum
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Category(str, Enum):
    """Topic an explanation is filed under."""
    AI = "ai"
    MONEY = "money"
    TECH = "tech"
    BUSINESS = "business"
    OTHER = "other"


class ContentType(str, Enum):
    """
    Where the original content came from.

    Derived from source_url:
    - text: no source_url (pasted text)
    - file: source_url starts with "file:"
    - url: source_url is an http(s) address
    """
    TEXT = "text"
    FILE = "file"
    URL = "url"


def _stringify_id(value: Any) -> Any:
    return str(value) if isinstance(value, UUID) else value


class FollowupRead(BaseModel):
    """A follow-up question and the LLM's answer."""

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(..., examples=["followup-1718000000000"])
    explanation_id: str = Field(..., examples=["550e8400-e29b-41d4-a716-446655440000"])
    question: str = Field(..., examples=["Can you give another example?"])
    answer: str
    created_at: datetime

    @field_validator("id", "explanation_id", mode="before")
    @classmethod
    def normalize_ids(cls, value: Any) -> Any:
        return _stringify_id(value)


class ExplanationRead(BaseModel):
    """
    An explanation as returned by the API.

    Example:
        {
            "id": "550e8400-e29b-41d4-a716-446655440000",
            "title": "How Index Funds Work",
            "original_content": "An index fund is ...",
            "simplified_content": "Think of an index fund like ...",
            "category": "money",
            "source_url": null,
            "is_bookmarked": false,
            "created_at": "2024-01-15T10:30:00Z",
            "followups": []
        }
    """

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(..., examples=["550e8400-e29b-41d4-a716-446655440000"])
    title: str
    original_content: str
    simplified_content: str
    category: str = Field(..., examples=["money"])
    source_url: str | None = Field(None, examples=["https://example.com/article"])
    is_bookmarked: bool = False
    created_at: datetime
    followups: list[FollowupRead] = Field(default_factory=list)

    @field_validator("id", mode="before")
    @classmethod
    def normalize_id(cls, value: Any) -> Any:
        return _stringify_id(value)


class ExplanationCreate(BaseModel):
    """Schema for saving an explanation (e.g. a session result) to history."""

    title: str = Field(..., min_length=1, max_length=500)
    original_content: str = Field(..., min_length=1)
    simplified_content: str = Field(..., min_length=1)
    category: Category = Category.OTHER
    source_url: str | None = None
    is_bookmarked: bool = False


class SearchFilters(BaseModel):
    """
    History search predicates. All are optional and combined with AND.

    date_from / date_to are inclusive bounds on created_at.
    """

    query: str | None = Field(
        None,
        max_length=500,
        description="Case-insensitive text matched against title and content",
    )
    category: Category | None = None
    bookmarked_only: bool = False
    date_from: datetime | None = None
    date_to: datetime | None = None
    content_type: ContentType | None = None
