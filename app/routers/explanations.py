# =============================================================================
# app/routers/explanations.py - Explanation History Endpoints
# =============================================================================
# Handles the saved history: listing, search, bookmarks, deletion, export.
#
# Endpoints:
# - GET /explanations: List saved explanations (optionally by category)
# - POST /explanations: Save an explanation (e.g. a session result)
# - POST /explanations/search: Filtered search
# - GET /explanations/export: Plain-text download of the (filtered) history
# - GET /explanations/{id}: One explanation with its follow-ups
# - GET /explanations/{id}/followups: Follow-ups of an explanation
# - GET /explanations/{id}/export: Plain-text download
# - POST /explanations/{id}/bookmark: Toggle bookmark
# - DELETE /explanations/{id}: Delete (follow-ups go with it)
# =============================================================================

import logging
from datetime import datetime, timezone
from typing import Annotated

from fastapi import APIRouter, Path, Query
from fastapi.responses import PlainTextResponse

from app.dependencies import DbDep
from core.models import (
    Category,
    DeleteResponse,
    ExplanationCreate,
    ExplanationListResponse,
    ExplanationRead,
    ExplanationResponse,
    FollowupListResponse,
    FollowupRead,
    SearchFilters,
)
from core.services import ExplanationService
from lib.utils import slugify

logger = logging.getLogger(__name__)

router = APIRouter()

ExplanationId = Annotated[str, Path(description="Explanation UUID")]


def _list_response(explanations: list) -> ExplanationListResponse:
    items = [ExplanationRead.model_validate(e) for e in explanations]
    return ExplanationListResponse(total=len(items), explanations=items)


# =============================================================================
# Collection Endpoints
# =============================================================================

@router.get("", response_model=ExplanationListResponse)
def list_explanations(
    db: DbDep,
    category: Annotated[Category | None, Query(description="Filter by category")] = None,
):
    """List saved explanations, newest first."""
    explanations = ExplanationService.list_explanations(
        db, category=category.value if category else None
    )
    return _list_response(explanations)


@router.post("", response_model=ExplanationResponse, status_code=201)
def save_explanation(request: ExplanationCreate, db: DbDep):
    """
    Save an explanation to history.

    Used to keep a session explanation after the fact.
    """
    saved = ExplanationService.create_explanation(
        db,
        title=request.title,
        original_content=request.original_content,
        simplified_content=request.simplified_content,
        category=request.category.value,
        source_url=request.source_url,
        is_bookmarked=request.is_bookmarked,
    )
    return ExplanationResponse(explanation=ExplanationRead.model_validate(saved))


@router.post("/search", response_model=ExplanationListResponse)
def search_explanations(filters: SearchFilters, db: DbDep):
    """
    Search saved explanations.

    All filters are optional and combined: text query, category,
    bookmarked_only, created_at range and content type (text/file/url).
    """
    explanations = ExplanationService.search_explanations(db, filters)
    return _list_response(explanations)


@router.get("/export", response_class=PlainTextResponse)
def export_history(
    db: DbDep,
    category: Annotated[Category | None, Query(description="Only this category")] = None,
    query: Annotated[str | None, Query(max_length=500, description="Text filter")] = None,
    bookmarked_only: Annotated[bool, Query(description="Only bookmarked")] = False,
):
    """
    Download the history (or a filtered part of it) as one .txt file.

    Filters work like /search; with none, every saved explanation is included.
    """
    filters = SearchFilters(query=query, category=category, bookmarked_only=bookmarked_only)
    explanations = ExplanationService.search_explanations(db, filters)

    generated_at = datetime.now(timezone.utc)
    filename = f"content_simplifier_export_{generated_at:%Y-%m-%d_%H-%M}.txt"
    logger.info(f"Exporting {len(explanations)} explanations")

    return PlainTextResponse(
        ExplanationService.export_history_text(explanations, generated_at=generated_at),
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


# =============================================================================
# Item Endpoints
# =============================================================================

@router.get("/{explanation_id}", response_model=ExplanationResponse)
def get_explanation(explanation_id: ExplanationId, db: DbDep):
    """Get one explanation with its follow-ups."""
    explanation = ExplanationService.get_explanation_with_followups(db, explanation_id)
    return ExplanationResponse(explanation=ExplanationRead.model_validate(explanation))


@router.get("/{explanation_id}/followups", response_model=FollowupListResponse)
def list_followups(explanation_id: ExplanationId, db: DbDep):
    """Follow-ups of a saved explanation, oldest first."""
    followups = [
        FollowupRead.model_validate(f)
        for f in ExplanationService.list_followups(db, explanation_id)
    ]
    return FollowupListResponse(total=len(followups), followups=followups)


@router.get("/{explanation_id}/export", response_class=PlainTextResponse)
def export_explanation(explanation_id: ExplanationId, db: DbDep):
    """Download an explanation and its Q&A as a .txt file."""
    explanation = ExplanationService.get_explanation_with_followups(db, explanation_id)
    filename = f"{slugify(explanation.title)}.txt"

    return PlainTextResponse(
        ExplanationService.export_text(explanation),
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/{explanation_id}/bookmark", response_model=ExplanationResponse)
def toggle_bookmark(explanation_id: ExplanationId, db: DbDep):
    """Toggle the bookmark flag and return the updated explanation."""
    explanation = ExplanationService.toggle_bookmark(db, explanation_id)
    return ExplanationResponse(explanation=ExplanationRead.model_validate(explanation))


@router.delete("/{explanation_id}", response_model=DeleteResponse)
def delete_explanation(explanation_id: ExplanationId, db: DbDep):
    """Delete an explanation and its follow-ups."""
    ExplanationService.delete_explanation(db, explanation_id)
    return DeleteResponse(message=f"Deleted explanation {explanation_id}")
