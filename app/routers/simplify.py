# =============================================================================
# app/routers/simplify.py - Text & URL Simplification
# =============================================================================
# Handles pasted text and URLs.
#
# Endpoints:
# - POST /simplify: Explain content, optionally saving it to history
# =============================================================================

import logging
from datetime import datetime, timezone

from fastapi import APIRouter
from sqlalchemy.orm import Session

from agents.simplifier import SimplificationResult, extract_and_simplify
from app.dependencies import DbDep
from core.models import ExplanationRead, ExplanationResponse, SimplifyRequest
from core.services import ExplanationService
from lib.utils import session_id

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Helper Functions
# =============================================================================

def build_explanation(
    db: Session,
    result: SimplificationResult,
    original_content: str,
    category: str,
    source_url: str | None,
    save_to_history: bool,
) -> ExplanationRead:
    """
    Persist the result, or wrap it as a session explanation.

    Session explanations get an ID like "session-1718000000000" and are
    never stored.
    """
    if save_to_history:
        saved = ExplanationService.create_explanation(
            db,
            title=result.title,
            original_content=original_content,
            simplified_content=result.simplified,
            category=category,
            source_url=source_url,
        )
        return ExplanationRead.model_validate(saved)

    return ExplanationRead(
        id=session_id("session"),
        title=result.title,
        original_content=original_content,
        simplified_content=result.simplified,
        category=category,
        source_url=source_url,
        created_at=datetime.now(timezone.utc),
    )


# =============================================================================
# Endpoints
# =============================================================================

@router.post("/simplify", response_model=ExplanationResponse)
def simplify_content(request: SimplifyRequest, db: DbDep):
    """
    Explain pasted text or the page behind a URL in plain language.

    - Content starting with http:// or https:// is treated as a URL
    - save_to_history=true stores the explanation for later search/bookmarking
    """
    if request.file_name:
        logger.info(f"Simplifying text from file: {request.file_name}")

    result = extract_and_simplify(
        request.content,
        content_type=request.content_type,
        category=request.category.value,
        provider=request.provider,
    )

    explanation = build_explanation(
        db,
        result,
        original_content=request.content,
        category=request.category.value,
        source_url=result.original_url,
        save_to_history=request.save_to_history,
    )

    return ExplanationResponse(explanation=explanation)
