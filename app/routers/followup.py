# =============================================================================
# app/routers/followup.py - Follow-up Questions
# =============================================================================
# Answers questions about an explanation.
#
# Endpoints:
# - POST /followup: Ask a question about a session or saved explanation
#
# Follow-ups on saved explanations are stored with them; follow-ups on
# session explanations are returned with an ephemeral ID only.
# =============================================================================

import logging
from datetime import datetime, timezone

from fastapi import APIRouter

from agents.simplifier import answer_followup
from app.dependencies import DbDep
from core.models import FollowupRead, FollowupRequest, FollowupResponse
from core.services import ExplanationService
from lib.utils import session_id

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/followup", response_model=FollowupResponse)
def ask_followup(request: FollowupRequest, db: DbDep):
    """
    Answer a follow-up question.

    Context for the answer is original_content when given; for a saved
    explanation without original_content, its simplified text is used.
    """
    saved = ExplanationService.find_explanation(db, request.explanation_id)

    context = request.original_content
    if not context and saved is not None:
        context = saved.simplified_content

    answer = answer_followup(context or "", request.question, provider=request.provider)

    if saved is not None:
        followup = ExplanationService.create_followup(
            db,
            explanation_id=saved.id,
            question=request.question,
            answer=answer,
        )
        return FollowupResponse(followup=FollowupRead.model_validate(followup), saved=True)

    logger.debug(f"Session follow-up for {request.explanation_id}")
    return FollowupResponse(
        followup=FollowupRead(
            id=session_id("followup"),
            explanation_id=request.explanation_id,
            question=request.question,
            answer=answer,
            created_at=datetime.now(timezone.utc),
        ),
        saved=False,
    )
