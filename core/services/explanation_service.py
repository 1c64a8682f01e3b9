# =============================================================================
# core/services/explanation_service.py - Explanation History Business Logic
# =============================================================================
# Handles explanation and follow-up persistence, bookmarking and search.
# Separates HTTP concerns from database/business logic.
# =============================================================================

import logging
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from app.exceptions import DatabaseUnavailableError, ExplanationNotFoundError
from core.models import ContentType, SearchFilters
from core.tables import Explanation, FollowupQuestion
from lib.utils import parse_uuid

logger = logging.getLogger(__name__)


def _export_date(value: datetime) -> str:
    """Format like "Jun 1, 2024 12:00"."""
    return f"{value:%b} {value.day}, {value:%Y %H:%M}"


def _commit(db: Session) -> None:
    """Commit, rolling back and reporting storage failures."""
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Database commit failed: {e}")
        raise DatabaseUnavailableError(str(e)) from e


class ExplanationService:
    """
    Service for explanation history operations.

    Provides a clean interface between API routes and database.
    Every method takes the request's SQLAlchemy session as first argument.
    """

    @staticmethod
    def create_explanation(
        db: Session,
        title: str,
        original_content: str,
        simplified_content: str,
        category: str,
        source_url: str | None = None,
        is_bookmarked: bool = False,
    ) -> Explanation:
        """
        Save an explanation to history.

        Returns:
            The persisted Explanation (with id and created_at populated)
        """
        explanation = Explanation(
            title=title,
            original_content=original_content,
            simplified_content=simplified_content,
            category=category,
            source_url=source_url,
            is_bookmarked=is_bookmarked,
        )
        db.add(explanation)
        _commit(db)
        db.refresh(explanation)

        logger.info(f"Created explanation: {explanation.id} ({category})")
        return explanation

    @staticmethod
    def find_explanation(db: Session, explanation_id: str | UUID) -> Explanation | None:
        """
        Look up an explanation, returning None for unknown or non-UUID IDs.

        Session IDs like "session-1718000000000" are never in the database.
        """
        parsed = parse_uuid(explanation_id)
        if parsed is None:
            return None
        try:
            return db.get(Explanation, parsed)
        except SQLAlchemyError as e:
            logger.error(f"Failed to fetch explanation {explanation_id}: {e}")
            raise DatabaseUnavailableError(str(e)) from e

    @staticmethod
    def get_explanation(db: Session, explanation_id: str | UUID) -> Explanation:
        """
        Get an explanation by ID.

        Raises:
            ExplanationNotFoundError: If it doesn't exist
        """
        explanation = ExplanationService.find_explanation(db, explanation_id)
        if explanation is None:
            raise ExplanationNotFoundError(str(explanation_id))
        return explanation

    @staticmethod
    def get_explanation_with_followups(db: Session, explanation_id: str | UUID) -> Explanation:
        """Get an explanation with its follow-ups loaded (oldest first)."""
        explanation = ExplanationService.get_explanation(db, explanation_id)
        # Touch the relationship so it's loaded before the session closes
        _ = explanation.followups
        return explanation

    @staticmethod
    def list_explanations(db: Session, category: str | None = None) -> list[Explanation]:
        """List the history, newest first, optionally for one category."""
        stmt = select(Explanation).options(selectinload(Explanation.followups))
        if category:
            stmt = stmt.where(Explanation.category == category)
        stmt = stmt.order_by(Explanation.created_at.desc())

        try:
            return list(db.scalars(stmt).all())
        except SQLAlchemyError as e:
            logger.error(f"Failed to list explanations: {e}")
            raise DatabaseUnavailableError(str(e)) from e

    @staticmethod
    def search_explanations(db: Session, filters: SearchFilters) -> list[Explanation]:
        """
        Search the history.

        All filters are optional and combined with AND:
        - query: case-insensitive substring of title, original or simplified content
        - category: exact category
        - bookmarked_only: only bookmarked explanations
        - date_from / date_to: inclusive created_at bounds
        - content_type: text / file / url, derived from source_url
        """
        stmt = select(Explanation).options(selectinload(Explanation.followups))

        if filters.query and filters.query.strip():
            pattern = f"%{filters.query.strip()}%"
            stmt = stmt.where(
                or_(
                    Explanation.title.ilike(pattern),
                    Explanation.original_content.ilike(pattern),
                    Explanation.simplified_content.ilike(pattern),
                )
            )
        if filters.category:
            stmt = stmt.where(Explanation.category == filters.category.value)
        if filters.bookmarked_only:
            stmt = stmt.where(Explanation.is_bookmarked.is_(True))
        if filters.date_from:
            stmt = stmt.where(Explanation.created_at >= filters.date_from)
        if filters.date_to:
            stmt = stmt.where(Explanation.created_at <= filters.date_to)
        if filters.content_type == ContentType.TEXT:
            stmt = stmt.where(Explanation.source_url.is_(None))
        elif filters.content_type == ContentType.FILE:
            stmt = stmt.where(Explanation.source_url.like("file:%"))
        elif filters.content_type == ContentType.URL:
            stmt = stmt.where(
                or_(
                    Explanation.source_url.like("http://%"),
                    Explanation.source_url.like("https://%"),
                )
            )

        stmt = stmt.order_by(Explanation.created_at.desc())

        try:
            results = list(db.scalars(stmt).all())
        except SQLAlchemyError as e:
            logger.error(f"Failed to search explanations: {e}")
            raise DatabaseUnavailableError(str(e)) from e

        logger.debug(f"Search {filters.model_dump(exclude_none=True)} -> {len(results)} results")
        return results

    @staticmethod
    def toggle_bookmark(db: Session, explanation_id: str | UUID) -> Explanation:
        """
        Flip the bookmark flag.

        Raises:
            ExplanationNotFoundError: If it doesn't exist
        """
        explanation = ExplanationService.get_explanation(db, explanation_id)
        explanation.is_bookmarked = not explanation.is_bookmarked
        _commit(db)
        db.refresh(explanation)

        logger.info(f"Explanation {explanation.id} bookmarked={explanation.is_bookmarked}")
        return explanation

    @staticmethod
    def delete_explanation(db: Session, explanation_id: str | UUID) -> None:
        """
        Delete an explanation and its follow-ups.

        Raises:
            ExplanationNotFoundError: If it doesn't exist
        """
        explanation = ExplanationService.get_explanation(db, explanation_id)
        db.delete(explanation)
        _commit(db)
        logger.info(f"Deleted explanation: {explanation_id}")

    # -------------------------------------------------------------------------
    # Follow-up Questions
    # -------------------------------------------------------------------------

    @staticmethod
    def create_followup(
        db: Session,
        explanation_id: str | UUID,
        question: str,
        answer: str,
    ) -> FollowupQuestion:
        """
        Store a follow-up for a saved explanation.

        Raises:
            ExplanationNotFoundError: If the explanation doesn't exist
        """
        explanation = ExplanationService.get_explanation(db, explanation_id)
        followup = FollowupQuestion(
            explanation=explanation,
            question=question,
            answer=answer,
        )
        db.add(followup)
        _commit(db)
        db.refresh(followup)

        logger.info(f"Created follow-up {followup.id} for explanation {explanation.id}")
        return followup

    @staticmethod
    def list_followups(db: Session, explanation_id: str | UUID) -> list[FollowupQuestion]:
        """Follow-ups of an explanation, oldest first."""
        explanation = ExplanationService.get_explanation(db, explanation_id)
        stmt = (
            select(FollowupQuestion)
            .where(FollowupQuestion.explanation_id == explanation.id)
            .order_by(FollowupQuestion.created_at)
        )

        try:
            return list(db.scalars(stmt).all())
        except SQLAlchemyError as e:
            logger.error(f"Failed to list follow-ups for {explanation_id}: {e}")
            raise DatabaseUnavailableError(str(e)) from e

    # -------------------------------------------------------------------------
    # Export
    # -------------------------------------------------------------------------

    @staticmethod
    def export_text(explanation: Explanation) -> str:
        """
        Render an explanation as plain text.

        Layout: title, "=" underline, explanation, then numbered Q/A pairs.
        """
        lines: list[str] = [explanation.title, "=" * len(explanation.title), ""]
        lines.append(explanation.simplified_content)
        lines.append("")

        if explanation.followups:
            lines.append("Follow-up Questions & Answers:")
            lines.append("-" * 32)
            for index, followup in enumerate(explanation.followups, start=1):
                lines.append("")
                lines.append(f"Q{index}: {followup.question}")
                lines.append(f"A{index}: {followup.answer}")

        return "\n".join(lines) + "\n"

    @staticmethod
    def export_history_text(
        explanations: list[Explanation],
        generated_at: datetime | None = None,
    ) -> str:
        """
        Render several explanations as one plain-text document.

        A header with the generation time and count, then one section per
        explanation (title, category, created, source, original content,
        simplified explanation, numbered Q/A) separated by "=" rules.
        """
        generated_at = generated_at or datetime.now(timezone.utc)
        rule = "=" * 50

        lines: list[str] = [
            "Content Simplifier Export",
            "=" * 24,
            "",
            f"Generated: {_export_date(generated_at)}",
            f"Total Explanations: {len(explanations)}",
            "",
            rule,
            "",
        ]

        for index, explanation in enumerate(explanations):
            if index > 0:
                lines.extend(["", rule, ""])

            lines.extend([explanation.title, "=" * len(explanation.title), ""])
            lines.append(f"Category: {explanation.category.upper()}")
            lines.append(f"Created: {_export_date(explanation.created_at)}")
            if explanation.source_url:
                lines.append(f"Source: {explanation.source_url}")
            lines.append("")

            lines.extend(["Original Content:", "-" * 16, explanation.original_content, ""])
            lines.extend(["Simplified Explanation:", "-" * 21, explanation.simplified_content, ""])

            if explanation.followups:
                lines.extend(["Follow-up Questions & Answers:", "-" * 32])
                for number, followup in enumerate(explanation.followups, start=1):
                    lines.append("")
                    lines.append(f"Q{number}: {followup.question}")
                    lines.append(f"A{number}: {followup.answer}")

        return "\n".join(lines) + "\n"
