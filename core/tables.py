# =============================================================================
# core/tables.py - ORM Tables
# =============================================================================
# The two-table history schema:
# - explanations: one simplified piece of content
# - followup_questions: questions asked about an explanation
#
# Deleting an explanation removes its follow-ups (ON DELETE CASCADE in the
# database, delete-orphan in the ORM).
# =============================================================================

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, ForeignKey, String, Text, Uuid, false, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from core.database import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Explanation(Base):
    __tablename__ = "explanations"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    original_content: Mapped[str] = mapped_column(Text, nullable=False)
    simplified_content: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    source_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_bookmarked: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, server_default=func.now(), index=True
    )

    followups: Mapped[list[FollowupQuestion]] = relationship(
        back_populates="explanation",
        cascade="all, delete-orphan",
        order_by="FollowupQuestion.created_at",
    )

    def __repr__(self) -> str:
        return f"<Explanation {self.id} {self.title!r}>"


class FollowupQuestion(Base):
    __tablename__ = "followup_questions"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    explanation_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("explanations.id", ondelete="CASCADE"), nullable=False, index=True
    )
    question: Mapped[str] = mapped_column(Text, nullable=False)
    answer: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, server_default=func.now()
    )

    explanation: Mapped[Explanation] = relationship(back_populates="followups")
