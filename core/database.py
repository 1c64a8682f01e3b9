# =============================================================================
# core/database.py - Database Engine & Sessions
# =============================================================================
# SQLAlchemy engine, session factory and declarative base for the
# explanation history. The engine is created lazily from settings so that
# importing the app never opens a connection.
#
# Usage:
#   from core.database import get_db
#
#   @router.get("/things")
#   def list_things(db: Session = Depends(get_db)): ...
# =============================================================================

from __future__ import annotations

import logging
from typing import Iterator

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from app.config import settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base for all ORM tables."""


_engine: Engine | None = None
_session_factory: sessionmaker[Session] | None = None


def get_engine() -> Engine:
    """Get or create the process-wide engine."""
    global _engine
    if _engine is None:
        _engine = create_engine(
            settings.DATABASE_URL,
            echo=settings.DATABASE_ECHO,
            pool_pre_ping=True,
        )
        logger.info(f"Database engine created ({_engine.url.render_as_string(hide_password=True)})")
    return _engine


def get_session_factory() -> sessionmaker[Session]:
    """Get or create the session factory bound to the engine."""
    global _session_factory
    if _session_factory is None:
        _session_factory = sessionmaker(bind=get_engine(), autoflush=False, expire_on_commit=False)
    return _session_factory


def get_db() -> Iterator[Session]:
    """FastAPI dependency yielding a session that is always closed."""
    db = get_session_factory()()
    try:
        yield db
    finally:
        db.close()


def init_db(engine: Engine | None = None) -> None:
    """Create all tables that don't exist yet."""
    # Register tables on the metadata
    from core import tables  # noqa: F401

    engine = engine or get_engine()
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ready")


def check_connection(engine: Engine | None = None) -> None:
    """Run a trivial query; raises on failure."""
    engine = engine or get_engine()
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))
