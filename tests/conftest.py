# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up test environment variables before any imports
# - In-memory SQLite database per test (the ORM is database-agnostic)
# - FastAPI TestClient wired to that database
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ["DATABASE_URL"] = "sqlite://"
os.environ.setdefault("LLM_PROVIDER", "anthropic")
os.environ.setdefault("ANTHROPIC_API_KEY", "test-anthropic-key")
os.environ.setdefault("DEEPSEEK_API_KEY", "test-deepseek-key")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from agents.simplifier import SimplificationResult
from core.database import get_db, init_db


# =============================================================================
# Database Fixtures
# =============================================================================

@pytest.fixture
def engine():
    """A fresh in-memory database shared across connections."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db(session_factory):
    """A session for service-level tests."""
    session = session_factory()
    yield session
    session.close()


# =============================================================================
# API Fixtures
# =============================================================================

@pytest.fixture
def client(session_factory):
    """
    TestClient using the in-memory database.

    Not used as a context manager so the startup hook (which would try to
    reach DATABASE_URL) doesn't run.
    """
    from app.main import app

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


# =============================================================================
# Sample Data
# =============================================================================

@pytest.fixture
def sample_llm_answer():
    """A well-formed answer in the TITLE/EXPLANATION format."""
    return (
        "TITLE: How Index Funds Work\n\n"
        "EXPLANATION:\n"
        "An index fund is like buying a small slice of every store in a mall.\n\n"
        "If the mall does well overall, so do you."
    )


@pytest.fixture
def sample_result():
    return SimplificationResult(
        title="How Index Funds Work",
        simplified="An index fund is like buying a small slice of every store in a mall.",
    )
