# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# Provides health check endpoints for monitoring and load balancers.
# =============================================================================

import logging
from datetime import datetime, timezone

from fastapi import APIRouter
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError

from app.config import settings
from core.database import check_connection

logger = logging.getLogger(__name__)

router = APIRouter()

API_VERSION = "1.0.0"


# =============================================================================
# Response Models
# =============================================================================

class HealthResponse(BaseModel):
    """Basic health check response."""
    status: str
    timestamp: str
    environment: str
    version: str
    llm_provider: str


class ChecksResponse(BaseModel):
    """Individual service checks."""
    database: str
    llm: str


class ReadinessResponse(BaseModel):
    """Readiness check response."""
    status: str
    checks: ChecksResponse
    timestamp: str


class LivenessResponse(BaseModel):
    """Liveness check response."""
    status: str
    timestamp: str


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _llm_status() -> str:
    if settings.LLM_PROVIDER == "deepseek":
        configured = bool(settings.DEEPSEEK_API_KEY)
    else:
        configured = bool(settings.ANTHROPIC_API_KEY)
    return "configured" if configured else "missing api key"


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint.

    Returns basic health status for load balancers and monitoring.
    """
    return HealthResponse(
        status="healthy",
        timestamp=_now(),
        environment=settings.ENVIRONMENT,
        version=API_VERSION,
        llm_provider=settings.LLM_PROVIDER,
    )


@router.get("/health/ready", response_model=ReadinessResponse)
def readiness_check():
    """
    Readiness check endpoint.

    Checks database connectivity and whether the default LLM provider
    has an API key. The stateless endpoints keep working while the
    history database is down, so a failed check reports "degraded".
    """
    checks = ChecksResponse(database="unknown", llm=_llm_status())

    try:
        check_connection()
        checks.database = "healthy"
    except SQLAlchemyError as e:
        logger.warning(f"Database readiness check failed: {e}")
        checks.database = f"unhealthy: {str(e)[:50]}"

    all_healthy = checks.database == "healthy" and checks.llm == "configured"

    return ReadinessResponse(
        status="ready" if all_healthy else "degraded",
        checks=checks,
        timestamp=_now(),
    )


@router.get("/health/live", response_model=LivenessResponse)
async def liveness_check():
    """
    Liveness check endpoint.

    Returns whether the service process is alive.
    """
    return LivenessResponse(status="alive", timestamp=_now())
