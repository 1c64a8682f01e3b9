# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Content Simplifier API.
# It configures the FastAPI application with middleware, routers, and handlers.
#
# Usage:
#   uvicorn app.main:app --reload
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.config import settings
from app.exceptions import (
    SimplifierException,
    simplifier_exception_handler,
    validation_exception_handler,
)
from app.routers import explanations, followup, health, simplify, upload
from app.routers.health import API_VERSION
from core.database import init_db

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Creates the history tables on startup. When the database is down the
    API still starts: simplify, upload and session follow-ups don't need it.
    """
    logger.info(f"Starting Content Simplifier API in {settings.ENVIRONMENT} mode")
    logger.info(f"Default LLM provider: {settings.LLM_PROVIDER}")
    logger.info(f"CORS origins: {settings.cors_origins_list}")

    try:
        init_db()
    except SQLAlchemyError:
        logger.exception("Could not initialize the history database; history endpoints will fail")

    yield

    logger.info("Shutting down Content Simplifier API")


# Create FastAPI application
app = FastAPI(
    title="Content Simplifier API",
    description="""
## Plain-Language Explanations

Paste text, a link, or upload a document and get back a short title and
an explanation a non-expert can follow. Ask follow-up questions, and keep
the explanations you want in a searchable history.

### Quick Start

```bash
# Explain some text
curl -X POST http://localhost:8000/api/simplify \\
  -H "Content-Type: application/json" \\
  -d '{"content": "Quantitative easing is...", "category": "money"}'

# Explain a document and save it
curl -X POST http://localhost:8000/api/upload \\
  -F "file=@report.pdf" -F "category=business" -F "save_to_history=true"
```
""",
    version=API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {
            "name": "Simplify",
            "description": "Explain pasted text or a URL",
        },
        {
            "name": "Upload",
            "description": "Explain PDFs, text files, images and spreadsheets",
        },
        {
            "name": "Follow-up",
            "description": "Ask questions about an explanation",
        },
        {
            "name": "Explanations",
            "description": "Saved history, search, bookmarks and export",
        },
        {
            "name": "Health",
            "description": "API health and readiness checks",
        },
    ],
)


# =============================================================================
# Middleware
# =============================================================================

# CORS middleware - allows cross-origin requests
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list if settings.is_production else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

@app.exception_handler(SimplifierException)
async def handle_simplifier_exception(request: Request, exc: SimplifierException):
    """Handle custom Content Simplifier exceptions."""
    if exc.status_code >= 500:
        logger.error(f"{exc.code}: {exc.message} {exc.details}")
    return await simplifier_exception_handler(request, exc)


@app.exception_handler(RequestValidationError)
async def handle_validation_exception(request: Request, exc: RequestValidationError):
    """Handle malformed request payloads."""
    return await validation_exception_handler(request, exc)


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "detail": "An unexpected error occurred",
            "code": "INTERNAL_ERROR",
        }
    )


# =============================================================================
# Routers
# =============================================================================

# Health check endpoints
app.include_router(
    health.router,
    prefix="/api",
    tags=["Health"]
)

# Text and URL simplification
app.include_router(
    simplify.router,
    prefix="/api",
    tags=["Simplify"]
)

# File upload
app.include_router(
    upload.router,
    prefix="/api",
    tags=["Upload"]
)

# Follow-up questions
app.include_router(
    followup.router,
    prefix="/api",
    tags=["Follow-up"]
)

# Saved history
app.include_router(
    explanations.router,
    prefix="/api/explanations",
    tags=["Explanations"]
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "Content Simplifier API",
        "version": API_VERSION,
        "docs": "/docs",
        "health": "/api/health",
    }
