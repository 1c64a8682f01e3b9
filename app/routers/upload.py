# =============================================================================
# app/routers/upload.py - File Upload Pipeline
# =============================================================================
# Handles document uploads: validation, text extraction, simplification.
#
# Endpoints:
# - POST /upload: Explain an uploaded PDF, text, image or spreadsheet
# =============================================================================

import logging
from typing import Annotated

from fastapi import APIRouter, File, Form, UploadFile

from agents.simplifier import extract_and_simplify
from app.dependencies import DbDep
from app.exceptions import NoFileUploadedError
from app.routers.simplify import build_explanation
from core.models import Category, ExplanationResponse, FileInfo, LLMProvider
from core.services import FileService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/upload", response_model=ExplanationResponse)
def upload_file(
    db: DbDep,
    file: Annotated[UploadFile | None, File(description="Document to explain")] = None,
    category: Annotated[Category, Form()] = Category.OTHER,
    save_to_history: Annotated[bool, Form()] = False,
    provider: Annotated[LLMProvider | None, Form()] = None,
):
    """
    Upload a document and explain it.

    This endpoint:
    1. Validates the file (type, size)
    2. Extracts text (OCR for images, summary for spreadsheets, text layer for PDFs)
    3. Sends the text to the LLM
    4. Optionally saves the explanation to history

    Returns the explanation plus file_info describing how the text was extracted.
    """
    if file is None or not file.filename:
        raise NoFileUploadedError()

    filename = file.filename
    mime_type = file.content_type or "application/octet-stream"

    # Reject oversized uploads before pulling them into memory
    if file.size is not None:
        FileService.validate_upload(filename, mime_type, file.size)

    data = file.file.read()
    FileService.validate_upload(filename, mime_type, len(data))
    logger.info(f"Processing upload: {filename} ({mime_type}, {len(data)} bytes)")

    processed = FileService.process_file(data, filename, mime_type)

    result = extract_and_simplify(
        processed.content,
        content_type=f"file:{mime_type}:{processed.processing_method}",
        category=category.value,
        provider=provider,
    )

    explanation = build_explanation(
        db,
        result,
        original_content=processed.content,
        category=category.value,
        source_url=f"file:{filename}",
        save_to_history=save_to_history,
    )

    return ExplanationResponse(
        explanation=explanation,
        file_info=FileInfo(
            original_name=filename,
            size=len(data),
            processing_method=processed.processing_method,
        ),
    )
