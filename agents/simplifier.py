# =============================================================================
# agents/simplifier.py - Content Simplification
# =============================================================================
# Turns content into a titled plain-language explanation and answers
# follow-up questions about it.
#
# Flow:
# 1. Detect whether the content is a URL (fetch the page text if so)
# 2. Build the provider's prompt template
# 3. Call the LLM
# 4. Parse the TITLE: / EXPLANATION: sections out of the answer
# =============================================================================

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from app.config import settings
from app.exceptions import LLMConfigurationError, LLMServiceError
from agents.llm_client import complete, resolve_provider
from agents.prompts import (
    build_claude_followup_prompt,
    build_claude_text_prompt,
    build_claude_url_prompt,
    build_deepseek_followup_prompt,
    build_deepseek_prompt,
)
from core.models import LLMProvider
from lib.web_fetcher import WebFetchError, fetch_page_text

logger = logging.getLogger(__name__)

URL_PATTERN = re.compile(r"^https?://.+")
TITLE_PATTERN = re.compile(r"TITLE:\s*(.+?)(?:\n|$)")
EXPLANATION_PATTERN = re.compile(r"EXPLANATION:\s*(.+)", re.DOTALL)

DEFAULT_TITLE = "Simplified Explanation"
UNREADABLE_ANSWER = "Unable to process response"

SIMPLIFY_FAILED = "Failed to process content. Please try again."
FOLLOWUP_FAILED = "Failed to answer follow-up question. Please try again."


@dataclass
class SimplificationResult:
    """Outcome of one simplification call."""
    title: str
    simplified: str
    is_url: bool = False
    original_url: str | None = None


def is_url(content: str) -> bool:
    return bool(URL_PATTERN.match(content.strip()))


def parse_simplified_response(text: str, strict: bool = False) -> tuple[str, str]:
    """
    Extract (title, explanation) from an LLM answer.

    Lenient mode falls back to a generic title and the whole answer.
    Strict mode requires both sections.

    Raises:
        ValueError: In strict mode, when a section is missing
    """
    title_match = TITLE_PATTERN.search(text)
    explanation_match = EXPLANATION_PATTERN.search(text)

    if strict and (not title_match or not explanation_match):
        raise ValueError("Invalid response format from LLM")

    title = title_match.group(1).strip() if title_match else DEFAULT_TITLE
    simplified = explanation_match.group(1).strip() if explanation_match else text
    return title, simplified


def _fetch_for_prompt(url: str) -> str | None:
    """Page text for a URL prompt, or None to let the model work from the address."""
    try:
        return fetch_page_text(
            url,
            timeout=settings.URL_FETCH_TIMEOUT,
            max_chars=settings.URL_MAX_CHARS,
        )
    except WebFetchError as e:
        logger.warning(f"Falling back to URL-only prompt: {e.message}")
        return None


def extract_and_simplify(
    content: str,
    content_type: str | None = None,
    category: str = "other",
    provider: LLMProvider | str | None = None,
) -> SimplificationResult:
    """
    Simplify text or the page behind a URL.

    Args:
        content: Pasted text, extracted file text, or an http(s) URL
        content_type: Origin hint used for logging (e.g. "file:image/png:OCR (Tesseract)")
        category: Topic, included in the DeepSeek prompt
        provider: Override the configured provider

    Returns:
        SimplificationResult with title and explanation

    Raises:
        LLMConfigurationError: If the provider has no API key
        LLMServiceError: If the call fails or the answer can't be parsed
    """
    provider = resolve_provider(provider)
    url = content.strip() if is_url(content) else None
    page_text = _fetch_for_prompt(url) if url else None

    logger.info(
        f"Simplifying {'URL' if url else 'text'} with {provider.value} "
        f"(category={category}, content_type={content_type or 'text'})"
    )

    if provider == LLMProvider.DEEPSEEK:
        prompt = build_deepseek_prompt(page_text or content, category=category, source_url=url)
    elif url:
        prompt = build_claude_url_prompt(url, page_text)
    else:
        prompt = build_claude_text_prompt(content)

    try:
        answer = complete(prompt, provider=provider, max_tokens=settings.SIMPLIFY_MAX_TOKENS)
        title, simplified = parse_simplified_response(
            answer, strict=(provider == LLMProvider.DEEPSEEK)
        )
    except LLMConfigurationError:
        raise
    except Exception as e:
        logger.error(f"{provider.value} simplification error: {e}")
        raise LLMServiceError(SIMPLIFY_FAILED, provider=provider.value, error=str(e)) from e

    return SimplificationResult(
        title=title,
        simplified=simplified,
        is_url=url is not None,
        original_url=url,
    )


def answer_followup(
    context: str,
    question: str,
    provider: LLMProvider | str | None = None,
) -> str:
    """
    Answer a follow-up question given the earlier explanation as context.

    Raises:
        LLMConfigurationError: If the provider has no API key
        LLMServiceError: If the call fails
    """
    provider = resolve_provider(provider)

    if provider == LLMProvider.DEEPSEEK:
        prompt = build_deepseek_followup_prompt(context, question)
    else:
        prompt = build_claude_followup_prompt(context, question)

    try:
        answer = complete(prompt, provider=provider, max_tokens=settings.FOLLOWUP_MAX_TOKENS)
    except LLMConfigurationError:
        raise
    except Exception as e:
        logger.error(f"{provider.value} follow-up error: {e}")
        raise LLMServiceError(FOLLOWUP_FAILED, provider=provider.value, error=str(e)) from e

    return answer.strip() or UNREADABLE_ANSWER
