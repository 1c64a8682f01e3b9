# =============================================================================
# lib/web_fetcher.py - Web Page Text Extraction
# =============================================================================
# Fetches a submitted URL and reduces the HTML to readable text so the LLM
# can explain the page itself instead of only its address.
#
# Usage:
#   from lib.web_fetcher import fetch_page_text
#   text = fetch_page_text("https://example.com/article", timeout=15, max_chars=20000)
# =============================================================================

from __future__ import annotations

import logging
import re

import httpx
from bs4 import BeautifulSoup

from lib.utils import ApplicationError

logger = logging.getLogger(__name__)

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/124.0 Safari/537.36"
)

# Elements that never carry the article text
STRIP_TAGS = ["script", "style", "noscript", "nav", "footer", "header", "svg", "form"]


class WebFetchError(ApplicationError):
    """Raised when a URL can't be fetched or returns an error status."""

    def __init__(self, url: str, error: str):
        super().__init__(
            f"Failed to fetch {url}: {error}",
            code="WEB_FETCH_ERROR",
            suggestion="Check that the URL is public and reachable",
            details={"url": url},
        )


def html_to_text(html: str) -> str:
    """Strip boilerplate elements and collapse whitespace."""
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(STRIP_TAGS):
        tag.decompose()
    return re.sub(r"\s+", " ", soup.get_text(" ")).strip()


def fetch_page_text(url: str, *, timeout: float = 15.0, max_chars: int = 20000) -> str:
    """
    Download a page and return its visible text, truncated to max_chars.

    Raises:
        WebFetchError: On transport errors or non-2xx responses
    """
    try:
        response = httpx.get(
            url,
            timeout=timeout,
            follow_redirects=True,
            headers={"User-Agent": USER_AGENT},
        )
        response.raise_for_status()
    except httpx.HTTPError as e:
        raise WebFetchError(url, str(e)) from e

    content_type = response.headers.get("content-type", "")
    if "html" in content_type or not content_type:
        text = html_to_text(response.text)
    else:
        text = re.sub(r"\s+", " ", response.text).strip()

    logger.info(f"Fetched {url}: {len(text)} characters of text")
    return text[:max_chars]
