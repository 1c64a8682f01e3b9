# =============================================================================
# tests/test_web_fetcher.py - URL Fetching Tests
# =============================================================================
# Tests for lib/web_fetcher.py with httpx mocked out.
# =============================================================================

from unittest.mock import patch

import httpx
import pytest

from lib.web_fetcher import WebFetchError, fetch_page_text, html_to_text

ARTICLE_HTML = """
<html>
  <head><title>Article</title><style>body { color: red; }</style></head>
  <body>
    <nav>Home | About</nav>
    <h1>What is inflation?</h1>
    <p>Prices   go up
       over time.</p>
    <script>trackVisitor();</script>
    <footer>Copyright</footer>
  </body>
</html>
"""


def make_response(text, status_code=200, content_type="text/html; charset=utf-8"):
    request = httpx.Request("GET", "https://example.com/article")
    return httpx.Response(
        status_code,
        text=text,
        headers={"content-type": content_type},
        request=request,
    )


class TestHtmlToText:
    """Test HTML reduction."""

    def test_strips_boilerplate(self):
        text = html_to_text(ARTICLE_HTML)

        assert "What is inflation?" in text
        assert "Prices go up over time." in text
        assert "trackVisitor" not in text
        assert "color: red" not in text
        assert "Home | About" not in text
        assert "Copyright" not in text


class TestFetchPageText:
    """Test page fetching."""

    @patch("lib.web_fetcher.httpx.get")
    def test_html_page(self, mock_get):
        mock_get.return_value = make_response(ARTICLE_HTML)

        text = fetch_page_text("https://example.com/article", timeout=5, max_chars=1000)

        assert "What is inflation?" in text
        assert mock_get.call_args.kwargs["timeout"] == 5
        assert mock_get.call_args.kwargs["follow_redirects"] is True

    @patch("lib.web_fetcher.httpx.get")
    def test_truncates(self, mock_get):
        mock_get.return_value = make_response("word " * 1000, content_type="text/plain")

        text = fetch_page_text("https://example.com/article", max_chars=100)

        assert len(text) == 100

    @patch("lib.web_fetcher.httpx.get")
    def test_error_status(self, mock_get):
        mock_get.return_value = make_response("Not found", status_code=404)

        with pytest.raises(WebFetchError) as exc_info:
            fetch_page_text("https://example.com/article")

        assert exc_info.value.code == "WEB_FETCH_ERROR"
        assert exc_info.value.details["url"] == "https://example.com/article"

    @patch("lib.web_fetcher.httpx.get")
    def test_transport_error(self, mock_get):
        mock_get.side_effect = httpx.ConnectTimeout("timed out")

        with pytest.raises(WebFetchError, match="timed out"):
            fetch_page_text("https://example.com/article")
