# =============================================================================
# tests/test_api.py - HTTP API Tests
# =============================================================================
# End-to-end tests through FastAPI's TestClient:
# - /api/simplify and /api/upload (session and saved explanations)
# - /api/followup (session and saved explanations)
# - /api/explanations history, search, bookmark, delete, export
# - Error envelopes and status codes
# - Health endpoints
#
# The LLM is mocked at agents.simplifier.complete; the database is SQLite.
# =============================================================================

import io
from unittest.mock import patch
from uuid import UUID

import pytest
from PIL import Image

from app.config import settings
from core.services import FileService

MISSING_ID = "550e8400-e29b-41d4-a716-446655440000"


@pytest.fixture
def mock_llm(sample_llm_answer):
    with patch("agents.simplifier.complete") as mock_complete:
        mock_complete.return_value = sample_llm_answer
        yield mock_complete


def save(client, **overrides):
    payload = {
        "title": "Index Funds",
        "original_content": "An index fund tracks a market index.",
        "simplified_content": "Like buying a slice of every store in a mall.",
        "category": "money",
    }
    payload.update(overrides)
    response = client.post("/api/explanations", json=payload)
    assert response.status_code == 201
    return response.json()["explanation"]


# =============================================================================
# Simplify Tests
# =============================================================================

class TestSimplifyEndpoint:
    """Tests for POST /api/simplify."""

    def test_session_explanation(self, client, mock_llm):
        response = client.post(
            "/api/simplify",
            json={"content": "An index fund tracks a market index.", "category": "money"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        explanation = body["explanation"]
        assert explanation["id"].startswith("session-")
        assert explanation["title"] == "How Index Funds Work"
        assert explanation["category"] == "money"
        assert explanation["source_url"] is None
        assert explanation["followups"] == []

        # Not persisted
        assert client.get("/api/explanations").json()["total"] == 0

    def test_saved_explanation(self, client, mock_llm):
        response = client.post(
            "/api/simplify",
            json={"content": "Some text to explain", "category": "tech", "save_to_history": True},
        )

        explanation = response.json()["explanation"]
        UUID(explanation["id"])

        listed = client.get("/api/explanations").json()
        assert listed["total"] == 1
        assert listed["explanations"][0]["id"] == explanation["id"]

    @patch("agents.simplifier.fetch_page_text")
    def test_url_sets_source_url(self, mock_fetch, client, mock_llm):
        mock_fetch.return_value = "Article body"

        response = client.post(
            "/api/simplify",
            json={"content": "https://example.com/article", "category": "ai"},
        )

        assert response.json()["explanation"]["source_url"] == "https://example.com/article"

    def test_missing_category(self, client, mock_llm):
        response = client.post("/api/simplify", json={"content": "text"})

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"
        mock_llm.assert_not_called()

    def test_empty_content(self, client, mock_llm):
        response = client.post("/api/simplify", json={"content": "", "category": "tech"})
        assert response.status_code == 400

    def test_llm_failure(self, client, mock_llm):
        mock_llm.side_effect = RuntimeError("overloaded")

        response = client.post("/api/simplify", json={"content": "text", "category": "tech"})

        assert response.status_code == 502
        body = response.json()
        assert body["success"] is False
        assert body["code"] == "LLM_ERROR"
        assert body["detail"] == "Failed to process content. Please try again."


# =============================================================================
# Upload Tests
# =============================================================================

class TestUploadEndpoint:
    """Tests for POST /api/upload."""

    def test_text_file(self, client, mock_llm):
        content = b"Compound interest means earning interest on your interest."

        response = client.post(
            "/api/upload",
            files={"file": ("notes.txt", content, "text/plain")},
            data={"category": "money"},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["explanation"]["source_url"] == "file:notes.txt"
        assert body["explanation"]["original_content"].startswith("Compound interest")
        assert body["file_info"] == {
            "original_name": "notes.txt",
            "size": len(content),
            "processing_method": "Basic text extraction",
        }

    def test_csv_saved_to_history(self, client, mock_llm):
        response = client.post(
            "/api/upload",
            files={"file": ("budget.csv", b"item,cost\nRent,1200\nFood,400\n", "text/csv")},
            data={"category": "business", "save_to_history": "true"},
        )

        assert response.status_code == 200
        assert response.json()["file_info"]["processing_method"] == "Spreadsheet Parser (pandas)"
        assert "Headers: item, cost" in mock_llm.call_args.args[0]

        search = client.post("/api/explanations/search", json={"content_type": "file"}).json()
        assert search["total"] == 1

    @patch("core.services.file_service.ocr_image_bytes")
    def test_image(self, mock_ocr, client, mock_llm):
        mock_ocr.return_value = "Receipt total 42 dollars"
        buffer = io.BytesIO()
        Image.new("RGB", (20, 20), "white").save(buffer, format="PNG")

        response = client.post(
            "/api/upload",
            files={"file": ("receipt.png", buffer.getvalue(), "image/png")},
        )

        assert response.status_code == 200
        assert response.json()["file_info"]["processing_method"] == "OCR (Tesseract)"
        assert response.json()["explanation"]["category"] == "other"

    def test_no_file(self, client, mock_llm):
        response = client.post("/api/upload", data={"category": "tech"})

        assert response.status_code == 400
        assert response.json()["code"] == "NO_FILE"

    def test_unsupported_type(self, client, mock_llm):
        response = client.post(
            "/api/upload",
            files={"file": ("archive.zip", b"PK\x03\x04", "application/zip")},
        )

        assert response.status_code == 400
        assert response.json()["code"] == "UNSUPPORTED_FILE_TYPE"
        mock_llm.assert_not_called()

    def test_empty_file(self, client, mock_llm):
        response = client.post(
            "/api/upload",
            files={"file": ("empty.txt", b"   ", "text/plain")},
        )

        assert response.status_code == 400
        assert response.json()["code"] == "EMPTY_CONTENT"

    def test_csv_by_mime_type(self, client, mock_llm):
        response = client.post(
            "/api/upload",
            files={"file": ("budget.txt", b"item,cost\nRent,1200\nFood,400\n", "text/csv")},
        )

        assert response.status_code == 200
        assert response.json()["file_info"]["processing_method"] == "Spreadsheet Parser (pandas)"
        assert "Headers: item, cost" in mock_llm.call_args.args[0]

    def test_too_large_rejected_before_read(self, client, mock_llm):
        with patch.object(settings, "MAX_UPLOAD_SIZE_MB", 1), patch.object(
            FileService, "validate_upload", wraps=FileService.validate_upload
        ) as mock_validate:
            response = client.post(
                "/api/upload",
                files={"file": ("big.txt", b"a" * (2 * 1024 * 1024), "text/plain")},
            )

        assert response.status_code == 413
        assert response.json()["code"] == "FILE_TOO_LARGE"
        # Declared size is checked first; the body is never processed
        assert mock_validate.call_count == 1
        mock_llm.assert_not_called()


# =============================================================================
# Follow-up Tests
# =============================================================================

class TestFollowupEndpoint:
    """Tests for POST /api/followup."""

    def test_session_followup(self, client, mock_llm):
        mock_llm.return_value = "Because fees are low."

        response = client.post(
            "/api/followup",
            json={
                "explanation_id": "session-1718000000000",
                "question": "Why are they popular?",
                "original_content": "Index funds track a market index.",
            },
        )

        assert response.status_code == 200
        body = response.json()
        assert body["saved"] is False
        assert body["followup"]["id"].startswith("followup-")
        assert body["followup"]["explanation_id"] == "session-1718000000000"
        assert body["followup"]["answer"] == "Because fees are low."
        assert "Index funds track a market index." in mock_llm.call_args.args[0]

    def test_saved_followup_uses_stored_explanation(self, client, mock_llm):
        explanation = save(client)
        mock_llm.return_value = "Usually under 0.1 percent."

        response = client.post(
            "/api/followup",
            json={"explanation_id": explanation["id"], "question": "What are the fees?"},
        )

        body = response.json()
        assert body["saved"] is True
        UUID(body["followup"]["id"])
        assert explanation["simplified_content"] in mock_llm.call_args.args[0]

        stored = client.get(f"/api/explanations/{explanation['id']}").json()["explanation"]
        assert [f["question"] for f in stored["followups"]] == ["What are the fees?"]

        followups = client.get(f"/api/explanations/{explanation['id']}/followups").json()
        assert followups["success"] is True
        assert followups["total"] == 1
        assert followups["followups"][0]["answer"] == "Usually under 0.1 percent."

    def test_empty_question(self, client, mock_llm):
        response = client.post(
            "/api/followup",
            json={"explanation_id": "session-1", "question": ""},
        )
        assert response.status_code == 400


# =============================================================================
# History Tests
# =============================================================================

class TestExplanationsEndpoints:
    """Tests for /api/explanations."""

    def test_save_and_get(self, client):
        explanation = save(client)

        response = client.get(f"/api/explanations/{explanation['id']}")

        assert response.status_code == 200
        assert response.json()["explanation"]["title"] == "Index Funds"

    def test_get_missing(self, client):
        response = client.get(f"/api/explanations/{MISSING_ID}")

        assert response.status_code == 404
        body = response.json()
        assert body["code"] == "EXPLANATION_NOT_FOUND"
        assert "suggestion" in body

    def test_get_malformed_id(self, client):
        assert client.get("/api/explanations/not-a-uuid").status_code == 404

    def test_list_by_category(self, client):
        save(client, title="Money", category="money")
        save(client, title="AI", category="ai")

        body = client.get("/api/explanations", params={"category": "ai"}).json()

        assert body["total"] == 1
        assert body["explanations"][0]["title"] == "AI"

    def test_list_invalid_category(self, client):
        assert client.get("/api/explanations", params={"category": "sports"}).status_code == 400

    def test_search(self, client):
        save(client, title="Index Funds")
        save(client, title="Neural Networks", category="ai", simplified_content="Layers of math.")

        body = client.post("/api/explanations/search", json={"query": "neural"}).json()

        assert [e["title"] for e in body["explanations"]] == ["Neural Networks"]

    def test_bookmark_toggle(self, client):
        explanation = save(client)
        url = f"/api/explanations/{explanation['id']}/bookmark"

        assert client.post(url).json()["explanation"]["is_bookmarked"] is True

        bookmarked = client.post("/api/explanations/search", json={"bookmarked_only": True}).json()
        assert bookmarked["total"] == 1

        assert client.post(url).json()["explanation"]["is_bookmarked"] is False

    def test_bookmark_missing(self, client):
        assert client.post(f"/api/explanations/{MISSING_ID}/bookmark").status_code == 404

    def test_delete(self, client):
        explanation = save(client)

        response = client.delete(f"/api/explanations/{explanation['id']}")

        assert response.status_code == 200
        assert response.json()["success"] is True
        assert client.get(f"/api/explanations/{explanation['id']}").status_code == 404

    def test_delete_missing(self, client):
        assert client.delete(f"/api/explanations/{MISSING_ID}").status_code == 404

    def test_export(self, client):
        explanation = save(client, title="Index Funds")

        response = client.get(f"/api/explanations/{explanation['id']}/export")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert response.headers["content-disposition"] == 'attachment; filename="index_funds.txt"'
        assert response.text.startswith("Index Funds\n===========\n")

    def test_export_history(self, client):
        save(client, title="Index Funds", category="money")
        save(client, title="Neural Networks", category="ai", source_url="https://example.com/nn")

        response = client.get("/api/explanations/export")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        disposition = response.headers["content-disposition"]
        assert disposition.startswith('attachment; filename="content_simplifier_export_')
        assert disposition.endswith('.txt"')
        assert response.text.startswith("Content Simplifier Export\n")
        assert "Total Explanations: 2" in response.text
        assert "Index Funds" in response.text
        assert "Source: https://example.com/nn" in response.text

    def test_export_history_filtered(self, client):
        save(client, title="Index Funds", category="money")
        save(client, title="Neural Networks", category="ai")

        response = client.get("/api/explanations/export", params={"category": "ai"})

        assert "Total Explanations: 1" in response.text
        assert "Neural Networks" in response.text
        assert "Index Funds" not in response.text

    def test_export_history_empty(self, client):
        response = client.get("/api/explanations/export")

        assert response.status_code == 200
        assert "Total Explanations: 0" in response.text


# =============================================================================
# Health Tests
# =============================================================================

class TestHealthEndpoints:
    """Tests for health and root endpoints."""

    def test_health(self, client):
        body = client.get("/api/health").json()

        assert body["status"] == "healthy"
        assert body["llm_provider"] in ("anthropic", "deepseek")

    def test_ready(self, client):
        body = client.get("/api/health/ready").json()
        assert body["checks"]["database"] == "healthy"

    def test_live(self, client):
        assert client.get("/api/health/live").json()["status"] == "alive"

    def test_root(self, client):
        body = client.get("/").json()

        assert body["name"] == "Content Simplifier API"
        assert body["health"] == "/api/health"
