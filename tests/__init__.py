# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Content Simplifier API:
# - test_models.py: Unit tests for Pydantic model validation
# - test_simplifier.py: Prompting, response parsing, LLM clients (mocked)
# - test_file_service.py: Upload validation and text extraction
# - test_web_fetcher.py: URL fetching and HTML reduction
# - test_explanation_service.py: History storage, search and export
# - test_api.py: Integration tests for API endpoints
#
# Run tests with: pytest
# =============================================================================
