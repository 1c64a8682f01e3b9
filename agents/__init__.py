# =============================================================================
# agents/ - LLM Integration
# =============================================================================
# This package talks to the language models:
# - llm_client.py: Anthropic and DeepSeek clients behind one complete() call
# - simplifier.py: Builds prompts, calls the model, parses TITLE/EXPLANATION
#
# Prompts:
# - prompts/simplify_prompts.py: Simplification and follow-up prompts
# =============================================================================

from agents.simplifier import (
    SimplificationResult,
    answer_followup,
    extract_and_simplify,
    is_url,
    parse_simplified_response,
)

__all__ = [
    "SimplificationResult",
    "answer_followup",
    "extract_and_simplify",
    "is_url",
    "parse_simplified_response",
]
