# =============================================================================
# agents/prompts/ - Prompt Templates
# =============================================================================

from .simplify_prompts import (
    build_claude_followup_prompt,
    build_claude_text_prompt,
    build_claude_url_prompt,
    build_deepseek_followup_prompt,
    build_deepseek_prompt,
)

__all__ = [
    "build_claude_followup_prompt",
    "build_claude_text_prompt",
    "build_claude_url_prompt",
    "build_deepseek_followup_prompt",
    "build_deepseek_prompt",
]
