# =============================================================================
# agents/llm_client.py - LLM Provider Clients
# =============================================================================
# Thin wrapper over the two supported providers:
# - Anthropic (Claude) via the anthropic SDK
# - DeepSeek via the openai SDK pointed at DeepSeek's compatible endpoint
#
# Clients are created lazily on first use and reused afterwards.
#
# Usage:
#   from agents.llm_client import complete
#   text = complete(prompt, provider=LLMProvider.ANTHROPIC, max_tokens=2000)
# =============================================================================

import logging

from app.config import settings
from app.exceptions import LLMConfigurationError
from core.models import LLMProvider

logger = logging.getLogger(__name__)

# Lazy-loaded clients
_anthropic_client = None
_deepseek_client = None


def get_anthropic_client():
    """Get or create the Anthropic client (lazy initialization)."""
    global _anthropic_client
    if _anthropic_client is None:
        if not settings.ANTHROPIC_API_KEY:
            raise LLMConfigurationError(LLMProvider.ANTHROPIC.value, "ANTHROPIC_API_KEY")
        from anthropic import Anthropic
        _anthropic_client = Anthropic(api_key=settings.ANTHROPIC_API_KEY)
    return _anthropic_client


def get_deepseek_client():
    """Get or create the DeepSeek client (lazy initialization)."""
    global _deepseek_client
    if _deepseek_client is None:
        if not settings.DEEPSEEK_API_KEY:
            raise LLMConfigurationError(LLMProvider.DEEPSEEK.value, "DEEPSEEK_API_KEY")
        from openai import OpenAI
        _deepseek_client = OpenAI(
            api_key=settings.DEEPSEEK_API_KEY,
            base_url=settings.DEEPSEEK_BASE_URL,
        )
    return _deepseek_client


def resolve_provider(provider: LLMProvider | str | None) -> LLMProvider:
    """Fall back to the configured provider when none is requested."""
    if provider is None:
        return LLMProvider(settings.LLM_PROVIDER)
    return LLMProvider(provider)


def _complete_anthropic(prompt: str, max_tokens: int) -> str:
    client = get_anthropic_client()
    response = client.messages.create(
        model=settings.ANTHROPIC_MODEL,
        max_tokens=max_tokens,
        messages=[{"role": "user", "content": prompt}],
    )
    if not response.content:
        return ""
    block = response.content[0]
    return block.text if block.type == "text" else ""


def _complete_deepseek(prompt: str, max_tokens: int) -> str:
    client = get_deepseek_client()
    response = client.chat.completions.create(
        model=settings.DEEPSEEK_MODEL,
        messages=[{"role": "user", "content": prompt}],
        max_tokens=max_tokens,
        temperature=settings.DEEPSEEK_TEMPERATURE,
    )
    content = response.choices[0].message.content if response.choices else None
    if not content:
        raise ValueError("No response from DeepSeek API")
    return content


def complete(prompt: str, *, provider: LLMProvider, max_tokens: int) -> str:
    """
    Send a single-turn prompt and return the raw text answer.

    Anthropic answers without a text block come back as an empty string;
    an empty DeepSeek answer raises ValueError.

    Raises:
        LLMConfigurationError: If the provider's API key is missing
        Exception: Whatever the provider SDK raises
    """
    logger.info(f"Calling {provider.value} ({len(prompt)} chars, max_tokens={max_tokens})")

    if provider == LLMProvider.DEEPSEEK:
        return _complete_deepseek(prompt, max_tokens)
    return _complete_anthropic(prompt, max_tokens)
