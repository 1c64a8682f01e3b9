# =============================================================================
# agents/prompts/simplify_prompts.py - Simplification Prompt Templates
# =============================================================================
# Fixed prompt templates for both providers.
#
# Every simplification prompt asks for the same two-section answer:
#
#   TITLE: <title>
#
#   EXPLANATION:
#   <plain-language explanation>
#
# which agents/simplifier.py parses back out.
#
# Usage:
#   prompt = build_claude_text_prompt(content)
#   prompt = build_deepseek_prompt(content, category="money", source_url=None)
# =============================================================================

from __future__ import annotations

# =============================================================================
# Shared Pieces
# =============================================================================

STYLE_INSTRUCTIONS = """Explain the following content in simple terms and deep detail with easy examples and analogies. Provide clean, readable text without markdown formatting.

Use natural paragraphs and conversational language. Make complex concepts accessible to everyone through real-world comparisons."""

RESPONSE_FORMAT = """Format your response as:
TITLE: [A clear, descriptive title for the content]

EXPLANATION:
[Your simplified explanation here]"""


# =============================================================================
# Claude Prompts
# =============================================================================

def build_claude_text_prompt(content: str) -> str:
    """Prompt for pasted text, extracted file text or spreadsheet summaries."""
    return f"""{STYLE_INSTRUCTIONS}

Content to explain:
{content}

{RESPONSE_FORMAT}"""


def build_claude_url_prompt(url: str, page_text: str | None = None) -> str:
    """
    Prompt for a submitted URL.

    When the page could be fetched its text is included; otherwise the model
    only gets the address.
    """
    page_section = f"\n\nPage content:\n{page_text}" if page_text else ""
    return f"""I need you to browse and extract content from: {url}{page_section}

Then explain the content in simple terms and deep detail with easy examples and analogies. Provide clean, readable text without markdown formatting.

Use natural paragraphs and conversational language. Make complex concepts accessible to everyone through real-world comparisons.

{RESPONSE_FORMAT}"""


def build_claude_followup_prompt(context: str, question: str) -> str:
    return f"""Based on this previous explanation:

{context}

Answer this follow-up question: {question}

Use simple language and examples. Provide clean, readable text without markdown formatting. Be conversational and helpful."""


# =============================================================================
# DeepSeek Prompts
# =============================================================================

def build_deepseek_prompt(content: str, category: str, source_url: str | None = None) -> str:
    """Single prompt used for text and URL content alike."""
    source_line = f"Source URL: {source_url}" if source_url else ""
    return f"""You are a helpful AI assistant that specializes in breaking down complex content into simple, easy-to-understand explanations.

Your task is to:
1. Create a clear, descriptive title for this content
2. Explain the content in simple terms using everyday language
3. Use real-world analogies and examples when helpful
4. Break down complex concepts into digestible parts
5. Focus on practical understanding

Content Category: {category}
{source_line}

Content to simplify:
{content}

Please provide your response in the following format:
TITLE: [Your clear, descriptive title]
EXPLANATION: [Your simplified explanation in plain text - no markdown formatting]

Important: Use only plain text in your explanation. No bullet points, asterisks, or markdown formatting."""


def build_deepseek_followup_prompt(context: str, question: str) -> str:
    return f"""You are helping a user understand content better by answering their follow-up questions.

Original explanation context:
{context}

User's follow-up question: {question}

Please provide a clear, helpful answer in plain text (no markdown formatting). Keep your response focused and easy to understand."""
