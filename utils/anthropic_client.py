"""
Anthropic API client utilities for SEO Analyzer.

This module contains functions for interacting with the Anthropic Claude API.
Transport failures can be retried through MODEL_MAX_ATTEMPTS; the response
content itself is never retried.
"""

import anthropic
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)

from config import settings

# Lazy initialization of Anthropic client
_anthropic_client = None


def get_anthropic_client():
    """Get or create the Anthropic client instance."""
    global _anthropic_client
    if _anthropic_client is None:
        _anthropic_client = anthropic.Anthropic(api_key=settings.ANTHROPIC_API_KEY)
    return _anthropic_client


@retry(
    stop=stop_after_attempt(max(1, settings.MODEL_MAX_ATTEMPTS)),
    wait=wait_exponential(multiplier=1, min=2, max=10),
    retry=retry_if_exception_type(
        (anthropic.APIConnectionError, anthropic.RateLimitError)
    ),
    reraise=True,
)
def call_anthropic_api_with_retry(system_prompt: str, messages: list) -> str:
    """
    Calls Anthropic API and returns the text of the first content block.

    Retries (only when MODEL_MAX_ATTEMPTS > 1) for:
    - APIConnectionError (network issues)
    - RateLimitError (rate limit exceeded)

    Args:
        system_prompt: Fixed system instruction
        messages: Message list, usually a single user message

    Returns:
        Raw response text
    """
    client = get_anthropic_client()

    message = client.messages.create(
        model=settings.ANTHROPIC_MODEL,
        max_tokens=settings.MAX_TOKENS,
        system=system_prompt,
        messages=messages,
    )

    return "".join(
        block.text for block in message.content if getattr(block, "type", None) == "text"
    )
