"""Shared Anthropic client initialization."""

from anthropic import AsyncAnthropic

from llm_router.config import Settings


def get_anthropic_client(settings: Settings) -> AsyncAnthropic | None:
    """Get configured async Anthropic client, or None when no key is set."""
    if not settings.anthropic_api_key:
        return None
    return AsyncAnthropic(api_key=settings.anthropic_api_key)
