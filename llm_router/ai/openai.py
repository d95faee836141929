"""Shared OpenAI client initialization."""

from openai import AsyncOpenAI

from llm_router.config import Settings


def get_openai_client(settings: Settings) -> AsyncOpenAI | None:
    """Get configured async OpenAI client, or None when no key is set.

    The same client serves chat completions and image generation.
    """
    if not settings.openai_api_key:
        return None
    return AsyncOpenAI(api_key=settings.openai_api_key)
