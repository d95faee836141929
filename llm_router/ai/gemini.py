"""Shared Gemini client initialization."""

from google import genai

from llm_router.config import Settings


def get_gemini_client(settings: Settings) -> genai.Client | None:
    """Get configured Gemini client, or None when no key is set."""
    if not settings.gemini_api_key:
        return None
    return genai.Client(api_key=settings.gemini_api_key)
