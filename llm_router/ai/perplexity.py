"""Shared Perplexity HTTP client initialization.

Perplexity has no SDK dependency here; its OpenAI-style chat endpoint is
called directly over httpx.
"""

import httpx

from llm_router.config import Settings


def get_perplexity_client(settings: Settings) -> httpx.AsyncClient | None:
    """Get an httpx client bound to the Perplexity API, or None when no key is set."""
    if not settings.perplexity_api_key:
        return None
    return httpx.AsyncClient(
        base_url=settings.perplexity_base_url,
        headers={
            "Authorization": f"Bearer {settings.perplexity_api_key}",
            "Content-Type": "application/json",
        },
        timeout=httpx.Timeout(settings.perplexity_timeout),
    )
