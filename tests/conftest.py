"""Pytest configuration and fixtures."""

import pytest

from llm_router.config import Settings
from tests.doubles import make_settings

PROVIDER_ENV_VARS = (
    "ANTHROPIC_API_KEY",
    "OPENAI_API_KEY",
    "GOOGLE_API_KEY",
    "GEMINI_API_KEY",
    "PERPLEXITY_API_KEY",
)


@pytest.fixture(autouse=True)
def _clean_provider_env(monkeypatch):
    """Keep developer credentials out of the tests."""
    for name in PROVIDER_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def bare_settings() -> Settings:
    """Settings with no provider credentials at all."""
    return make_settings(preferences_backend="memory")


@pytest.fixture
def full_settings() -> Settings:
    return make_settings(
        anthropic_api_key="sk-ant-test",
        openai_api_key="sk-openai-test",
        gemini_api_key="google-test",
        perplexity_api_key="pplx-test",
        preferences_backend="memory",
    )
