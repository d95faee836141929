"""Chat adapters, one per provider.

Each adapter turns a question into exactly one upstream call and returns the
answer text plus, when the provider has them, native citation URLs. Adapters
hold an injected client; a ``None`` client means the provider has no
credential and every call fails with ``ProviderNotConfigured`` before any
network access.
"""

import asyncio
from dataclasses import dataclass
from typing import Any, Protocol

import anthropic
import httpx
import openai
from google.genai import errors as genai_errors
from google.genai import types

from llm_router.core.errors import (
    EmptyResponse,
    ProviderError,
    ProviderNotConfigured,
    ProviderTimeout,
)
from llm_router.core.logging import get_logger
from llm_router.models.schemas import AIModel

logger = get_logger(__name__)

DEFAULT_MAX_TOKENS = 1024


@dataclass(frozen=True)
class ChatResult:
    """Raw adapter output before normalization."""

    text: str
    native_citations: list[str] | None = None


class ChatAdapter(Protocol):
    provider: AIModel
    label: str

    async def chat_complete(self, question: str) -> ChatResult:
        ...


def _user_message(question: str) -> list[dict[str, str]]:
    return [{"role": "user", "content": question}]


class ClaudeAdapter:
    """Anthropic Messages API."""

    provider = AIModel.CLAUDE
    label = "Claude"
    credential = "Anthropic"

    def __init__(
        self,
        client: anthropic.AsyncAnthropic | None,
        model: str,
        max_tokens: int = DEFAULT_MAX_TOKENS,
    ):
        self.client = client
        self.model = model
        self.max_tokens = max_tokens

    async def chat_complete(self, question: str) -> ChatResult:
        if self.client is None:
            raise ProviderNotConfigured(self.credential)

        try:
            message = await self.client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                messages=_user_message(question),
            )
        except anthropic.APIError as e:
            raise ProviderError(self.label, str(e), getattr(e, "status_code", None)) from e

        text = next(
            (block.text for block in message.content or [] if block.type == "text"),
            "",
        )
        return ChatResult(text=text or "")


class GPT4Adapter:
    """OpenAI Chat Completions API."""

    provider = AIModel.GPT4
    label = "GPT-4"
    credential = "OpenAI"

    def __init__(
        self,
        client: openai.AsyncOpenAI | None,
        model: str,
        max_tokens: int = DEFAULT_MAX_TOKENS,
    ):
        self.client = client
        self.model = model
        self.max_tokens = max_tokens

    async def chat_complete(self, question: str) -> ChatResult:
        if self.client is None:
            raise ProviderNotConfigured(self.credential)

        try:
            completion = await self.client.chat.completions.create(
                model=self.model,
                messages=_user_message(question),
                max_tokens=self.max_tokens,
            )
        except openai.APIError as e:
            raise ProviderError(self.label, str(e), getattr(e, "status_code", None)) from e

        if not completion.choices:
            return ChatResult(text="")
        return ChatResult(text=completion.choices[0].message.content or "")


class GeminiAdapter:
    """Google GenAI generate_content API."""

    provider = AIModel.GEMINI
    label = "Gemini"
    credential = "Google"

    def __init__(self, client: Any | None, model: str, max_tokens: int = DEFAULT_MAX_TOKENS):
        self.client = client  # genai.Client
        self.model = model
        self.max_tokens = max_tokens

    async def chat_complete(self, question: str) -> ChatResult:
        if self.client is None:
            raise ProviderNotConfigured(self.credential)

        try:
            response = await self.client.aio.models.generate_content(
                model=self.model,
                contents=question,
                config=types.GenerateContentConfig(max_output_tokens=self.max_tokens),
            )
        except genai_errors.APIError as e:
            raise ProviderError(self.label, str(e), getattr(e, "code", None)) from e
        except httpx.HTTPError as e:
            raise ProviderError(self.label, str(e)) from e

        return ChatResult(text=response.text or "")


class PerplexityAdapter:
    """Perplexity search-augmented chat, called over plain HTTP.

    Unlike the other adapters this one enforces its own timeout, treats an
    empty answer as a malformed reply, and returns the provider's native
    citation list when present.
    """

    provider = AIModel.PERPLEXITY
    label = "Perplexity"
    credential = "Perplexity"

    def __init__(
        self,
        client: httpx.AsyncClient | None,
        model: str = "sonar",
        max_tokens: int = 150,
        temperature: float = 0.7,
        timeout: float = 10.0,
    ):
        self.client = client
        self.model = model
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.timeout = timeout

    async def aclose(self) -> None:
        if self.client is not None and not self.client.is_closed:
            await self.client.aclose()

    async def chat_complete(self, question: str) -> ChatResult:
        if self.client is None:
            raise ProviderNotConfigured(self.credential)

        payload = {
            "model": self.model,
            "messages": _user_message(question),
            "max_tokens": self.max_tokens,
            "temperature": self.temperature,
        }

        try:
            # httpx applies the timeout per phase; the bound covers the whole call
            async with asyncio.timeout(self.timeout):
                response = await self.client.post(
                    "/chat/completions", json=payload, timeout=self.timeout
                )
        except (httpx.TimeoutException, TimeoutError) as e:
            logger.error("perplexity_request_timed_out", timeout=self.timeout)
            raise ProviderTimeout(self.label, self.timeout) from e
        except httpx.HTTPError as e:
            raise ProviderError(self.label, str(e)) from e

        logger.debug("perplexity_response", status=response.status_code)

        if response.is_error:
            logger.error(
                "perplexity_error_response",
                status=response.status_code,
                body=response.text[:500],
            )
            raise ProviderError(self.label, response.text, response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            raise ProviderError(self.label, f"invalid JSON in response: {e}") from e
        if not isinstance(data, dict):
            raise ProviderError(self.label, "unexpected response payload")

        text = self._answer_text(data)
        if not text:
            logger.error("perplexity_empty_response", keys=sorted(data.keys()))
            raise EmptyResponse(self.label)

        citations = data.get("citations")
        if isinstance(citations, list):
            return ChatResult(text=text, native_citations=[str(url) for url in citations])
        return ChatResult(text=text)

    def _answer_text(self, data: dict[str, Any]) -> str:
        """Content of the first choice; "" when absent, ProviderError when malformed."""
        choices = data.get("choices") or []
        if not isinstance(choices, list):
            raise ProviderError(self.label, "unexpected response payload")
        if not choices:
            return ""

        choice = choices[0]
        if not isinstance(choice, dict):
            raise ProviderError(self.label, "unexpected response payload")
        message = choice.get("message") or {}
        if not isinstance(message, dict):
            raise ProviderError(self.label, "unexpected response payload")

        content = message.get("content")
        if content is None:
            return ""
        if not isinstance(content, str):
            raise ProviderError(self.label, "unexpected response payload")
        return content
