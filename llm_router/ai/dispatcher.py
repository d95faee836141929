"""Routes a question to the selected chat provider and normalizes the reply."""

from collections.abc import Mapping

from llm_router.ai.anthropic import get_anthropic_client
from llm_router.ai.citations import citations_from_urls, extract_citations
from llm_router.ai.gemini import get_gemini_client
from llm_router.ai.openai import get_openai_client
from llm_router.ai.perplexity import get_perplexity_client
from llm_router.ai.providers import (
    ChatAdapter,
    ClaudeAdapter,
    GeminiAdapter,
    GPT4Adapter,
    PerplexityAdapter,
)
from llm_router.config import ProviderConfig, Settings
from llm_router.core.clock import now_ms
from llm_router.core.errors import UnsupportedModel, ValidationError
from llm_router.core.logging import get_logger, log_timing
from llm_router.models.schemas import AIModel, AIResponse

logger = get_logger(__name__)


def resolve_model(model: AIModel | str) -> AIModel:
    """Coerce a caller-supplied selector, rejecting unknown values."""
    if isinstance(model, AIModel):
        return model
    try:
        return AIModel(model)
    except ValueError:
        raise UnsupportedModel(model) from None


class ProviderDispatcher:
    """Single-call dispatch from selector to chat adapter.

    There is no fallback between providers: whatever the selected adapter
    raises reaches the caller unchanged.
    """

    def __init__(self, adapters: Mapping[AIModel, ChatAdapter]):
        self._adapters = dict(adapters)

    @property
    def providers(self) -> list[AIModel]:
        return list(self._adapters)

    async def ask(self, question: str, model: AIModel | str) -> AIResponse:
        selector = resolve_model(model)
        adapter = self._adapters.get(selector)
        if adapter is None:
            raise UnsupportedModel(selector.value)
        if not question or not question.strip():
            raise ValidationError("question must be a non-empty string")

        with log_timing(logger, "provider_request", provider=selector.value):
            result = await adapter.chat_complete(question)

        if result.native_citations is not None:
            citations = citations_from_urls(result.native_citations)
        else:
            citations = extract_citations(result.text)

        return AIResponse(
            text=result.text,
            citations=citations,
            model=selector,
            timestamp=now_ms(),
        )

    async def aclose(self) -> None:
        """Release adapters that own an HTTP connection pool."""
        for adapter in self._adapters.values():
            close = getattr(adapter, "aclose", None)
            if close is not None:
                await close()


def build_adapters(settings: Settings, config: ProviderConfig) -> dict[AIModel, ChatAdapter]:
    """Construct one adapter per provider; disabled providers get no client."""

    def enabled(model: AIModel, factory):
        return factory(settings) if config.is_enabled(model) else None

    return {
        AIModel.CLAUDE: ClaudeAdapter(
            enabled(AIModel.CLAUDE, get_anthropic_client),
            model=settings.claude_model,
            max_tokens=settings.chat_max_tokens,
        ),
        AIModel.GPT4: GPT4Adapter(
            enabled(AIModel.GPT4, get_openai_client),
            model=settings.gpt4_model,
            max_tokens=settings.chat_max_tokens,
        ),
        AIModel.GEMINI: GeminiAdapter(
            enabled(AIModel.GEMINI, get_gemini_client),
            model=settings.gemini_model,
            max_tokens=settings.chat_max_tokens,
        ),
        AIModel.PERPLEXITY: PerplexityAdapter(
            enabled(AIModel.PERPLEXITY, get_perplexity_client),
            model=settings.perplexity_model,
            max_tokens=settings.perplexity_max_tokens,
            temperature=settings.perplexity_temperature,
            timeout=settings.perplexity_timeout,
        ),
    }


def build_dispatcher(settings: Settings, config: ProviderConfig | None = None) -> ProviderDispatcher:
    config = config or ProviderConfig.from_settings(settings)
    logger.info(
        "provider_dispatcher_ready",
        enabled=sorted(model.value for model in config.chat_providers),
    )
    return ProviderDispatcher(build_adapters(settings, config))
