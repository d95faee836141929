from dataclasses import dataclass
from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from llm_router.models.schemas import AIModel


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_ignore_empty=True,
    )

    # App
    app_name: str = "LLM Router API"
    environment: Literal["development", "staging", "production"] = "development"
    cors_origins: str = "*"

    # LLM Providers (absent key = provider disabled)
    anthropic_api_key: str = ""
    openai_api_key: str = ""
    gemini_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("google_api_key", "gemini_api_key"),
    )
    perplexity_api_key: str = ""

    # Per-provider chat models
    claude_model: str = "claude-sonnet-4-20250514"
    gpt4_model: str = "gpt-4o"
    gemini_model: str = "gemini-2.0-flash"
    perplexity_model: str = "sonar"
    perplexity_base_url: str = "https://api.perplexity.ai"

    # Output budgets
    chat_max_tokens: int = 1024
    perplexity_max_tokens: int = 150
    perplexity_temperature: float = 0.7
    perplexity_timeout: float = 10.0  # Seconds; the only provider with an explicit bound

    # Image Generation
    image_gen_model_openai: str = "dall-e-3"
    image_gen_size: str = "1024x1024"
    image_gen_openai_quality: str = "standard"  # standard or hd

    # Preferences storage
    preferences_backend: Literal["dynamodb", "memory"] = "dynamodb"
    dynamodb_table: str = ""
    aws_region: str = "us-east-1"

    # Logging
    log_level: str = "INFO"
    log_format: Literal["json", "console"] = "console"

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@dataclass(frozen=True)
class ProviderConfig:
    """Which providers have credentials, resolved once at startup."""

    chat_providers: frozenset[AIModel]
    image_generation: bool

    @classmethod
    def from_settings(cls, settings: Settings) -> "ProviderConfig":
        keys = {
            AIModel.CLAUDE: settings.anthropic_api_key,
            AIModel.GPT4: settings.openai_api_key,
            AIModel.GEMINI: settings.gemini_api_key,
            AIModel.PERPLEXITY: settings.perplexity_api_key,
        }
        return cls(
            chat_providers=frozenset(model for model, key in keys.items() if key),
            image_generation=bool(settings.openai_api_key),
        )

    def is_enabled(self, model: AIModel) -> bool:
        return model in self.chat_providers


@lru_cache
def get_settings() -> Settings:
    """Get cached settings."""
    return Settings()
