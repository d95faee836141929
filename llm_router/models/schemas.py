from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class AIModel(str, Enum):
    """Chat providers a question can be routed to."""

    CLAUDE = "claude"
    GPT4 = "gpt4"
    GEMINI = "gemini"
    PERPLEXITY = "perplexity"


class ImageModel(str, Enum):
    """Image generation models exposed to callers."""

    DALLE = "dalle"


class WireModel(BaseModel):
    """Base for payloads whose JSON keys are camelCase."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)


# Chat Schemas
class Citation(WireModel):
    """A source referenced by a provider answer."""

    title: str
    url: str
    snippet: str | None = None


class AIResponse(WireModel):
    """Normalized answer from any chat provider."""

    text: str
    citations: list[Citation] = Field(default_factory=list)
    model: AIModel
    timestamp: int  # epoch milliseconds


class AskRequest(BaseModel):
    """Request to route a question to a provider.

    ``model`` stays a plain string so unknown selectors reach the dispatcher
    and fail as ``UnsupportedModel`` rather than as a body validation error.
    """

    question: str | None = None
    model: str | None = None
    user_id: str | None = Field(default=None, alias="userId")

    model_config = ConfigDict(populate_by_name=True)


# Image Schemas
class GenerateImageRequest(BaseModel):
    """Request to generate an image from a prompt."""

    prompt: str | None = None


class ImageResponse(WireModel):
    """Normalized image generation result."""

    image_url: str = Field(alias="imageUrl")
    prompt: str
    model: ImageModel
    timestamp: int


# Preference Schemas
class UserPreference(WireModel):
    """A user's default chat provider, versioned by timestamp."""

    user_id: str = Field(alias="userId")
    default_model: AIModel = Field(alias="defaultModel")
    timestamp: int


class SavePreferenceRequest(BaseModel):
    """Request to store a user's default provider."""

    user_id: str | None = Field(default=None, alias="userId")
    default_model: AIModel | None = Field(default=None, alias="defaultModel")

    model_config = ConfigDict(populate_by_name=True)


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    """Error envelope returned for every failed request."""

    error: str
    message: str | None = None
