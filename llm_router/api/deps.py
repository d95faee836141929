"""FastAPI dependencies resolving the process-wide services from app state."""

from fastapi import Request

from llm_router.ai.dispatcher import ProviderDispatcher
from llm_router.ai.image import ImageDispatcher
from llm_router.config import ProviderConfig
from llm_router.services.preferences import PreferenceStore


def get_dispatcher(request: Request) -> ProviderDispatcher:
    return request.app.state.dispatcher


def get_image_dispatcher(request: Request) -> ImageDispatcher:
    return request.app.state.image_dispatcher


def get_preference_store(request: Request) -> PreferenceStore:
    return request.app.state.preference_store


def get_provider_config(request: Request) -> ProviderConfig:
    return request.app.state.provider_config
