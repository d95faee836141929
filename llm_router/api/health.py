"""Health and provider discovery endpoints."""

from fastapi import APIRouter, Depends

from llm_router.api.deps import get_provider_config
from llm_router.config import ProviderConfig
from llm_router.models.schemas import AIModel

router = APIRouter()

PROVIDER_NAMES = {
    AIModel.CLAUDE: "Claude",
    AIModel.GPT4: "GPT-4",
    AIModel.GEMINI: "Gemini",
    AIModel.PERPLEXITY: "Perplexity",
}


@router.get("/health")
async def health() -> dict:
    return {"status": "ok"}


@router.get("/providers")
async def list_providers(config: ProviderConfig = Depends(get_provider_config)) -> dict:
    """List chat providers and whether each has a credential configured."""
    return {
        "providers": [
            {"id": model.value, "name": PROVIDER_NAMES[model], "available": config.is_enabled(model)}
            for model in AIModel
        ],
        "image_generation": config.image_generation,
    }
