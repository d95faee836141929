"""Ask endpoint: route a question to one chat provider."""

from fastapi import APIRouter, Depends

from llm_router.ai.dispatcher import ProviderDispatcher
from llm_router.api.deps import get_dispatcher
from llm_router.core.errors import ValidationError
from llm_router.core.logging import get_logger
from llm_router.models.schemas import AIResponse, AskRequest

logger = get_logger(__name__)

router = APIRouter()


@router.post("/ask", response_model=AIResponse, response_model_exclude_none=True)
async def ask(
    request: AskRequest,
    dispatcher: ProviderDispatcher = Depends(get_dispatcher),
) -> AIResponse:
    """Forward the question to the selected provider and return its normalized answer."""
    if not request.question or not request.model:
        raise ValidationError("Missing required fields: question and model")

    logger.info(
        "ask_request",
        model=request.model,
        user_id=request.user_id,
        question=request.question[:50],
    )
    return await dispatcher.ask(request.question, request.model)
