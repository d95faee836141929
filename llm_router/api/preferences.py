"""Router for per-user default model preferences."""

from fastapi import APIRouter, Depends

from llm_router.api.deps import get_preference_store
from llm_router.core.clock import now_ms
from llm_router.core.errors import NotFound, ValidationError
from llm_router.core.logging import get_logger
from llm_router.models.schemas import MessageResponse, SavePreferenceRequest, UserPreference
from llm_router.services.preferences import PreferenceStore

logger = get_logger(__name__)

router = APIRouter(prefix="/preferences")


@router.get("")
async def get_preferences_without_user() -> None:
    raise ValidationError("userId is required")


@router.get("/{user_id}", response_model=UserPreference)
async def get_preferences(
    user_id: str,
    store: PreferenceStore = Depends(get_preference_store),
) -> UserPreference:
    """Get the most recently saved preference for a user."""
    if not user_id.strip():
        raise ValidationError("userId is required")

    preference = await store.get_latest(user_id)
    if preference is None:
        raise NotFound("User preferences not found")
    return preference


@router.post("", response_model=MessageResponse)
async def save_preferences(
    request: SavePreferenceRequest,
    store: PreferenceStore = Depends(get_preference_store),
) -> MessageResponse:
    """Save a new preference version, stamped with the current time."""
    if not request.user_id or request.default_model is None:
        raise ValidationError("Missing required fields: userId and defaultModel")

    preference = UserPreference(
        user_id=request.user_id,
        default_model=request.default_model,
        timestamp=now_ms(),
    )
    await store.save(preference)
    logger.info(
        "preferences_saved",
        user_id=preference.user_id,
        default_model=preference.default_model.value,
    )
    return MessageResponse(message="Preferences saved successfully")
