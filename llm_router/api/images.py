"""Image generation endpoint."""

from fastapi import APIRouter, Depends

from llm_router.ai.image import ImageDispatcher
from llm_router.api.deps import get_image_dispatcher
from llm_router.core.errors import ValidationError
from llm_router.models.schemas import GenerateImageRequest, ImageResponse

router = APIRouter()


@router.post("/generate-image", response_model=ImageResponse)
async def generate_image(
    request: GenerateImageRequest,
    image_dispatcher: ImageDispatcher = Depends(get_image_dispatcher),
) -> ImageResponse:
    if not request.prompt:
        raise ValidationError("Missing required field: prompt")
    return await image_dispatcher.generate_image(request.prompt)
