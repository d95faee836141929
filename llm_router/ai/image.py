"""Image generation service backed by OpenAI DALL-E 3."""

import openai

from llm_router.ai.openai import get_openai_client
from llm_router.config import Settings
from llm_router.core.clock import now_ms
from llm_router.core.errors import (
    EmptyResponse,
    ProviderError,
    ProviderNotConfigured,
    ValidationError,
)
from llm_router.core.logging import get_logger
from llm_router.models.schemas import ImageModel, ImageResponse

logger = get_logger(__name__)


class ImageDispatcher:
    """Generates a single image per prompt and returns its hosted URL."""

    label = "DALL-E 3"

    def __init__(
        self,
        client: openai.AsyncOpenAI | None,
        model: str = "dall-e-3",
        size: str = "1024x1024",
        quality: str = "standard",
    ):
        self.client = client
        self.model = model
        self.size = size
        self.quality = quality

    @property
    def enabled(self) -> bool:
        return self.client is not None

    async def generate_image(self, prompt: str) -> ImageResponse:
        """Generate one image from a text prompt.

        Args:
            prompt: Text prompt for image generation

        Returns:
            ImageResponse carrying the provider's image URL verbatim

        Raises:
            ProviderNotConfigured: no OpenAI key is configured
            EmptyResponse: the provider returned no image or no URL
            ProviderError: any other upstream failure
        """
        if self.client is None:
            raise ProviderNotConfigured("OpenAI")
        if not prompt or not prompt.strip():
            raise ValidationError("prompt must be a non-empty string")

        logger.info(
            "generate_image_request",
            model=self.model,
            size=self.size,
            quality=self.quality,
            prompt=prompt[:50],
        )

        try:
            response = await self.client.images.generate(
                model=self.model,
                prompt=prompt,
                n=1,
                size=self.size,
                quality=self.quality,
                response_format="url",
            )
        except openai.APIError as e:
            logger.error("generate_image_failed", model=self.model, error=str(e))
            raise ProviderError(
                self.label,
                f"Failed to generate image: {e}",
                getattr(e, "status_code", None),
            ) from e

        if response is None or not response.data:
            raise EmptyResponse(self.label, "no image data returned")

        image_url = response.data[0].url
        if not image_url:
            raise EmptyResponse(self.label, "no image URL returned")

        logger.info("generate_image_completed", model=self.model, image_url=image_url)

        return ImageResponse(
            image_url=image_url,
            prompt=prompt,
            model=ImageModel.DALLE,
            timestamp=now_ms(),
        )


def build_image_dispatcher(settings: Settings) -> ImageDispatcher:
    return ImageDispatcher(
        get_openai_client(settings),
        model=settings.image_gen_model_openai,
        size=settings.image_gen_size,
        quality=settings.image_gen_openai_quality,
    )
