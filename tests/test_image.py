"""Tests for the DALL-E image dispatcher."""

from unittest.mock import patch

import httpx
import openai
import pytest

from llm_router.ai.image import ImageDispatcher, build_image_dispatcher
from llm_router.core.errors import (
    EmptyResponse,
    ProviderError,
    ProviderNotConfigured,
    ValidationError,
)
from llm_router.models.schemas import ImageModel
from tests.doubles import image_client


class TestImageDispatcher:
    @pytest.mark.asyncio
    async def test_returns_first_url_verbatim(self):
        url = "https://oaidalleapiprodscus.blob.core.windows.net/private/img.png?sig=a%2Fb"
        client = image_client(url)

        response = await ImageDispatcher(client).generate_image("a red fox")

        assert response.image_url == url
        assert response.prompt == "a red fox"
        assert response.model is ImageModel.DALLE
        assert response.timestamp > 0

    @pytest.mark.asyncio
    async def test_timestamp_comes_from_shared_clock(self):
        with patch("llm_router.ai.image.now_ms", return_value=1700000000123):
            response = await ImageDispatcher(image_client("https://img.example/1.png")).generate_image("p")
        assert response.timestamp == 1700000000123

    @pytest.mark.asyncio
    async def test_request_parameters(self):
        client = image_client("https://img.example/1.png")

        await ImageDispatcher(client).generate_image("a red fox")

        client.images.generate.assert_awaited_once_with(
            model="dall-e-3",
            prompt="a red fox",
            n=1,
            size="1024x1024",
            quality="standard",
            response_format="url",
        )

    @pytest.mark.asyncio
    async def test_serializes_with_camel_case_keys(self):
        response = await ImageDispatcher(image_client("https://img.example/1.png")).generate_image("p")
        payload = response.model_dump(by_alias=True, mode="json")
        assert set(payload) == {"imageUrl", "prompt", "model", "timestamp"}
        assert payload["model"] == "dalle"

    @pytest.mark.asyncio
    async def test_not_configured(self):
        dispatcher = ImageDispatcher(None)
        assert not dispatcher.enabled
        with pytest.raises(ProviderNotConfigured, match="OpenAI API key not configured"):
            await dispatcher.generate_image("p")

    @pytest.mark.asyncio
    async def test_no_data_is_empty_response(self):
        client = image_client()
        with pytest.raises(EmptyResponse, match="no image data"):
            await ImageDispatcher(client).generate_image("p")

    @pytest.mark.asyncio
    async def test_missing_url_is_empty_response(self):
        client = image_client(None)
        with pytest.raises(EmptyResponse, match="no image URL"):
            await ImageDispatcher(client).generate_image("p")

    @pytest.mark.asyncio
    async def test_none_response_is_empty_response(self):
        client = image_client()
        client.images.generate.return_value = None
        with pytest.raises(EmptyResponse):
            await ImageDispatcher(client).generate_image("p")

    @pytest.mark.asyncio
    async def test_upstream_error_is_wrapped(self):
        client = image_client()
        request = httpx.Request("POST", "https://api.openai.com/v1/images/generations")
        client.images.generate.side_effect = openai.BadRequestError(
            "content policy violation",
            response=httpx.Response(400, request=request),
            body=None,
        )

        with pytest.raises(ProviderError) as exc_info:
            await ImageDispatcher(client).generate_image("p")

        assert exc_info.value.upstream_status == 400
        assert "Failed to generate image: content policy violation" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_blank_prompt(self):
        with pytest.raises(ValidationError):
            await ImageDispatcher(image_client("https://x")).generate_image(" ")


class TestBuildImageDispatcher:
    def test_disabled_without_openai_key(self, bare_settings):
        assert not build_image_dispatcher(bare_settings).enabled

    def test_uses_configured_model(self, full_settings):
        dispatcher = build_image_dispatcher(full_settings)
        assert dispatcher.enabled
        assert dispatcher.model == "dall-e-3"
        assert dispatcher.quality == "standard"
