"""
Tests for the Gemini text generator wrapper.

The google-genai client is patched, so these tests check request options and
error mapping without calling the API.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

from google.genai import errors

from gamehub.agents.recommendation import generator as generator_module
from gamehub.agents.recommendation.generator import GeminiTextGenerator, get_text_generator
from gamehub.utils.errors import UpstreamGenerationError


@pytest.fixture
def mock_genai_client():
    with patch("gamehub.agents.recommendation.generator.genai.Client") as client_cls:
        client = client_cls.return_value
        client.aio.models.generate_content = AsyncMock()
        yield client_cls


@pytest.fixture
def reset_generator_singleton():
    generator_module._text_generator = None
    yield
    generator_module._text_generator = None


class TestGeminiTextGenerator:

    def test_timeout_is_passed_in_milliseconds(self, mock_genai_client):
        GeminiTextGenerator(api_key="key", timeout_seconds=15)

        _, kwargs = mock_genai_client.call_args
        assert kwargs["api_key"] == "key"
        assert kwargs["http_options"].timeout == 15000

    @pytest.mark.asyncio
    async def test_returns_response_text(self, mock_genai_client):
        generate_content = mock_genai_client.return_value.aio.models.generate_content
        generate_content.return_value = MagicMock(text="[1, 2]")

        text = await GeminiTextGenerator(api_key="key", model="gemini-2.5-flash").generate("prompt")

        assert text == "[1, 2]"
        _, kwargs = generate_content.call_args
        assert kwargs["model"] == "gemini-2.5-flash"
        assert kwargs["contents"] == "prompt"

    @pytest.mark.asyncio
    async def test_empty_response_becomes_empty_string(self, mock_genai_client):
        mock_genai_client.return_value.aio.models.generate_content.return_value = MagicMock(text=None)

        assert await GeminiTextGenerator(api_key="key").generate("prompt") == ""

    @pytest.mark.asyncio
    async def test_api_error_keeps_upstream_status(self, mock_genai_client):
        mock_genai_client.return_value.aio.models.generate_content.side_effect = errors.ServerError(
            503,
            {"error": {"code": 503, "message": "The model is overloaded.", "status": "UNAVAILABLE"}},
        )

        with pytest.raises(UpstreamGenerationError) as exc_info:
            await GeminiTextGenerator(api_key="key").generate("prompt")

        assert exc_info.value.status_code == 503

    @pytest.mark.asyncio
    async def test_other_failures_map_to_500(self, mock_genai_client):
        mock_genai_client.return_value.aio.models.generate_content.side_effect = TimeoutError("timed out")

        with pytest.raises(UpstreamGenerationError) as exc_info:
            await GeminiTextGenerator(api_key="key").generate("prompt")

        assert exc_info.value.status_code == 500
        assert exc_info.value.message == "timed out"


class TestGetTextGenerator:

    def test_no_api_key_returns_none(self, monkeypatch, reset_generator_singleton):
        monkeypatch.setattr(generator_module.settings, "GOOGLE_API_KEY", "")

        assert get_text_generator() is None

    def test_generator_is_reused(self, monkeypatch, reset_generator_singleton, mock_genai_client):
        monkeypatch.setattr(generator_module.settings, "GOOGLE_API_KEY", "key")

        first = get_text_generator()
        second = get_text_generator()

        assert isinstance(first, GeminiTextGenerator)
        assert first is second
        assert mock_genai_client.call_count == 1
