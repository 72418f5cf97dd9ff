"""
Text generation client for recommendations.

Wraps the Google Gen AI SDK behind a one-method interface so the
recommendation service receives the client as an explicit dependency and
tests can pass a stub instead of patching module globals.

Architecture:
- Model: Gemini 2.5 Flash (override with GEMINI_MODEL)
- API: Google Gen AI Python SDK (google-genai), async surface (client.aio)
- Timeout: GEMINI_TIMEOUT_SECONDS per request (15s default), enforced by the SDK
- Single attempt: no retries here, retrying is the API client's job
"""

import logging
from typing import Optional, Protocol

from google import genai
from google.genai import errors, types

from gamehub.config import settings
from gamehub.utils.errors import UpstreamGenerationError

logger = logging.getLogger(__name__)

_text_generator: Optional["GeminiTextGenerator"] = None


class TextGenerator(Protocol):
    """Anything that turns a prompt into raw model text."""

    async def generate(self, prompt: str) -> str:
        ...


class GeminiTextGenerator:
    """Single-call Gemini text generation with a bounded timeout."""

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.5-flash",
        timeout_seconds: float = 15.0,
    ):
        self.model = model
        self._client = genai.Client(
            api_key=api_key,
            # HttpOptions.timeout is expressed in milliseconds
            http_options=types.HttpOptions(timeout=int(timeout_seconds * 1000)),
        )

    async def generate(self, prompt: str) -> str:
        """
        Send the prompt to Gemini and return the raw response text.

        Returns an empty string when the model produced no text; the caller's
        JSON parsing step reports that as an unparseable response.

        Raises:
            UpstreamGenerationError: The API call failed. Carries the upstream
                HTTP status when the SDK reports one.
        """
        logger.info(f"Calling Gemini model={self.model} (prompt_chars={len(prompt)})")

        try:
            response = await self._client.aio.models.generate_content(
                model=self.model,
                contents=prompt,
                config=types.GenerateContentConfig(temperature=0.2),
            )
        except errors.APIError as e:
            logger.error(f"Gemini API error: code={e.code} message={e.message}")
            status_code = e.code if isinstance(e.code, int) and 400 <= e.code < 600 else None
            raise UpstreamGenerationError(
                e.message or UpstreamGenerationError.default_message,
                status_code=status_code,
            ) from e
        except Exception as e:
            logger.error(f"Error calling Gemini API: {e}")
            raise UpstreamGenerationError(str(e) or None) from e

        text = response.text or ""
        logger.info(f"Gemini response received (chars={len(text)})")
        return text


def get_text_generator() -> Optional[TextGenerator]:
    """
    FastAPI dependency returning the shared Gemini text generator.

    Returns None when GOOGLE_API_KEY is not configured; the recommendation
    service turns that into a GenerationNotConfiguredError on first use.
    """
    global _text_generator

    if _text_generator is not None:
        return _text_generator

    if not settings.GOOGLE_API_KEY:
        logger.warning(
            "GOOGLE_API_KEY not configured. Recommendation generation is disabled."
        )
        return None

    _text_generator = GeminiTextGenerator(
        api_key=settings.GOOGLE_API_KEY,
        model=settings.GEMINI_MODEL,
        timeout_seconds=settings.GEMINI_TIMEOUT_SECONDS or 15.0,
    )
    logger.info("Gemini client initialized successfully for recommendations")
    return _text_generator
