"""
Domain error hierarchy for GameHub Insight backend.

Services raise these exceptions; the handlers registered in ``gamehub.main``
turn every one of them into the common error envelope::

    {"success": false, "message": "<message>"}

with the HTTP status taken from ``status_code``.
"""

from fastapi import status


class GameHubError(Exception):
    """Base class for errors that map directly to an HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code: str = "internal_error"
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None, status_code: int | None = None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class BadRequestError(GameHubError):
    status_code = status.HTTP_400_BAD_REQUEST
    error_code = "bad_request"
    default_message = "Bad request"


class ForbiddenError(GameHubError):
    status_code = status.HTTP_403_FORBIDDEN
    error_code = "forbidden"
    default_message = "You do not have access to this resource"


class NotFoundError(GameHubError):
    status_code = status.HTTP_404_NOT_FOUND
    error_code = "not_found"
    default_message = "Resource not found"


class GenerationNotConfiguredError(GameHubError):
    """The Gemini API key is missing. Fatal, never retried."""

    error_code = "service_unavailable"
    default_message = "Gemini API key is not configured"


class UpstreamGenerationError(GameHubError):
    """
    The Gemini call itself failed.

    Carries the upstream HTTP status when the SDK exposes one, else 500.
    """

    error_code = "upstream_error"
    default_message = "Failed to get recommendations from Gemini API"


class RecommendationParseError(GameHubError):
    """Model output was not valid JSON."""

    error_code = "parse_error"
    default_message = "Failed to parse AI response. Please try again."


class RecommendationFormatError(GameHubError):
    """Model output was JSON but not a non-empty array of game ids."""

    error_code = "invalid_format"
    default_message = "Invalid recommendation format from AI"
