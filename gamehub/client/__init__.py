"""
Python API client for GameHub Insight, including the background
recommendation refresh that follows every favorites mutation.
"""

from gamehub.client.api_client import (
    GameHubAPIError,
    GameHubClient,
    is_transient_failure,
    retry_delay,
)

__all__ = [
    "GameHubAPIError",
    "GameHubClient",
    "is_transient_failure",
    "retry_delay",
]
