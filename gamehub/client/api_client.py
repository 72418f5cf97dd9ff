"""
Async API client for the GameHub Insight backend.

Used by Python consumers of the API (scripts, bots, the test-suite) and the
home of the background recommendation refresh:

- add_favorite() / remove_favorite() return as soon as the mutation
  succeeds and schedule refresh_in_background() without awaiting it
- refresh_recommendations() calls GET /ai/recommend with a 15 second
  timeout, retrying transient failures (5xx, timeouts, network errors)
  up to 3 times with 1s, 2s, 4s backoff
- the refresh never raises; its outcome is only logged
"""

import asyncio
from typing import Any, Awaitable, Callable, Dict, Optional, Set

import httpx

from gamehub.config import settings
from gamehub.utils.logging import get_logger

logger = get_logger(__name__)

# GET /ai/recommend waits on Gemini, which can be slow
RECOMMEND_TIMEOUT_SECONDS = 15.0
DEFAULT_TIMEOUT_SECONDS = 10.0
MAX_REFRESH_RETRIES = 3
BASE_RETRY_DELAY_SECONDS = 1.0

SleepFunc = Callable[[float], Awaitable[Any]]


class GameHubAPIError(Exception):
    """Non-2xx response from the API."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"{status_code}: {message}")


def is_transient_failure(error: BaseException) -> bool:
    """
    Whether a failed call is worth retrying.

    Transient: server errors (5xx), timeouts, and network-level failures.
    Everything else (401, 403, 404, malformed responses) is final.
    """
    if isinstance(error, GameHubAPIError):
        return error.status_code >= 500
    # TimeoutException is a TransportError subclass
    return isinstance(error, httpx.TransportError)


def retry_delay(attempt: int, base_delay: float = BASE_RETRY_DELAY_SECONDS) -> float:
    """Backoff before retry number ``attempt + 1``: 1s, 2s, 4s, ..."""
    return base_delay * (2 ** attempt)


class GameHubClient:
    """
    Thin async wrapper around the REST API.

    Args:
        base_url: API root, defaults to settings.GAMEHUB_API_URL
        access_token: Supabase access token sent as a Bearer header
        http_client: Pre-built httpx.AsyncClient (tests pass one with a
            MockTransport). The caller keeps ownership of it.
        sleep: Coroutine used for retry backoff
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        access_token: Optional[str] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        sleep: SleepFunc = asyncio.sleep,
        max_refresh_retries: int = MAX_REFRESH_RETRIES,
    ):
        self.access_token = access_token
        self.max_refresh_retries = max_refresh_retries
        self._sleep = sleep
        self._owns_http_client = http_client is None
        self._http = http_client or httpx.AsyncClient(
            base_url=base_url or settings.GAMEHUB_API_URL,
            timeout=DEFAULT_TIMEOUT_SECONDS,
        )
        self._background_tasks: Set["asyncio.Task[bool]"] = set()

    async def __aenter__(self) -> "GameHubClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """
        Close the underlying HTTP client if this instance created it.

        Pending background refreshes are not awaited; a refresh still running
        fails and logs. Call wait_for_background_refreshes() first to let
        them finish.
        """
        if self._owns_http_client:
            await self._http.aclose()

    # -------------------------------------------------------------------------
    # HTTP plumbing
    # -------------------------------------------------------------------------

    def _headers(self) -> Dict[str, str]:
        if not self.access_token:
            return {}
        return {"Authorization": f"Bearer {self.access_token}"}

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
        timeout: Optional[float] = None,
    ) -> Dict[str, Any]:
        kwargs: Dict[str, Any] = {"params": params, "json": json, "headers": self._headers()}
        if timeout is not None:
            kwargs["timeout"] = timeout

        response = await self._http.request(method, path, **kwargs)

        if response.is_error:
            message = response.reason_phrase or "Request failed"
            try:
                body = response.json()
                if isinstance(body, dict) and body.get("message"):
                    message = str(body["message"])
            except ValueError:
                pass
            raise GameHubAPIError(response.status_code, message)

        return response.json()

    # -------------------------------------------------------------------------
    # Catalog
    # -------------------------------------------------------------------------

    async def list_games(
        self,
        page: int = 1,
        limit: int = 12,
        genre: Optional[str] = None,
        q: Optional[str] = None,
    ) -> Dict[str, Any]:
        params: Dict[str, Any] = {"page": page, "limit": limit}
        if genre:
            params["genre"] = genre
        if q:
            params["q"] = q
        return await self._request("GET", "/games", params=params)

    async def get_game(self, game_id: int) -> Dict[str, Any]:
        return await self._request("GET", f"/games/{game_id}")

    async def update_game(self, game_id: int, fields: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("PUT", f"/games/{game_id}", json=fields)

    # -------------------------------------------------------------------------
    # Favorites (mutations trigger a background recommendation refresh)
    # -------------------------------------------------------------------------

    async def get_favorites(self) -> Dict[str, Any]:
        return await self._request("GET", "/favorites")

    async def add_favorite(self, game_id: int) -> Dict[str, Any]:
        """
        Add a favorite, then refresh recommendations in the background.

        Raises:
            GameHubAPIError: The mutation failed (no refresh is scheduled)
        """
        body = await self._request("POST", f"/favorites/{game_id}")
        self.refresh_in_background()
        return body

    async def remove_favorite(self, game_id: int) -> Dict[str, Any]:
        """
        Remove a favorite, then refresh recommendations in the background.

        Raises:
            GameHubAPIError: The mutation failed (no refresh is scheduled)
        """
        body = await self._request("DELETE", f"/favorites/{game_id}")
        self.refresh_in_background()
        return body

    # -------------------------------------------------------------------------
    # AI recommendations
    # -------------------------------------------------------------------------

    async def recommend(self) -> Dict[str, Any]:
        """Force a fresh generation (single attempt)."""
        return await self._request("GET", "/ai/recommend", timeout=RECOMMEND_TIMEOUT_SECONDS)

    async def get_recommendation_history(self) -> Dict[str, Any]:
        return await self._request("GET", "/ai/history", timeout=RECOMMEND_TIMEOUT_SECONDS)

    async def delete_history_entry(self, request_id: int) -> Dict[str, Any]:
        return await self._request("DELETE", f"/ai/history/{request_id}")

    async def refresh_recommendations(self, max_retries: Optional[int] = None) -> bool:
        """
        Regenerate the server-side recommendation cache.

        Makes at most ``max_retries + 1`` calls to GET /ai/recommend. Only
        transient failures are retried, after 1s, 2s, 4s.

        Returns:
            True when the API reported success, False otherwise. Never raises.
        """
        retries = self.max_refresh_retries if max_retries is None else max_retries
        total_attempts = retries + 1

        for attempt in range(total_attempts):
            logger.info(f"Refreshing AI recommendations (attempt {attempt + 1}/{total_attempts})")

            try:
                body = await self.recommend()
            except Exception as e:
                logger.warning(f"AI recommendation refresh failed (attempt {attempt + 1}): {e!r}")

                if not is_transient_failure(e):
                    logger.warning("AI recommendation refresh stopped: non-retryable error")
                    return False

                if attempt >= retries:
                    logger.warning("AI recommendation refresh failed after all retries")
                    if isinstance(e, httpx.TimeoutException):
                        logger.warning("Request timeout - Gemini API too slow")
                    elif isinstance(e, GameHubAPIError):
                        logger.warning("Gemini API may be temporarily unavailable")
                    return False

                delay = retry_delay(attempt)
                logger.info(f"Retrying in {delay:g} seconds...")
                await self._sleep(delay)
                continue

            success = bool(body.get("success"))
            if success:
                logger.info("AI recommendations refreshed successfully")
            else:
                logger.warning("AI recommendation refresh returned success=false")
            return success

        return False

    def refresh_in_background(self) -> "asyncio.Task[bool]":
        """
        Schedule refresh_recommendations() as a detached task.

        Must be called from a running event loop. The returned task is not
        meant to be awaited by the caller; its outcome is logged by a done
        callback and never propagated.
        """
        task = asyncio.get_running_loop().create_task(self.refresh_recommendations())
        # Event loop only keeps weak references to tasks
        self._background_tasks.add(task)
        task.add_done_callback(self._on_refresh_done)
        return task

    def _on_refresh_done(self, task: "asyncio.Task[bool]") -> None:
        self._background_tasks.discard(task)

        if task.cancelled():
            logger.info("AI recommendation refresh cancelled")
            return

        error = task.exception()
        if error is not None:
            logger.warning(f"AI refresh error (non-critical): {error!r}")
        elif task.result():
            logger.info("AI cache updated - fresh recommendations will be served")
        else:
            logger.info("AI cache update failed - old recommendations may still appear")

    async def wait_for_background_refreshes(self) -> None:
        """Wait until every scheduled background refresh has finished."""
        if self._background_tasks:
            await asyncio.gather(*list(self._background_tasks), return_exceptions=True)
