"""
Tests for the async API client and its background recommendation refresh.

The API is replaced by an httpx.MockTransport and backoff sleeps are
recorded instead of awaited, so retry timing is checked without waiting.
"""

import asyncio
from typing import Callable, List

import httpx
import pytest

from gamehub.client.api_client import (
    GameHubAPIError,
    GameHubClient,
    RECOMMEND_TIMEOUT_SECONDS,
    is_transient_failure,
    retry_delay,
)

RECOMMEND_OK = {
    "success": True,
    "message": "Game recommendations retrieved successfully",
    "data": {"id": 1, "recommendations": [], "gameIds": [1], "basedOnFavorites": 1},
}


class RecordingSleep:
    """Collects requested backoff delays; optionally blocks until released."""

    def __init__(self, gate: asyncio.Event | None = None):
        self.delays: List[float] = []
        self.gate = gate

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)
        if self.gate is not None:
            await self.gate.wait()


def make_client(handler: Callable[[httpx.Request], httpx.Response], sleep=None) -> GameHubClient:
    http_client = httpx.AsyncClient(
        transport=httpx.MockTransport(handler),
        base_url="http://gamehub.test",
    )
    return GameHubClient(
        access_token="test-token",
        http_client=http_client,
        sleep=sleep or RecordingSleep(),
    )


class Recorder:
    """MockTransport handler returning queued outcomes per path."""

    def __init__(self, **outcomes):
        self.outcomes = {path.replace("__", "/"): list(queue) for path, queue in outcomes.items()}
        self.requests: List[httpx.Request] = []

    def calls(self, path: str) -> int:
        return sum(1 for request in self.requests if request.url.path == path)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = request.url.path.lstrip("/")
        queue = self.outcomes[key]
        outcome = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(outcome, Exception):
            raise outcome
        status_code, body = outcome
        return httpx.Response(status_code, json=body)


def server_error():
    return (500, {"success": False, "message": "Failed to get recommendations from Gemini API"})


# =============================================================================
# RETRY CLASSIFICATION
# =============================================================================

class TestRetryPolicy:

    def test_backoff_doubles(self):
        assert [retry_delay(attempt) for attempt in range(3)] == [1.0, 2.0, 4.0]

    @pytest.mark.parametrize("status_code, expected", [
        (500, True),
        (503, True),
        (400, False),
        (401, False),
        (403, False),
        (404, False),
    ])
    def test_status_codes(self, status_code, expected):
        assert is_transient_failure(GameHubAPIError(status_code, "x")) is expected

    def test_network_errors_are_transient(self):
        request = httpx.Request("GET", "http://gamehub.test/ai/recommend")

        assert is_transient_failure(httpx.ReadTimeout("timed out", request=request))
        assert is_transient_failure(httpx.ConnectError("refused", request=request))

    def test_other_errors_are_not_transient(self):
        assert not is_transient_failure(ValueError("bad json"))


# =============================================================================
# REFRESH
# =============================================================================

class TestRefreshRecommendations:

    @pytest.mark.asyncio
    async def test_success_on_first_attempt(self):
        recorder = Recorder(**{"ai__recommend": [(200, RECOMMEND_OK)]})
        sleep = RecordingSleep()
        client = make_client(recorder, sleep)

        assert await client.refresh_recommendations() is True
        assert recorder.calls("/ai/recommend") == 1
        assert sleep.delays == []
        assert recorder.requests[0].headers["Authorization"] == "Bearer test-token"

    @pytest.mark.asyncio
    async def test_gives_up_after_three_retries(self):
        recorder = Recorder(**{"ai__recommend": [server_error()]})
        sleep = RecordingSleep()
        client = make_client(recorder, sleep)

        assert await client.refresh_recommendations() is False
        assert recorder.calls("/ai/recommend") == 4
        assert sleep.delays == [1.0, 2.0, 4.0]

    @pytest.mark.asyncio
    async def test_every_attempt_uses_recommend_timeout(self):
        recorder = Recorder(**{"ai__recommend": [server_error()]})
        client = make_client(recorder)

        await client.refresh_recommendations()

        assert RECOMMEND_TIMEOUT_SECONDS == 15.0
        assert len(recorder.requests) == 4
        for request in recorder.requests:
            assert request.extensions["timeout"] == {
                "connect": 15.0,
                "read": 15.0,
                "write": 15.0,
                "pool": 15.0,
            }

    @pytest.mark.asyncio
    async def test_recovers_after_transient_failures(self):
        recorder = Recorder(**{"ai__recommend": [server_error(), (503, {}), (200, RECOMMEND_OK)]})
        sleep = RecordingSleep()
        client = make_client(recorder, sleep)

        assert await client.refresh_recommendations() is True
        assert recorder.calls("/ai/recommend") == 3
        assert sleep.delays == [1.0, 2.0]

    @pytest.mark.asyncio
    async def test_timeouts_and_network_errors_are_retried(self):
        request = httpx.Request("GET", "http://gamehub.test/ai/recommend")
        recorder = Recorder(**{"ai__recommend": [
            httpx.ReadTimeout("timed out", request=request),
            httpx.ConnectError("refused", request=request),
            (200, RECOMMEND_OK),
        ]})
        sleep = RecordingSleep()
        client = make_client(recorder, sleep)

        assert await client.refresh_recommendations() is True
        assert sleep.delays == [1.0, 2.0]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status_code", [400, 401, 403, 404])
    async def test_client_errors_are_not_retried(self, status_code):
        recorder = Recorder(**{"ai__recommend": [(status_code, {"success": False, "message": "nope"})]})
        sleep = RecordingSleep()
        client = make_client(recorder, sleep)

        assert await client.refresh_recommendations() is False
        assert recorder.calls("/ai/recommend") == 1
        assert sleep.delays == []

    @pytest.mark.asyncio
    async def test_success_false_body_is_a_failure(self):
        recorder = Recorder(**{"ai__recommend": [(200, {"success": False})]})
        client = make_client(recorder)

        assert await client.refresh_recommendations() is False
        assert recorder.calls("/ai/recommend") == 1

    @pytest.mark.asyncio
    async def test_custom_retry_budget(self):
        recorder = Recorder(**{"ai__recommend": [server_error()]})
        sleep = RecordingSleep()
        client = make_client(recorder, sleep)

        assert await client.refresh_recommendations(max_retries=1) is False
        assert recorder.calls("/ai/recommend") == 2
        assert sleep.delays == [1.0]


# =============================================================================
# FAVORITE MUTATIONS
# =============================================================================

class TestFavoriteMutations:

    @pytest.mark.asyncio
    async def test_add_favorite_schedules_refresh(self):
        created = {"success": True, "message": "Game successfully added to favorites.", "data": {"id": 1}}
        recorder = Recorder(**{
            "favorites__3": [(201, created)],
            "ai__recommend": [(200, RECOMMEND_OK)],
        })
        client = make_client(recorder)

        body = await client.add_favorite(3)

        assert body == created
        # Refresh has been scheduled but not run yet
        assert recorder.calls("/ai/recommend") == 0

        await client.wait_for_background_refreshes()
        assert recorder.calls("/ai/recommend") == 1

    @pytest.mark.asyncio
    async def test_remove_favorite_schedules_refresh(self):
        removed = {"success": True, "message": "Game successfully removed from favorites.", "data": {}}
        recorder = Recorder(**{
            "favorites__3": [(200, removed)],
            "ai__recommend": [(200, RECOMMEND_OK)],
        })
        client = make_client(recorder)

        assert await client.remove_favorite(3) == removed

        await client.wait_for_background_refreshes()
        assert recorder.calls("/ai/recommend") == 1

    @pytest.mark.asyncio
    async def test_failed_mutation_schedules_nothing(self):
        recorder = Recorder(**{
            "favorites__3": [(400, {"success": False, "message": "Game already exists in the favorite list."})],
            "ai__recommend": [(200, RECOMMEND_OK)],
        })
        client = make_client(recorder)

        with pytest.raises(GameHubAPIError) as exc_info:
            await client.add_favorite(3)

        assert exc_info.value.status_code == 400
        assert exc_info.value.message == "Game already exists in the favorite list."
        await client.wait_for_background_refreshes()
        assert recorder.calls("/ai/recommend") == 0

    @pytest.mark.asyncio
    async def test_mutation_does_not_wait_for_slow_refresh(self):
        gate = asyncio.Event()
        sleep = RecordingSleep(gate)
        recorder = Recorder(**{
            "favorites__3": [(201, {"success": True, "message": "ok", "data": {}})],
            "ai__recommend": [server_error(), (200, RECOMMEND_OK)],
        })
        client = make_client(recorder, sleep)

        await client.add_favorite(3)
        # Let the refresh run until it blocks in its first backoff
        for _ in range(10):
            await asyncio.sleep(0)

        assert sleep.delays == [1.0]
        assert recorder.calls("/ai/recommend") == 1

        # The caller is free to keep using the client meanwhile
        await client.remove_favorite(3)

        gate.set()
        await client.wait_for_background_refreshes()
        assert recorder.calls("/ai/recommend") >= 2

    @pytest.mark.asyncio
    async def test_failed_refresh_is_not_raised(self):
        recorder = Recorder(**{
            "favorites__3": [(201, {"success": True, "message": "ok", "data": {}})],
            "ai__recommend": [server_error()],
        })
        client = make_client(recorder)

        await client.add_favorite(3)
        await client.wait_for_background_refreshes()

        assert recorder.calls("/ai/recommend") == 4
