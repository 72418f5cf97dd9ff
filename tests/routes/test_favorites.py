"""
Tests for favorites endpoints.

Tests cover:
- Listing favorites with embedded games
- Adding (201), duplicate (400) and unknown game (404)
- Removing and removing a non-favorite (404)
- Authentication
"""

import pytest
from fastapi.testclient import TestClient
from unittest.mock import AsyncMock, MagicMock, patch

from gamehub.auth.dependencies import AuthenticatedUser, get_authenticated_user
from gamehub.main import app
from gamehub.utils.errors import BadRequestError, NotFoundError

client = TestClient(app)


async def mock_get_authenticated_user_dependency():
    """Mock dependency that returns test AuthenticatedUser."""
    return AuthenticatedUser(
        user_id="test-user-id",
        access_token="test-access-token"
    )


@pytest.fixture
def mock_auth():
    """Override get_authenticated_user dependency."""
    app.dependency_overrides[get_authenticated_user] = mock_get_authenticated_user_dependency
    yield
    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def mock_supabase():
    with patch("gamehub.routes.favorites.get_supabase_client", return_value=MagicMock()) as factory:
        yield factory


@pytest.fixture
def mock_favorite():
    return {
        "id": 11,
        "user_id": "test-user-id",
        "game_id": 3,
        "created_at": "2025-11-14T10:00:00+00:00",
        "game": {
            "id": 3,
            "title": "Dota 2",
            "genre": "MOBA",
            "platform": "PC (Windows)",
            "publisher": "Valve",
            "thumbnail": "https://img.example.com/3.jpg",
        },
    }


def test_list_favorites(mock_auth, mock_favorite):
    with patch(
        "gamehub.routes.favorites.get_user_favorites",
        new=AsyncMock(return_value=[mock_favorite]),
    ):
        response = client.get("/favorites", headers={"Authorization": "Bearer test-token"})

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["message"] == "User's favorite list successfully retrieved."
    assert body["total"] == 1
    assert body["data"][0]["game"]["title"] == "Dota 2"


def test_list_favorites_requires_token():
    response = client.get("/favorites")

    assert response.status_code == 401
    assert response.json()["message"] == "Token is required."


def test_list_favorites_database_failure(mock_auth):
    with patch(
        "gamehub.routes.favorites.get_user_favorites",
        new=AsyncMock(side_effect=RuntimeError("connection refused")),
    ):
        response = client.get("/favorites")

    assert response.status_code == 500
    assert response.json()["message"] == "Failed to load favorites"


def test_add_favorite(mock_auth, mock_favorite):
    inserted = {key: value for key, value in mock_favorite.items() if key != "game"}

    with patch(
        "gamehub.routes.favorites.add_favorite",
        new=AsyncMock(return_value=inserted),
    ) as add_mock:
        response = client.post("/favorites/3")

    assert response.status_code == 201
    body = response.json()
    assert body["message"] == "Game successfully added to favorites."
    assert body["data"]["game_id"] == 3
    assert body["data"]["user_id"] == "test-user-id"
    add_mock.assert_awaited_once()
    assert add_mock.call_args.args[1:] == ("test-user-id", 3)


def test_add_duplicate_favorite(mock_auth):
    with patch(
        "gamehub.routes.favorites.add_favorite",
        new=AsyncMock(side_effect=BadRequestError("Game already exists in the favorite list.")),
    ):
        response = client.post("/favorites/3")

    assert response.status_code == 400
    assert response.json()["message"] == "Game already exists in the favorite list."


def test_add_unknown_game(mock_auth):
    with patch(
        "gamehub.routes.favorites.add_favorite",
        new=AsyncMock(side_effect=NotFoundError("Game not found.")),
    ):
        response = client.post("/favorites/999")

    assert response.status_code == 404
    assert response.json()["message"] == "Game not found."


def test_remove_favorite(mock_auth):
    with patch("gamehub.routes.favorites.remove_favorite", new=AsyncMock(return_value=None)):
        response = client.delete("/favorites/3")

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "message": "Game successfully removed from favorites.",
        "data": {"game_id": 3, "user_id": "test-user-id"},
    }


def test_remove_missing_favorite(mock_auth):
    with patch(
        "gamehub.routes.favorites.remove_favorite",
        new=AsyncMock(side_effect=NotFoundError("Favorite not found.")),
    ):
        response = client.delete("/favorites/3")

    assert response.status_code == 404
    assert response.json()["message"] == "Favorite not found."
