"""
Pytest configuration for GameHub backend tests.

Sets up the test environment and shared fixtures.
"""
import os
import pytest
from unittest.mock import MagicMock, patch

# Disable config validation during tests
# This allows tests to run without requiring real environment variables
os.environ["VALIDATE_CONFIG"] = "false"

# Set test environment variables
os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("SUPABASE_PUBLISHABLE_KEY", "test-publishable-key")
os.environ.setdefault("GOOGLE_API_KEY", "test-google-api-key")

from tests.fakes import CATALOG, FakeRecommendationStore  # noqa: E402


@pytest.fixture
def supabase_client():
    """
    Mock Supabase client.
    Returns a MagicMock that simulates Supabase client behavior.
    """
    mock_client = MagicMock()
    return mock_client


@pytest.fixture
def fake_store():
    """Patch the recommendation service's store/catalog/favorites helpers."""
    store = FakeRecommendationStore(
        CATALOG,
        favorites={"user-with-favorites": ["Warframe", "Dota 2"]},
    )
    with patch.multiple(
        "gamehub.services.recommendation_service",
        list_catalog_titles=store.list_catalog_titles,
        list_recent_favorite_titles=store.list_recent_favorite_titles,
        list_games_by_ids=store.list_games_by_ids,
        create_ai_request=store.create_ai_request,
        get_latest_ai_request=store.get_latest_ai_request,
        get_ai_request_by_id=store.get_ai_request_by_id,
        delete_ai_request=store.delete_ai_request,
    ):
        yield store
