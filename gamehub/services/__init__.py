"""
Service layer for GameHub Insight backend.

Contains business logic that:
- Reads the catalog and favorites through Supabase (RLS enforced)
- Orchestrates the Gemini recommendation flow and its ai_request cache
- Raises gamehub.utils.errors exceptions that the app maps to HTTP responses

Services act as the glue between routes (HTTP layer) and agents/database.
"""

from .favorite_service import (
    add_favorite,
    get_user_favorites,
    list_recent_favorite_titles,
    remove_favorite,
)
from .game_service import (
    get_game_by_id,
    list_catalog_titles,
    list_games,
    list_games_by_ids,
    update_game,
)
from .recommendation_service import (
    RecommendationResult,
    delete_history_entry,
    generate_recommendation,
    get_recommendation_history,
    recommend_games,
)

__all__ = [
    "add_favorite",
    "get_user_favorites",
    "list_recent_favorite_titles",
    "remove_favorite",
    "get_game_by_id",
    "list_catalog_titles",
    "list_games",
    "list_games_by_ids",
    "update_game",
    "RecommendationResult",
    "delete_history_entry",
    "generate_recommendation",
    "get_recommendation_history",
    "recommend_games",
]
