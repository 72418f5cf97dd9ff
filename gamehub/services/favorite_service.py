"""
Favorites service.

Handles the user -> game associations stored in ``favorite``. Favorites feed
the recommendation prompt (most recent first) and every successful add or
remove is followed by a background recommendation refresh on the client.
"""

import logging
from typing import Any, Dict, List, cast

from supabase import Client

from gamehub.services.game_service import GAME_SUMMARY_COLUMNS, get_game_by_id
from gamehub.utils.errors import BadRequestError, NotFoundError

logger = logging.getLogger(__name__)


async def get_user_favorites(supabase_client: Client, user_id: str) -> List[Dict[str, Any]]:
    """
    Fetch all favorites of a user with their game embedded, newest first.

    Security:
        - RLS enforces user_id = auth.uid()
    """
    result = (
        supabase_client.table("favorite")
        .select(f"id, user_id, game_id, created_at, game({GAME_SUMMARY_COLUMNS})")
        .eq("user_id", user_id)
        .order("created_at", desc=True)
        .execute()
    )

    favorites = cast(List[Dict[str, Any]], result.data or [])
    logger.info(f"Found {len(favorites)} favorites for user {user_id}")
    return favorites


async def list_recent_favorite_titles(
    supabase_client: Client,
    user_id: str,
    limit: int = 10,
) -> List[str]:
    """
    Titles of the user's most recently created favorites, newest first.

    Favorites whose game row is gone are skipped.
    """
    result = (
        supabase_client.table("favorite")
        .select("created_at, game(title)")
        .eq("user_id", user_id)
        .order("created_at", desc=True)
        .limit(limit)
        .execute()
    )

    rows = cast(List[Dict[str, Any]], result.data or [])
    titles: List[str] = []
    for row in rows:
        game = row.get("game") or {}
        title = game.get("title")
        if title:
            titles.append(str(title))

    logger.debug(f"Loaded {len(titles)} recent favorite titles for user {user_id}")
    return titles


async def add_favorite(supabase_client: Client, user_id: str, game_id: int) -> Dict[str, Any]:
    """
    Add a game to the user's favorites.

    Raises:
        NotFoundError: The game does not exist
        BadRequestError: The game is already a favorite
    """
    game = await get_game_by_id(supabase_client, game_id)
    if game is None:
        raise NotFoundError("Game not found.")

    existing = (
        supabase_client.table("favorite")
        .select("id")
        .eq("user_id", user_id)
        .eq("game_id", game_id)
        .execute()
    )
    if existing.data:
        logger.info(f"Game {game_id} already in favorites of user {user_id}")
        raise BadRequestError("Game already exists in the favorite list.")

    result = (
        supabase_client.table("favorite")
        .insert({"user_id": user_id, "game_id": game_id})
        .execute()
    )

    if not result.data:
        raise Exception("Favorite insert returned no data")

    favorite = cast(Dict[str, Any], result.data[0])
    logger.info(f"User {user_id} added game {game_id} to favorites")
    return favorite


async def remove_favorite(supabase_client: Client, user_id: str, game_id: int) -> None:
    """
    Remove a game from the user's favorites.

    Raises:
        NotFoundError: The game is not in the user's favorites
    """
    existing = (
        supabase_client.table("favorite")
        .select("id")
        .eq("user_id", user_id)
        .eq("game_id", game_id)
        .execute()
    )
    if not existing.data:
        raise NotFoundError("Favorite not found.")

    favorite_id = existing.data[0]["id"]
    (
        supabase_client.table("favorite")
        .delete()
        .eq("id", favorite_id)
        .execute()
    )

    logger.info(f"User {user_id} removed game {game_id} from favorites")
