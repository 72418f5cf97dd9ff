"""
Game catalog service.

Read access to the ``game`` table for the catalog pages and the
recommendation flow, plus the admin edit operation.
"""

import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple, cast

from supabase import Client

logger = logging.getLogger(__name__)

# Columns returned when hydrating recommendations
GAME_SUMMARY_COLUMNS = "id, title, genre, platform, publisher, thumbnail"

# Columns that may be changed through PUT /games/{id}
UPDATABLE_GAME_FIELDS = (
    "title",
    "genre",
    "platform",
    "publisher",
    "developer",
    "description",
    "thumbnail",
    "game_url",
    "release_date",
)


async def list_games(
    supabase_client: Client,
    page: int = 1,
    limit: int = 12,
    genre: Optional[str] = None,
    q: Optional[str] = None,
) -> Tuple[List[Dict[str, Any]], int]:
    """
    Fetch one page of the catalog, ordered by id.

    Args:
        supabase_client: Supabase client (anonymous or authenticated)
        page: 1-based page number
        limit: Page size
        genre: Exact genre filter (optional)
        q: Case-insensitive title search (optional)

    Returns:
        Tuple of (games on this page, total matching games)
    """
    offset = (page - 1) * limit
    logger.debug(f"Listing games (page={page}, limit={limit}, genre={genre}, q={q})")

    query = supabase_client.table("game").select("*", count="exact")
    if genre:
        query = query.eq("genre", genre)
    if q:
        query = query.ilike("title", f"%{q}%")

    result = (
        query
        .order("id", desc=False)
        .range(offset, offset + limit - 1)
        .execute()
    )

    games = cast(List[Dict[str, Any]], result.data or [])
    total = result.count if result.count is not None else len(games)
    logger.info(f"Found {len(games)} games on page {page} ({total} total)")

    return games, total


async def get_game_by_id(supabase_client: Client, game_id: int) -> Optional[Dict[str, Any]]:
    """Fetch a single game, or None if it does not exist."""
    result = (
        supabase_client.table("game")
        .select("*")
        .eq("id", game_id)
        .execute()
    )

    if not result.data:
        logger.warning(f"Game {game_id} not found")
        return None

    return cast(Dict[str, Any], result.data[0])


async def list_catalog_titles(supabase_client: Client) -> List[Dict[str, Any]]:
    """Fetch the whole catalog reduced to ``id`` and ``title`` for prompting."""
    result = (
        supabase_client.table("game")
        .select("id, title")
        .order("id", desc=False)
        .execute()
    )

    games = cast(List[Dict[str, Any]], result.data or [])
    logger.info(f"Loaded {len(games)} catalog entries for prompting")
    return games


async def list_games_by_ids(
    supabase_client: Client,
    game_ids: Sequence[int],
) -> List[Dict[str, Any]]:
    """
    Hydrate game ids into summary records.

    Ids with no matching row are dropped. The result follows the order of
    ``game_ids``, and a repeated id appears once.
    """
    if not game_ids:
        return []

    unique_ids = list(dict.fromkeys(game_ids))
    result = (
        supabase_client.table("game")
        .select(GAME_SUMMARY_COLUMNS)
        .in_("id", unique_ids)
        .execute()
    )

    rows = cast(List[Dict[str, Any]], result.data or [])
    by_id = {row.get("id"): row for row in rows}
    games = [by_id[game_id] for game_id in unique_ids if game_id in by_id]

    missing = len(unique_ids) - len(games)
    if missing:
        logger.info(f"Dropped {missing} recommended ids with no catalog entry")

    return games


async def update_game(
    supabase_client: Client,
    game_id: int,
    fields: Dict[str, Any],
) -> Optional[Dict[str, Any]]:
    """
    Update editable columns of a game.

    Unknown keys are ignored. Returns the updated row, or None when the game
    does not exist.
    """
    changes = {key: value for key, value in fields.items() if key in UPDATABLE_GAME_FIELDS}

    existing = await get_game_by_id(supabase_client, game_id)
    if existing is None:
        return None

    if not changes:
        logger.info(f"No editable fields supplied for game {game_id}")
        return existing

    logger.info(f"Updating game {game_id}: fields={sorted(changes)}")

    result = (
        supabase_client.table("game")
        .update(changes)
        .eq("id", game_id)
        .execute()
    )

    if not result.data:
        # Update filtered out by RLS or raced with a delete
        logger.warning(f"Update of game {game_id} returned no rows")
        return None

    return cast(Dict[str, Any], result.data[0])
