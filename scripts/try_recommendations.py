#!/usr/bin/env python3
"""
Recommendation Try-Out Script

Runs the recommendation generator against the real Gemini API without a
Supabase project or the web client. The catalog and favorites come from a
mocked Supabase client, so only the model call leaves the machine.

Usage:
    python scripts/try_recommendations.py
    python scripts/try_recommendations.py --favorites "Warframe,Dota 2"
    python scripts/try_recommendations.py --catalog games.json --debug

The optional catalog file is a JSON list of game rows with at least
``id`` and ``title`` (the shape of the ``game`` table).
"""

import argparse
import asyncio
import json
import logging
import os
import sys
from typing import Any, Dict, List
from unittest.mock import MagicMock

# Add the project root to the path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from gamehub.agents.recommendation.generator import get_text_generator
from gamehub.services.recommendation_service import generate_recommendation
from gamehub.utils.errors import GameHubError


# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


SAMPLE_CATALOG: List[Dict[str, Any]] = [
    {"id": 1, "title": "Warframe", "genre": "Shooter", "platform": "PC (Windows)", "publisher": "Digital Extremes"},
    {"id": 2, "title": "Path of Exile", "genre": "ARPG", "platform": "PC (Windows)", "publisher": "Grinding Gear Games"},
    {"id": 3, "title": "Dota 2", "genre": "MOBA", "platform": "PC (Windows)", "publisher": "Valve"},
    {"id": 4, "title": "Genshin Impact", "genre": "Action RPG", "platform": "PC (Windows)", "publisher": "miHoYo"},
    {"id": 5, "title": "Lost Ark", "genre": "MMORPG", "platform": "PC (Windows)", "publisher": "Amazon Games"},
    {"id": 6, "title": "Fortnite", "genre": "Shooter", "platform": "PC (Windows)", "publisher": "Epic Games"},
    {"id": 7, "title": "League of Legends", "genre": "MOBA", "platform": "PC (Windows)", "publisher": "Riot Games"},
    {"id": 8, "title": "World of Tanks", "genre": "Shooter", "platform": "PC (Windows)", "publisher": "Wargaming"},
    {"id": 9, "title": "Hearthstone", "genre": "Card Game", "platform": "PC (Windows)", "publisher": "Blizzard"},
    {"id": 10, "title": "Apex Legends", "genre": "Shooter", "platform": "PC (Windows)", "publisher": "Electronic Arts"},
]


def _result(data: Any) -> MagicMock:
    response = MagicMock()
    response.data = data
    return response


def create_mock_supabase_client(catalog: List[Dict[str, Any]], favorite_titles: List[str]) -> MagicMock:
    """
    Create a mock Supabase client serving the given catalog and favorites.

    Each query shape used by the generator resolves to its own MagicMock
    chain, so one client answers all of them.
    """
    mock_client = MagicMock()
    select = mock_client.table.return_value.select.return_value

    # Catalog titles: select("id, title").order("id").execute()
    select.order.return_value.execute.return_value = _result(
        [{"id": game["id"], "title": game["title"]} for game in catalog]
    )

    # Recent favorites: select(...).eq("user_id").order(...).limit(n).execute()
    select.eq.return_value.order.return_value.limit.return_value.execute.return_value = _result(
        [{"created_at": None, "game": {"title": title}} for title in favorite_titles]
    )

    # Hydration: select(...).in_("id", ids).execute()
    select.in_.return_value.execute.return_value = _result(catalog)

    # ai_request insert
    def fake_insert(row: Dict[str, Any]) -> MagicMock:
        builder = MagicMock()
        builder.execute.return_value = _result([{"id": 1, "created_at": "local", **row}])
        return builder

    mock_client.table.return_value.insert.side_effect = fake_insert

    return mock_client


def load_catalog(path: str | None) -> List[Dict[str, Any]]:
    if not path:
        return SAMPLE_CATALOG
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def print_result(result) -> None:
    """Pretty print the recommendation result."""
    print("\n" + "=" * 60)
    print(f"Stored prompt: {result.ai_request.get('prompt')}")
    print(f"Game ids:      {result.game_ids}")
    print("=" * 60)

    for i, game in enumerate(result.recommended_games, 1):
        print(f"  {i}. [{game.get('id')}] {game.get('title')} ({game.get('genre') or 'n/a'})")

    missing = len(set(result.game_ids)) - len(result.recommended_games)
    if missing:
        print(f"\n  {missing} id(s) returned by the model are not in the catalog")
    print()


async def run(favorite_titles: List[str], catalog: List[Dict[str, Any]], user_id: str) -> int:
    text_generator = get_text_generator()
    if text_generator is None:
        print("\nERROR: GOOGLE_API_KEY environment variable not set!")
        print("   Please set it in your .env file or export it:")
        print("   export GOOGLE_API_KEY=your-gemini-api-key")
        return 1

    print("\n" + "=" * 60)
    print("RECOMMENDATION TRY-OUT (Gemini)")
    print("=" * 60)
    print(f"Catalog size: {len(catalog)}")
    print(f"Favorites:    {', '.join(favorite_titles) if favorite_titles else '(none)'}")
    print("\nCalling Gemini API...")

    mock_client = create_mock_supabase_client(catalog, favorite_titles)

    try:
        result = await generate_recommendation(mock_client, user_id, text_generator)
    except GameHubError as e:
        print(f"\nFAILED ({e.status_code}): {e.message}\n")
        return 1

    print_result(result)
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Try the Gemini recommendation generator locally",
    )
    parser.add_argument(
        "--favorites", "-f",
        type=str,
        default="",
        help="Comma separated favorite titles, most recent first (default: none)"
    )
    parser.add_argument(
        "--catalog", "-c",
        type=str,
        help="Path to a JSON list of game rows (default: built-in sample)"
    )
    parser.add_argument(
        "--user-id",
        type=str,
        default="local-user",
        help="User id recorded on the ai_request row"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )

    args = parser.parse_args()

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    favorite_titles = [title.strip() for title in args.favorites.split(",") if title.strip()]

    return asyncio.run(run(favorite_titles, load_catalog(args.catalog), args.user_id))


if __name__ == "__main__":
    sys.exit(main())
