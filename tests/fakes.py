"""
In-memory stand-ins shared by the test-suite: a small game catalog, a stub
text generator replacing Gemini and a fake recommendation store replacing
the Supabase-backed helpers.
"""

from typing import Any, Dict, List, Optional

CATALOG: List[Dict[str, Any]] = [
    {"id": 1, "title": "Warframe", "genre": "Shooter", "platform": "PC (Windows)",
     "publisher": "Digital Extremes", "thumbnail": "https://img.example.com/1.jpg"},
    {"id": 2, "title": "Path of Exile", "genre": "ARPG", "platform": "PC (Windows)",
     "publisher": "Grinding Gear Games", "thumbnail": "https://img.example.com/2.jpg"},
    {"id": 3, "title": "Dota 2", "genre": "MOBA", "platform": "PC (Windows)",
     "publisher": "Valve", "thumbnail": "https://img.example.com/3.jpg"},
    {"id": 4, "title": "Genshin Impact", "genre": "Action RPG", "platform": "PC (Windows)",
     "publisher": "miHoYo", "thumbnail": "https://img.example.com/4.jpg"},
    {"id": 5, "title": "Lost Ark", "genre": "MMORPG", "platform": "PC (Windows)",
     "publisher": "Amazon Games", "thumbnail": "https://img.example.com/5.jpg"},
]


class StubTextGenerator:
    """
    Stand-in for GeminiTextGenerator.

    Returns the queued responses in order (the last one repeats). A queued
    exception instance is raised instead of returned.
    """

    def __init__(self, *responses: Any):
        self.responses = list(responses) or ["[1]"]
        self.prompts: List[str] = []

    async def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        response = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(response, Exception):
            raise response
        return response


class FakeRecommendationStore:
    """
    In-memory replacement for the Supabase-backed helpers that
    gamehub.services.recommendation_service imports.
    """

    def __init__(self, games: List[Dict[str, Any]], favorites: Optional[Dict[str, List[str]]] = None):
        self.games = {game["id"]: game for game in games}
        # user_id -> favorite titles, newest first
        self.favorites = favorites or {}
        self.ai_requests: List[Dict[str, Any]] = []
        self._next_id = 1

    async def list_catalog_titles(self, supabase_client):
        return [{"id": g["id"], "title": g["title"]} for g in self.games.values()]

    async def list_recent_favorite_titles(self, supabase_client, user_id, limit=10):
        return self.favorites.get(user_id, [])[:limit]

    async def list_games_by_ids(self, supabase_client, game_ids):
        unique_ids = list(dict.fromkeys(game_ids))
        return [dict(self.games[game_id]) for game_id in unique_ids if game_id in self.games]

    async def create_ai_request(self, supabase_client, user_id, prompt, response):
        row = {
            "id": self._next_id,
            "user_id": user_id,
            "prompt": prompt,
            "response": response,
            "created_at": f"2025-11-14T10:00:{self._next_id:02d}+00:00",
        }
        self._next_id += 1
        self.ai_requests.append(row)
        return row

    async def get_latest_ai_request(self, supabase_client, user_id):
        rows = [row for row in self.ai_requests if row["user_id"] == user_id]
        return rows[-1] if rows else None

    async def get_ai_request_by_id(self, supabase_client, request_id):
        for row in self.ai_requests:
            if row["id"] == request_id:
                return row
        return None

    async def delete_ai_request(self, supabase_client, request_id):
        self.ai_requests = [row for row in self.ai_requests if row["id"] != request_id]

    def add_history_row(self, user_id: str, response: Optional[str]) -> Dict[str, Any]:
        """Seed a stored ai_request row directly."""
        row = {
            "id": self._next_id,
            "user_id": user_id,
            "prompt": "Auto-generated based on 1 favorite games",
            "response": response,
            "created_at": f"2025-11-13T09:00:{self._next_id:02d}+00:00",
        }
        self._next_id += 1
        self.ai_requests.append(row)
        return row
