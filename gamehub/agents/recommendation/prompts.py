"""
Recommendation Prompt Templates

Builds the single prompt sent to Gemini by the recommendation generator.

Prompt shape:
- With no favorites: ask for 3-5 popular games from the full catalog
- With favorites: ask for 3-5 games informed by up to 10 favorite titles,
  newest first
- Both variants ground the model in the catalog as ``[id, title]`` pairs and
  demand a bare JSON array of game ids as the only output
"""

import json
from typing import Any, Dict, List, Sequence

# Upper bound on favorites fed into the prompt
MAX_FAVORITES_IN_PROMPT = 10

OUTPUT_INSTRUCTION = (
    "Return the result only as a JSON array of game IDs (numbers) "
    "without any text, explanation, or extra formatting."
)


def _format_catalog(games: Sequence[Dict[str, Any]]) -> str:
    """Render the catalog as a JSON list of [id, title] pairs."""
    pairs: List[List[Any]] = [[game.get("id"), game.get("title")] for game in games]
    return json.dumps(pairs, ensure_ascii=False)


def build_recommendation_prompt(
    games: Sequence[Dict[str, Any]],
    favorite_titles: Sequence[str],
) -> str:
    """
    Build the Gemini prompt for a recommendation request.

    Args:
        games: Catalog rows with at least ``id`` and ``title``
        favorite_titles: Favorite game titles, most recent first. Only the
            first MAX_FAVORITES_IN_PROMPT are used.

    Returns:
        str: Prompt text ready to be sent to Gemini
    """
    catalog = _format_catalog(games)
    titles = [title for title in favorite_titles if title][:MAX_FAVORITES_IN_PROMPT]

    if not titles:
        return f"""The user has no favorite games. Please recommend 3-5 popular games from the full catalog below.

<catalog format="[[id, title]]">
{catalog}
</catalog>

{OUTPUT_INSTRUCTION}"""

    favorites_list = ", ".join(titles)

    return f"""Based on the user's favorite games: {favorites_list}. Provide 3-5 game recommendations.
Use the following game data as your reference when generating recommendations.

<catalog format="[[id, title]]">
{catalog}
</catalog>

{OUTPUT_INSTRUCTION}"""


def build_prompt_summary(favorites_count: int) -> str:
    """Short description stored on the ai_request row instead of the full prompt."""
    return f"Auto-generated based on {favorites_count} favorite games"
