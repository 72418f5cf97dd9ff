"""
Recommendation Service - Gemini over the game catalog

Implements the cache-or-generate flow behind the /ai endpoints.

Architecture:
- Pattern: single LLM call, result cached as an appended ``ai_request`` row
- Model output: a bare JSON array of catalog game ids
- Cache: the most recent ``ai_request`` row of the user, valid until a new
  one is generated. Rows are never updated, only appended or deleted by
  their owner, so concurrent generations simply leave several rows behind.

Flow of generate_recommendation():
1. Load the catalog (id, title) and up to 10 most recent favorite titles
2. Build the prompt (no favorites -> popular picks from the full catalog)
3. Call the injected TextGenerator once (no retries at this layer)
4. Strip Markdown code fences, parse JSON, validate a non-empty id array
5. Persist a new ai_request row
6. Hydrate ids into game records, silently dropping unknown ids
"""

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Literal, Optional, Tuple, cast

from supabase import Client

from gamehub.agents.recommendation.generator import TextGenerator
from gamehub.agents.recommendation.prompts import (
    MAX_FAVORITES_IN_PROMPT,
    build_prompt_summary,
    build_recommendation_prompt,
)
from gamehub.services.favorite_service import list_recent_favorite_titles
from gamehub.services.game_service import list_catalog_titles, list_games_by_ids
from gamehub.utils.errors import (
    ForbiddenError,
    GenerationNotConfiguredError,
    NotFoundError,
    RecommendationFormatError,
    RecommendationParseError,
)
from gamehub.utils.logging import preview

logger = logging.getLogger(__name__)

RecommendationSource = Literal["cache", "generated"]

_CODE_FENCE_OPEN = re.compile(r"```json\s*", re.IGNORECASE)
_CODE_FENCE = re.compile(r"```\s*")


@dataclass
class RecommendationResult:
    """One recommendation set, either freshly generated or read from cache."""
    ai_request: Dict[str, Any]
    recommended_games: List[Dict[str, Any]]
    game_ids: List[int]
    # Only known for fresh generations
    based_on_favorites: Optional[int] = None


# =============================================================================
# MODEL OUTPUT PARSING
# =============================================================================

def strip_code_fences(text: str) -> str:
    """Remove Markdown code fences (```json ... ```) wrapped around model output."""
    cleaned = text.strip()
    cleaned = _CODE_FENCE_OPEN.sub("", cleaned)
    cleaned = _CODE_FENCE.sub("", cleaned)
    return cleaned.strip()


def _coerce_game_id(value: Any) -> int:
    # bool is an int subclass but never a valid id
    if isinstance(value, bool):
        raise RecommendationFormatError()
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().isdigit():
        # isdigit also accepts superscripts and other non-decimal digits
        try:
            return int(value.strip())
        except ValueError as e:
            raise RecommendationFormatError() from e
    raise RecommendationFormatError()


def validate_game_ids(value: Any) -> List[int]:
    """
    Check that a decoded value is a non-empty array of game ids.

    Raises:
        RecommendationFormatError: Not a list, empty, or holds non-integer items
    """
    if not isinstance(value, list) or len(value) == 0:
        raise RecommendationFormatError()
    return [_coerce_game_id(item) for item in value]


def parse_game_ids(raw_text: Optional[str]) -> List[int]:
    """
    Turn raw model text into a list of game ids.

    Raises:
        RecommendationParseError: Text is not valid JSON (after fence stripping)
        RecommendationFormatError: JSON is not a non-empty array of ids
    """
    cleaned = strip_code_fences(raw_text or "")

    try:
        decoded = json.loads(cleaned)
    except json.JSONDecodeError as e:
        logger.error(f"Failed to parse Gemini response: {e} (output={preview(cleaned)})")
        raise RecommendationParseError() from e

    return validate_game_ids(decoded)


def _load_cached_game_ids(ai_request: Dict[str, Any]) -> Optional[List[int]]:
    """Decode a stored response; None when it is missing or unusable."""
    response = ai_request.get("response")
    if not response:
        return None

    try:
        return validate_game_ids(json.loads(response))
    except (json.JSONDecodeError, TypeError, ValueError, RecommendationFormatError) as e:
        logger.warning(f"Cached ai_request {ai_request.get('id')} is unusable: {e}")
        return None


# =============================================================================
# RECOMMENDATION STORE (ai_request)
# =============================================================================

async def get_latest_ai_request(supabase_client: Client, user_id: str) -> Optional[Dict[str, Any]]:
    """Most recent ai_request row of the user, or None."""
    result = (
        supabase_client.table("ai_request")
        .select("*")
        .eq("user_id", user_id)
        .order("created_at", desc=True)
        .limit(1)
        .execute()
    )

    if not result.data:
        return None
    return cast(Dict[str, Any], result.data[0])


async def get_ai_request_by_id(supabase_client: Client, request_id: int) -> Optional[Dict[str, Any]]:
    result = (
        supabase_client.table("ai_request")
        .select("*")
        .eq("id", request_id)
        .execute()
    )

    if not result.data:
        return None
    return cast(Dict[str, Any], result.data[0])


async def create_ai_request(
    supabase_client: Client,
    user_id: str,
    prompt: str,
    response: str,
) -> Dict[str, Any]:
    """Append a new ai_request row and return it."""
    result = (
        supabase_client.table("ai_request")
        .insert({"user_id": user_id, "prompt": prompt, "response": response})
        .execute()
    )

    if not result.data:
        raise Exception("ai_request insert returned no data")

    ai_request = cast(Dict[str, Any], result.data[0])
    logger.info(f"Saved ai_request {ai_request.get('id')} for user {user_id}")
    return ai_request


async def delete_ai_request(supabase_client: Client, request_id: int) -> None:
    (
        supabase_client.table("ai_request")
        .delete()
        .eq("id", request_id)
        .execute()
    )


# =============================================================================
# GENERATOR
# =============================================================================

async def generate_recommendation(
    supabase_client: Client,
    user_id: str,
    text_generator: Optional[TextGenerator],
) -> RecommendationResult:
    """
    Produce and persist a fresh recommendation for a user.

    Args:
        supabase_client: Authenticated Supabase client
        user_id: User UUID from auth token
        text_generator: Gemini wrapper, or None when GOOGLE_API_KEY is missing

    Returns:
        RecommendationResult with the new ai_request row and hydrated games

    Raises:
        GenerationNotConfiguredError: No text generator configured
        UpstreamGenerationError: The Gemini call failed
        RecommendationParseError: Model output is not JSON
        RecommendationFormatError: Model output is not a non-empty id array
    """
    if text_generator is None:
        logger.error("Recommendation requested but Gemini is not configured")
        raise GenerationNotConfiguredError()

    logger.info(f"Generating recommendations for user_id={user_id}")

    games = await list_catalog_titles(supabase_client)
    favorite_titles = await list_recent_favorite_titles(
        supabase_client, user_id, limit=MAX_FAVORITES_IN_PROMPT
    )

    prompt = build_recommendation_prompt(games, favorite_titles)
    raw_text = await text_generator.generate(prompt)

    game_ids = parse_game_ids(raw_text)

    ai_request = await create_ai_request(
        supabase_client,
        user_id=user_id,
        prompt=build_prompt_summary(len(favorite_titles)),
        response=json.dumps(game_ids),
    )

    recommended_games = await list_games_by_ids(supabase_client, game_ids)

    logger.info(
        f"Generated {len(game_ids)} recommendations for user_id={user_id} "
        f"({len(recommended_games)} resolved, based on {len(favorite_titles)} favorites)"
    )

    return RecommendationResult(
        ai_request=ai_request,
        recommended_games=recommended_games,
        game_ids=game_ids,
        based_on_favorites=len(favorite_titles),
    )


# =============================================================================
# SERVICE OPERATIONS
# =============================================================================

async def recommend_games(
    supabase_client: Client,
    user_id: str,
    text_generator: Optional[TextGenerator],
) -> RecommendationResult:
    """Force a fresh generation, ignoring any cached row."""
    logger.info(f"recommend_games called for user_id={user_id}")
    return await generate_recommendation(supabase_client, user_id, text_generator)


async def get_recommendation_history(
    supabase_client: Client,
    user_id: str,
    text_generator: Optional[TextGenerator],
) -> Tuple[RecommendationSource, RecommendationResult]:
    """
    Serve the latest cached recommendation, generating one if needed.

    Returns:
        ("cache", result) when the latest row decodes to a valid id list,
        ("generated", result) when there is no usable row and a new one was made.

    Raises:
        Any error from generate_recommendation(), unchanged.
    """
    latest = await get_latest_ai_request(supabase_client, user_id)

    if latest is not None:
        game_ids = _load_cached_game_ids(latest)
        if game_ids is not None:
            recommended_games = await list_games_by_ids(supabase_client, game_ids)
            logger.info(f"Serving cached ai_request {latest.get('id')} for user_id={user_id}")
            return "cache", RecommendationResult(
                ai_request=latest,
                recommended_games=recommended_games,
                game_ids=game_ids,
            )

    logger.info(f"No usable AI history for user_id={user_id}. Generating new recommendation...")
    result = await generate_recommendation(supabase_client, user_id, text_generator)
    return "generated", result


async def delete_history_entry(supabase_client: Client, user_id: str, request_id: int) -> int:
    """
    Delete one ai_request row owned by the user.

    Raises:
        NotFoundError: No row with that id
        ForbiddenError: The row belongs to another user (row is kept)
    """
    ai_request = await get_ai_request_by_id(supabase_client, request_id)

    if ai_request is None:
        raise NotFoundError("AI request not found")

    if str(ai_request.get("user_id")) != str(user_id):
        logger.warning(f"User {user_id} tried to delete ai_request {request_id} owned by another user")
        raise ForbiddenError("You do not have access to delete this")

    await delete_ai_request(supabase_client, request_id)
    logger.info(f"Deleted ai_request {request_id} for user {user_id}")

    return request_id
