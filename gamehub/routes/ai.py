"""
FastAPI routes for AI game recommendations.

All endpoints require authentication via Supabase Auth.

Endpoints:
- GET /ai/recommend: Force a fresh Gemini recommendation
- GET /ai/history: Latest cached recommendation, generated on first visit
- DELETE /ai/history/{request_id}: Delete one history entry
"""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Path, Response, status

from gamehub.agents.recommendation.generator import TextGenerator, get_text_generator
from gamehub.auth.dependencies import AuthenticatedUser, get_authenticated_user
from gamehub.db.client import get_supabase_client
from gamehub.schemas.common import ErrorResponse
from gamehub.schemas.recommendations import (
    HistoryDeleteResponse,
    HistoryEntryRef,
    RecommendationData,
    RecommendationHistoryResponse,
    RecommendationResponse,
)
from gamehub.services.recommendation_service import (
    RecommendationResult,
    delete_history_entry,
    get_recommendation_history,
    recommend_games,
)
from gamehub.utils.errors import GameHubError

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/ai",
    tags=["ai"],
    responses={
        401: {"model": ErrorResponse, "description": "Missing or invalid token"},
        500: {"model": ErrorResponse, "description": "Generation failed"},
    },
)


def _to_recommendation_data(result: RecommendationResult) -> RecommendationData:
    return RecommendationData(
        id=result.ai_request.get("id"),
        recommendations=result.recommended_games,
        game_ids=result.game_ids,
        based_on_favorites=result.based_on_favorites,
        created_at=result.ai_request.get("created_at"),
    )


@router.get(
    "/recommend",
    response_model=RecommendationResponse,
    status_code=status.HTTP_200_OK,
    summary="Generate fresh game recommendations",
    description="""
    Always asks Gemini for new recommendations based on the user's 10 most
    recent favorites (or popular picks when there are none), stores the
    result as a new history entry and returns the hydrated games.

    **Authentication:** Required (Bearer token)

    **Client usage:**
    Called in the background after every favorite add/remove, with up to
    3 retries on 5xx, timeout or network failures (see gamehub.client).
    """
)
async def recommend_endpoint(
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)],
    text_generator: Annotated[Optional[TextGenerator], Depends(get_text_generator)],
) -> RecommendationResponse:
    logger.info(f"GET /ai/recommend called by user_id={auth_user.user_id}")

    supabase_client = get_supabase_client(auth_user.access_token)

    try:
        result = await recommend_games(
            supabase_client=supabase_client,
            user_id=auth_user.user_id,
            text_generator=text_generator,
        )
    except GameHubError:
        raise
    except Exception as e:
        logger.error(f"Failed to generate recommendations for user {auth_user.user_id}: {e}", exc_info=True)
        raise GameHubError("Failed to get recommendations from Gemini API") from e

    return RecommendationResponse(
        message="Game recommendations retrieved successfully",
        data=_to_recommendation_data(result),
    )


@router.get(
    "/history",
    response_model=RecommendationHistoryResponse,
    status_code=status.HTTP_200_OK,
    summary="Get cached recommendations (or generate the first ones)",
    description="""
    Returns the user's most recent recommendation entry.

    - **200, source="cache"**: the latest stored entry was served as-is
    - **201, source="generated"**: no usable entry existed, a new one was generated

    Stored entries never expire; use GET /ai/recommend to refresh.

    **Authentication:** Required (Bearer token)
    """,
    responses={201: {"model": RecommendationHistoryResponse, "description": "Generated on first visit"}},
)
async def history_endpoint(
    response: Response,
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)],
    text_generator: Annotated[Optional[TextGenerator], Depends(get_text_generator)],
) -> RecommendationHistoryResponse:
    logger.info(f"GET /ai/history called by user_id={auth_user.user_id}")

    supabase_client = get_supabase_client(auth_user.access_token)

    try:
        source, result = await get_recommendation_history(
            supabase_client=supabase_client,
            user_id=auth_user.user_id,
            text_generator=text_generator,
        )
    except GameHubError:
        raise
    except Exception as e:
        logger.error(f"Failed to load AI history for user {auth_user.user_id}: {e}", exc_info=True)
        raise GameHubError("Failed to generate AI recommendation") from e

    if source == "cache":
        message = "Loaded from previous AI request"
    else:
        response.status_code = status.HTTP_201_CREATED
        message = "No history found. New AI recommendation generated successfully"

    logger.info(f"Returning AI history with source={source}")

    return RecommendationHistoryResponse(
        source=source,
        message=message,
        data=_to_recommendation_data(result),
    )


@router.delete(
    "/history/{request_id}",
    response_model=HistoryDeleteResponse,
    status_code=status.HTTP_200_OK,
    summary="Delete a recommendation history entry",
    description="""
    Deletes one stored recommendation entry.

    - **403** when the entry belongs to another user (entry is kept)
    - **404** when the entry does not exist

    **Authentication:** Required (Bearer token)
    """,
    responses={
        403: {"model": ErrorResponse, "description": "Entry owned by another user"},
        404: {"model": ErrorResponse, "description": "Entry not found"},
    },
)
async def delete_history_endpoint(
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)],
    request_id: int = Path(..., ge=1, description="ai_request id"),
) -> HistoryDeleteResponse:
    logger.info(f"DELETE /ai/history/{request_id} called by user_id={auth_user.user_id}")

    supabase_client = get_supabase_client(auth_user.access_token)

    try:
        deleted_id = await delete_history_entry(
            supabase_client=supabase_client,
            user_id=auth_user.user_id,
            request_id=request_id,
        )
    except GameHubError:
        raise
    except Exception as e:
        logger.error(f"Failed to delete ai_request {request_id}: {e}", exc_info=True)
        raise GameHubError("Failed to delete AI request") from e

    return HistoryDeleteResponse(
        message="AI request successfully deleted",
        data=HistoryEntryRef(id=deleted_id),
    )
