"""
Game catalog API endpoints.

Listing and detail are public; updating a game requires authentication.
"""

import logging
import math
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Path, Query, status

from gamehub.auth.dependencies import AuthenticatedUser, get_authenticated_user
from gamehub.db.client import get_public_supabase_client, get_supabase_client
from gamehub.schemas.common import ErrorResponse
from gamehub.schemas.games import (
    GameDetailResponse,
    GameListResponse,
    GameResponse,
    GameUpdateRequest,
    GameUpdateResponse,
    PaginationInfo,
)
from gamehub.services.game_service import get_game_by_id, list_games, update_game
from gamehub.utils.errors import ForbiddenError, GameHubError, NotFoundError

logger = logging.getLogger(__name__)

ADMIN_ROLE = "admin"

router = APIRouter(prefix="/games", tags=["games"])


@router.get(
    "",
    response_model=GameListResponse,
    status_code=status.HTTP_200_OK,
    summary="List games",
    description="""
    Paginated catalog ordered by id, with optional genre filter and
    case-insensitive title search. Public endpoint.
    """
)
async def list_games_endpoint(
    page: int = Query(1, ge=1, description="Page number"),
    limit: int = Query(12, ge=1, le=100, description="Items per page"),
    genre: Optional[str] = Query(None, description="Filter by genre"),
    q: Optional[str] = Query(None, max_length=100, description="Search by title"),
) -> GameListResponse:
    supabase_client = get_public_supabase_client()

    try:
        games, total = await list_games(supabase_client, page=page, limit=limit, genre=genre, q=q)
    except Exception as e:
        logger.error(f"Failed to list games: {e}", exc_info=True)
        raise GameHubError("Failed to retrieve games") from e

    total_pages = math.ceil(total / limit) if total else 0

    return GameListResponse(
        message="Games successfully retrieved.",
        data=[GameResponse.model_validate(game) for game in games],
        pagination=PaginationInfo(
            current_page=page,
            total_pages=total_pages,
            total_items=total,
            items_per_page=limit,
            has_next_page=page < total_pages,
        ),
    )


@router.get(
    "/{game_id}",
    response_model=GameDetailResponse,
    status_code=status.HTTP_200_OK,
    summary="Get game details",
    responses={404: {"model": ErrorResponse, "description": "Game not found"}},
)
async def get_game_endpoint(
    game_id: int = Path(..., ge=1, description="Catalog game id"),
) -> GameDetailResponse:
    supabase_client = get_public_supabase_client()

    try:
        game = await get_game_by_id(supabase_client, game_id)
    except Exception as e:
        logger.error(f"Failed to fetch game {game_id}: {e}", exc_info=True)
        raise GameHubError("Failed to retrieve game") from e

    if game is None:
        raise NotFoundError("Game not found.")

    return GameDetailResponse(
        message="Game details successfully retrieved.",
        data=GameResponse.model_validate(game),
    )


@router.put(
    "/{game_id}",
    response_model=GameUpdateResponse,
    status_code=status.HTTP_200_OK,
    summary="Update a game",
    description="""
    Update editable fields of a catalog entry (admin edit page).
    Only provided fields are changed.

    Security:
    - Requires valid Authorization Bearer token
    - Requires the admin role (app_metadata.role) in the token
    - RLS on the game table should also restrict writes to admins
    """,
    responses={
        401: {"model": ErrorResponse, "description": "Missing or invalid token"},
        403: {"model": ErrorResponse, "description": "User is not an admin"},
        404: {"model": ErrorResponse, "description": "Game not found"},
    },
)
async def update_game_endpoint(
    request: GameUpdateRequest,
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)],
    game_id: int = Path(..., ge=1, description="Catalog game id"),
) -> GameUpdateResponse:
    logger.info(f"User {auth_user.user_id} updating game {game_id}")

    if auth_user.role != ADMIN_ROLE:
        logger.warning(f"User {auth_user.user_id} is not an admin, game {game_id} not updated")
        raise ForbiddenError("User not authorized.")

    supabase_client = get_supabase_client(auth_user.access_token)

    try:
        updated = await update_game(
            supabase_client,
            game_id,
            request.model_dump(exclude_none=True),
        )
    except Exception as e:
        logger.error(f"Failed to update game {game_id}: {e}", exc_info=True)
        raise GameHubError("Failed to update game") from e

    if updated is None:
        raise NotFoundError("Game not found.")

    return GameUpdateResponse(
        message="Game updated successfully.",
        data=GameResponse.model_validate(updated),
    )
