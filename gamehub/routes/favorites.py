"""
Favorites API endpoints.

Favorites link the authenticated user to catalog games. They are the input
of the recommendation prompt, so clients refresh recommendations in the
background after every successful add or remove.
"""

import logging
from typing import Annotated, Any, Dict

from fastapi import APIRouter, Depends, Path, status

from gamehub.auth.dependencies import AuthenticatedUser, get_authenticated_user
from gamehub.db.client import get_supabase_client
from gamehub.schemas.common import ErrorResponse
from gamehub.schemas.favorites import (
    FavoriteCreateResponse,
    FavoriteDeleteResponse,
    FavoriteListResponse,
    FavoriteRemoved,
    FavoriteResponse,
)
from gamehub.services.favorite_service import (
    add_favorite,
    get_user_favorites,
    remove_favorite,
)
from gamehub.utils.errors import GameHubError

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/favorites",
    tags=["favorites"],
    responses={401: {"model": ErrorResponse, "description": "Missing or invalid token"}},
)


def _to_favorite_response(row: Dict[str, Any]) -> FavoriteResponse:
    return FavoriteResponse(
        id=row["id"],
        user_id=str(row.get("user_id")),
        game_id=row["game_id"],
        created_at=str(row["created_at"]) if row.get("created_at") else None,
        game=row.get("game"),
    )


@router.get(
    "",
    response_model=FavoriteListResponse,
    status_code=status.HTTP_200_OK,
    summary="List user favorites",
    description="""
    Retrieve all favorite games of the authenticated user, newest first,
    with the catalog entry embedded.

    Security:
    - Requires valid Authorization Bearer token
    - RLS ensures users only see their own favorites
    """
)
async def list_favorites(
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)]
) -> FavoriteListResponse:
    logger.info(f"Listing favorites for user {auth_user.user_id}")

    supabase_client = get_supabase_client(auth_user.access_token)

    try:
        favorites = await get_user_favorites(supabase_client, auth_user.user_id)
    except Exception as e:
        logger.error(f"Failed to list favorites for user {auth_user.user_id}: {e}", exc_info=True)
        raise GameHubError("Failed to load favorites") from e

    data = [_to_favorite_response(row) for row in favorites]

    return FavoriteListResponse(
        message="User's favorite list successfully retrieved.",
        data=data,
        total=len(data),
    )


@router.post(
    "/{game_id}",
    response_model=FavoriteCreateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add game to favorites",
    responses={
        400: {"model": ErrorResponse, "description": "Already a favorite"},
        404: {"model": ErrorResponse, "description": "Game not found"},
    },
)
async def create_favorite(
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)],
    game_id: int = Path(..., ge=1, description="Catalog game id"),
) -> FavoriteCreateResponse:
    """Add a game to the user's favorites."""
    logger.info(f"User {auth_user.user_id} adding game {game_id} to favorites")

    supabase_client = get_supabase_client(auth_user.access_token)

    try:
        favorite = await add_favorite(supabase_client, auth_user.user_id, game_id)
    except GameHubError:
        raise
    except Exception as e:
        logger.error(f"Failed to add favorite for user {auth_user.user_id}: {e}", exc_info=True)
        raise GameHubError("Failed to add to favorites") from e

    return FavoriteCreateResponse(
        message="Game successfully added to favorites.",
        data=_to_favorite_response(favorite),
    )


@router.delete(
    "/{game_id}",
    response_model=FavoriteDeleteResponse,
    status_code=status.HTTP_200_OK,
    summary="Remove game from favorites",
    responses={404: {"model": ErrorResponse, "description": "Favorite not found"}},
)
async def delete_favorite(
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)],
    game_id: int = Path(..., ge=1, description="Catalog game id"),
) -> FavoriteDeleteResponse:
    """Remove a game from the user's favorites."""
    logger.info(f"User {auth_user.user_id} removing game {game_id} from favorites")

    supabase_client = get_supabase_client(auth_user.access_token)

    try:
        await remove_favorite(supabase_client, auth_user.user_id, game_id)
    except GameHubError:
        raise
    except Exception as e:
        logger.error(f"Failed to remove favorite for user {auth_user.user_id}: {e}", exc_info=True)
        raise GameHubError("Failed to remove from favorites") from e

    return FavoriteDeleteResponse(
        message="Game successfully removed from favorites.",
        data=FavoriteRemoved(game_id=game_id, user_id=auth_user.user_id),
    )
