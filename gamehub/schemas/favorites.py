"""
Pydantic schemas for favorites endpoints.

A favorite links the authenticated user to a catalog game. Adding or removing
one is what triggers the client's background recommendation refresh.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from gamehub.schemas.common import GameSummary


class FavoriteResponse(BaseModel):
    id: int = Field(..., description="Favorite row id")
    user_id: str
    game_id: int
    created_at: Optional[str] = None
    game: Optional[GameSummary] = Field(
        None,
        description="Embedded catalog entry (present on list responses)"
    )


class FavoriteListResponse(BaseModel):
    success: bool = True
    message: str = Field(..., examples=["User's favorite list successfully retrieved."])
    data: List[FavoriteResponse]
    total: int = Field(..., ge=0)


class FavoriteCreateResponse(BaseModel):
    success: bool = True
    message: str = Field(..., examples=["Game successfully added to favorites."])
    data: FavoriteResponse


class FavoriteRemoved(BaseModel):
    game_id: int
    user_id: str


class FavoriteDeleteResponse(BaseModel):
    success: bool = True
    message: str = Field(..., examples=["Game successfully removed from favorites."])
    data: FavoriteRemoved
