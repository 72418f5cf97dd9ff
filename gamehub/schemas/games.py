"""
Pydantic schemas for the game catalog endpoints.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class GameResponse(BaseModel):
    """Full catalog entry."""
    model_config = ConfigDict(extra="ignore")

    id: int = Field(..., description="Catalog game id")
    title: str
    genre: Optional[str] = None
    platform: Optional[str] = None
    publisher: Optional[str] = None
    developer: Optional[str] = None
    description: Optional[str] = None
    thumbnail: Optional[str] = None
    game_url: Optional[str] = None
    release_date: Optional[str] = None


class PaginationInfo(BaseModel):
    """Pagination metadata for GET /games (camelCase keys on the wire)."""
    model_config = ConfigDict(populate_by_name=True)

    current_page: int = Field(..., alias="currentPage", ge=1)
    total_pages: int = Field(..., alias="totalPages", ge=0)
    total_items: int = Field(..., alias="totalItems", ge=0)
    items_per_page: int = Field(..., alias="itemsPerPage", ge=1)
    has_next_page: bool = Field(..., alias="hasNextPage")


class GameListResponse(BaseModel):
    success: bool = True
    message: str = Field(..., examples=["Games successfully retrieved."])
    data: List[GameResponse]
    pagination: PaginationInfo


class GameDetailResponse(BaseModel):
    success: bool = True
    message: str = Field(..., examples=["Game details successfully retrieved."])
    data: GameResponse


class GameUpdateRequest(BaseModel):
    """
    Editable game fields (admin edit page).

    At least one field must be provided. Omitted fields are left unchanged.
    """
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    genre: Optional[str] = Field(None, max_length=100)
    platform: Optional[str] = Field(None, max_length=100)
    publisher: Optional[str] = Field(None, max_length=255)
    developer: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = Field(None, max_length=5000)
    thumbnail: Optional[str] = Field(None, max_length=1000)
    game_url: Optional[str] = Field(None, max_length=1000)
    release_date: Optional[str] = Field(
        None,
        description="Release date (YYYY-MM-DD)",
        pattern=r"^\d{4}-\d{2}-\d{2}$",
        examples=["2013-03-25"]
    )

    @model_validator(mode="after")
    def check_at_least_one_field(self) -> "GameUpdateRequest":
        if not self.model_dump(exclude_none=True):
            raise ValueError("At least one field must be provided for update")
        return self


class GameUpdateResponse(BaseModel):
    success: bool = True
    message: str = Field(..., examples=["Game updated successfully."])
    data: GameResponse
