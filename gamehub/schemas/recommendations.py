"""
Pydantic schemas for the AI recommendation endpoints.

Response keys inside ``data`` are camelCase on the wire (gameIds,
basedOnFavorites, createdAt) to match the web client.
"""

from typing import List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from gamehub.schemas.common import GameSummary


class RecommendationData(BaseModel):
    """One recommendation set (a single ai_request row, hydrated)."""
    model_config = ConfigDict(populate_by_name=True)

    id: Union[int, str] = Field(..., description="ai_request id")
    recommendations: List[GameSummary] = Field(
        ...,
        description="Recommended games in model order; ids missing from the catalog are omitted"
    )
    game_ids: List[int] = Field(
        ...,
        alias="gameIds",
        description="Raw game ids returned by the model"
    )
    based_on_favorites: Optional[int] = Field(
        None,
        alias="basedOnFavorites",
        ge=0,
        description="Number of favorites used in the prompt (fresh generations only)"
    )
    created_at: Optional[str] = Field(None, alias="createdAt")


class RecommendationResponse(BaseModel):
    """Response for GET /ai/recommend."""
    success: bool = True
    message: str = Field(..., examples=["Game recommendations retrieved successfully"])
    data: RecommendationData


class RecommendationHistoryResponse(BaseModel):
    """
    Response for GET /ai/history.

    source="cache" (HTTP 200) when the latest stored row was served,
    source="generated" (HTTP 201) when a new row had to be created.
    """
    success: bool = True
    source: Literal["cache", "generated"]
    message: str
    data: RecommendationData


class HistoryEntryRef(BaseModel):
    id: Union[int, str]


class HistoryDeleteResponse(BaseModel):
    """Response for DELETE /ai/history/{id}."""
    success: bool = True
    message: str = Field(..., examples=["AI request successfully deleted"])
    data: HistoryEntryRef
