"""
Shared Pydantic models: the error envelope and the game summary record
embedded in favorites and recommendation responses.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ErrorResponse(BaseModel):
    """Body of every non-2xx response produced by the centralized handlers."""
    success: bool = Field(False, description="Always false for errors")
    message: str = Field(..., description="Human readable error message")


class GameSummary(BaseModel):
    """Catalog entry as shown on cards (favorites, recommendations)."""
    model_config = ConfigDict(extra="ignore")

    id: int = Field(..., description="Catalog game id", examples=[12])
    title: str = Field(..., description="Game title", examples=["Warframe"])
    genre: Optional[str] = Field(None, examples=["Shooter"])
    platform: Optional[str] = Field(None, examples=["PC (Windows)"])
    publisher: Optional[str] = Field(None, examples=["Digital Extremes"])
    thumbnail: Optional[str] = Field(None, description="Thumbnail image URL")
