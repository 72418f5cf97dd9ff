"""
Schema for the public health endpoint.
"""

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = Field("ok", examples=["ok"])
    service: str = "gamehub-backend"
    version: str = Field(..., examples=["0.1.0"])
    environment: str = Field(..., examples=["production"])
