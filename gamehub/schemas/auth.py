"""
Pydantic schemas for authentication endpoints.
"""

from typing import Optional
from pydantic import BaseModel, Field


class AuthIdentity(BaseModel):
    """Identity resolved from the bearer token."""
    id: str = Field(..., description="User UUID (from JWT 'sub' claim)")
    email: Optional[str] = Field(
        None,
        description="User's email (from JWT 'email' claim, if present)"
    )


class AuthMeResponse(BaseModel):
    """
    Response for GET /auth/me.

    Used on app boot to hydrate session state and confirm token validity.
    """
    success: bool = True
    message: str = Field(..., examples=["User profile retrieved successfully"])
    data: AuthIdentity

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "success": True,
                    "message": "User profile retrieved successfully",
                    "data": {
                        "id": "38f7d540-23fa-497a-8df2-3ab9cbe13da5",
                        "email": "user@example.com"
                    }
                }
            ]
        }
    }
