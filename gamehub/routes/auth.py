"""
Auth API endpoints.

Registration, login and token issuance are handled by Supabase Auth; this
backend only verifies bearer tokens.

- GET /auth/me - Identity resolved from the bearer token
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status

from gamehub.auth.dependencies import AuthenticatedUser, get_authenticated_user
from gamehub.schemas.auth import AuthIdentity, AuthMeResponse
from gamehub.schemas.common import ErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.get(
    "/me",
    response_model=AuthMeResponse,
    status_code=status.HTTP_200_OK,
    summary="Get authenticated user identity",
    description="""
    Returns the user id and email carried by the bearer token.

    Use this on app boot to confirm the stored token is still valid.
    """,
    responses={401: {"model": ErrorResponse, "description": "Missing or invalid token"}},
)
async def get_auth_me(
    auth_user: Annotated[AuthenticatedUser, Depends(get_authenticated_user)]
) -> AuthMeResponse:
    logger.debug(f"GET /auth/me for user_id={auth_user.user_id}")

    return AuthMeResponse(
        message="User profile retrieved successfully",
        data=AuthIdentity(id=auth_user.user_id, email=auth_user.email),
    )
