"""
Supabase client factory with RLS enforcement.

Every request gets its own Supabase client carrying the caller's JWT, so
Row Level Security policies on ``favorite`` and ``ai_request`` apply with
``auth.uid()`` set to the authenticated user. The ``game`` table is readable
by everyone.
"""

import logging

from gamehub.config import settings
from supabase import Client, create_client

logger = logging.getLogger(__name__)


def get_supabase_client(access_token: str) -> Client:
    """
    Create an authenticated Supabase client for a specific user.

    Args:
        access_token: The user's JWT access token from Supabase Auth,
                      as verified in gamehub/auth/dependencies.py.

    Returns:
        An authenticated Supabase client that enforces RLS.

    Example:
        >>> client = get_supabase_client(auth_user.access_token)
        >>> client.table("favorite").select("*").execute()
    """
    client: Client = create_client(
        supabase_url=settings.SUPABASE_URL,
        supabase_key=settings.SUPABASE_PUBLISHABLE_KEY
    )

    # The token's 'sub' claim becomes auth.uid() inside RLS policies
    client.postgrest.auth(access_token)

    logger.debug("Created authenticated Supabase client with user token (RLS enforced)")

    return client


def get_public_supabase_client() -> Client:
    """
    Create an anonymous Supabase client for public catalog reads.

    Only the ``game`` table is exposed to the anon role.
    """
    return create_client(
        supabase_url=settings.SUPABASE_URL,
        supabase_key=settings.SUPABASE_PUBLISHABLE_KEY
    )
