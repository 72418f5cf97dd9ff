"""
Database access layer for GameHub Insight backend.

Tables (owned by Supabase migrations, not defined here):
- game: the catalog
- favorite: user -> game associations, ordered by created_at
- ai_request: append-only recommendation history
"""

from .client import get_public_supabase_client, get_supabase_client

__all__ = ["get_supabase_client", "get_public_supabase_client"]
