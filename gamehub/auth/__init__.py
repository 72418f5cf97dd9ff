"""Supabase Auth token verification dependencies."""
