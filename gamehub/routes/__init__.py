"""
FastAPI routers for all API endpoints.

Each module defines a router for one domain (games, favorites, ai, auth).
Routers call the service layer and let gamehub.utils.errors exceptions reach
the centralized handlers in gamehub.main.
"""
