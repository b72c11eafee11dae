# src/tunein_stage/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    clubs_router,
    posts_router,
    profiles_router,
    votes_router,
)

__all__ = [
    "clubs_router",
    "posts_router",
    "profiles_router",
    "votes_router",
]
