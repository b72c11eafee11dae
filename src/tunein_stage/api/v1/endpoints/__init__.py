# src/tunein_stage/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .clubs import router as clubs_router
from .posts import router as posts_router
from .profiles import router as profiles_router
from .votes import router as votes_router

__all__ = [
    "clubs_router",
    "posts_router",
    "profiles_router",
    "votes_router",
]
