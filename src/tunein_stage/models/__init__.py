# src/tunein_stage/models/__init__.py
"""SQLAlchemy models for the TUNE-IN application."""

from .club import Club, ClubMembership
from .post import Post
from .profile import Profile
from .user import User
from .vote import PostVote

__all__ = [
    "Club", "ClubMembership",
    "Post",
    "Profile",
    "User",
    "PostVote",
]
