# src/tunein_stage/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .club import ClubJoinRequest, ClubResponse, MemberResponse
from .post import FeedResponse, PostCreate, PostResponse
from .profile import (
    AuthorSummary,
    ProfileCreate,
    ProfileResponse,
    ProfileUpdate,
    UsernameAvailabilityResponse,
)
from .vote import MyVoteResponse, VoteCreate, VoteResponse, VoteToggleResponse

__all__ = [
    "ClubJoinRequest", "ClubResponse", "MemberResponse",
    "FeedResponse", "PostCreate", "PostResponse",
    "AuthorSummary", "ProfileCreate", "ProfileResponse", "ProfileUpdate",
    "UsernameAvailabilityResponse",
    "MyVoteResponse", "VoteCreate", "VoteResponse", "VoteToggleResponse",
]
