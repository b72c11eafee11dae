# src/tunein_stage/schemas/post.py
"""Post-related Pydantic schemas."""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .profile import AuthorSummary


class PostCreate(BaseModel):
    """Schema for creating a new post."""

    club_slug: str = Field(..., description="Slug of the club to post in")
    title: str = Field(..., min_length=1, max_length=300)
    content: str | None = Field(None, max_length=10_000, description="Optional body text")


class PostResponse(BaseModel):
    """Schema for post information returned by the API."""

    id: uuid.UUID
    club_id: uuid.UUID
    user_id: uuid.UUID
    title: str
    content: str | None
    score: int
    created_at: datetime
    author: AuthorSummary | None = None

    model_config = ConfigDict(from_attributes=True)


class FeedResponse(BaseModel):
    """A ranked, filtered slice of a club's posts."""

    club_slug: str
    sort: str
    query: str | None
    posts: list[PostResponse]
