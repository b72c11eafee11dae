# src/tunein_stage/schemas/club.py
"""Club-related Pydantic schemas."""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from .profile import AuthorSummary


class ClubResponse(BaseModel):
    """Schema for club information returned by the API."""

    id: uuid.UUID
    name: str
    slug: str
    description: str | None
    icon: str | None

    model_config = ConfigDict(from_attributes=True)


class ClubJoinRequest(BaseModel):
    """Schema for joining several clubs at once during onboarding."""

    slugs: list[str] = Field(..., min_length=1, description="Slugs of the clubs to join")


class MemberResponse(BaseModel):
    """A club member with their public profile, when one exists."""

    user_id: uuid.UUID
    joined_at: datetime
    profile: AuthorSummary | None = None
