# src/tunein_stage/schemas/profile.py
"""Profile-related Pydantic schemas."""

import uuid
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ProfileCreate(BaseModel):
    """Schema for onboarding a new profile."""

    username: str = Field(..., description="3-30 letters, numbers or underscores")
    bio: str | None = Field(None, description="Short self description (max 160 characters)")
    avatar_url: str | None = Field(None, description="Pre-uploaded avatar URL")


class ProfileUpdate(BaseModel):
    """Schema for partial profile updates; unset fields are left untouched."""

    username: str | None = None
    bio: str | None = None
    avatar_url: str | None = None


class ProfileResponse(BaseModel):
    """Schema for profile information returned by the API."""

    id: uuid.UUID
    user_id: uuid.UUID
    username: str
    avatar_url: str | None
    bio: str | None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AuthorSummary(BaseModel):
    """Minimal profile fields embedded in posts and member lists."""

    username: str
    avatar_url: str | None

    model_config = ConfigDict(from_attributes=True)


class UsernameAvailabilityResponse(BaseModel):
    """Result of a username availability probe."""

    username: str
    available: bool
    reason: str | None = None
