# src/tunein_stage/schemas/vote.py
"""Vote-related Pydantic schemas."""

import uuid
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class VoteCreate(BaseModel):
    """Schema for casting or toggling a vote."""

    post_id: uuid.UUID
    vote_value: Literal[-1, 1] = Field(..., description="1 for upvote, -1 for downvote")


class VoteResponse(BaseModel):
    """An active vote."""

    post_id: uuid.UUID
    vote_value: int

    model_config = ConfigDict(from_attributes=True)


class VoteToggleResponse(BaseModel):
    """Outcome of a vote-button press; ``vote_value`` is 0 when no vote remains."""

    post_id: uuid.UUID
    vote_value: int
    score: int


class MyVoteResponse(BaseModel):
    """The caller's vote on one post; 0 means no vote."""

    vote_value: int
