# src/tunein_stage/models/vote.py
"""Models capturing voting interactions on posts."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Index,
    SmallInteger,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column

from tunein_stage.db.session import Base
from tunein_stage.db.time import utcnow


class PostVote(Base):
    """Per-user signed vote on a post.

    Rows are only ever inserted or deleted; a change of mind is a delete
    followed by an insert so the score delta is always +/- the stored value.
    """

    __tablename__ = "post_vote"
    __table_args__ = (
        CheckConstraint("vote_value IN (1, -1)", name="ck_post_vote_value"),
        UniqueConstraint("user_id", "post_id", name="uq_post_vote_user_post"),
        Index("ix_post_vote_post_id", "post_id"),
    )

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    post_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("post.id", ondelete="CASCADE"),
        nullable=False,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("app_user.id", ondelete="CASCADE"),
        nullable=False,
    )

    # 1 = upvote, -1 = downvote.
    vote_value: Mapped[int] = mapped_column(SmallInteger, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
