"""Running score maintenance for posts."""

from __future__ import annotations

import logging
import uuid

from sqlalchemy import update
from sqlalchemy.orm import Session

from tunein_stage.core.errors import NotFoundError
from tunein_stage.models import Post, PostVote

logger = logging.getLogger(__name__)


class ScoreAggregator:
    """Applies vote deltas to ``Post.score`` inside the caller's transaction.

    The update is expressed as ``score = score + delta`` in SQL, so two
    transactions voting on the same post both land regardless of the order
    in which they commit. Nothing here commits; the vote ledger owns the
    transaction boundary.
    """

    @staticmethod
    def apply_delta(db: Session, post_id: uuid.UUID, delta: int) -> None:
        """Add ``delta`` to the stored score of ``post_id``.

        Raises:
            NotFoundError: If the post row does not exist.
        """
        post = db.get(Post, post_id)
        if post is None:
            raise NotFoundError("Post not found")

        stmt = (
            update(Post)
            .where(Post.id == post_id)
            .values(score=Post.score + delta)
            .execution_options(synchronize_session=False)
        )
        db.execute(stmt)
        # Reload the cached attribute from the row on next access.
        db.expire(post, ["score"])
        logger.debug("Applied score delta %+d to post %s", delta, post_id)

    @classmethod
    def on_vote_inserted(cls, db: Session, vote: PostVote) -> None:
        """Reflect a newly inserted vote in its post's score."""
        cls.apply_delta(db, vote.post_id, vote.vote_value)

    @classmethod
    def on_vote_deleted(cls, db: Session, vote: PostVote) -> None:
        """Reflect a deleted vote in its post's score."""
        cls.apply_delta(db, vote.post_id, -vote.vote_value)
