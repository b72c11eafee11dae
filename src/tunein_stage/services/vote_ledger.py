"""Vote ledger: one signed vote per (user, post).

Every insert and delete runs the score aggregator before the same
``commit()``, so a post's score and its set of votes are never observed out
of step. Changing a vote is always a delete followed by an insert.
"""

from __future__ import annotations

import logging
import uuid

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from tunein_stage.core.errors import ConflictError, NotFoundError, ValidationError
from tunein_stage.models import Post, PostVote
from tunein_stage.services.authorization import Action, authorize
from tunein_stage.services.score_aggregator import ScoreAggregator

VALID_VOTE_VALUES = (1, -1)

logger = logging.getLogger(__name__)


def validate_vote_value(value: int) -> int:
    """Return ``value`` if it is +1 or -1, else raise :class:`ValidationError`."""
    if isinstance(value, bool) or value not in VALID_VOTE_VALUES:
        raise ValidationError("Vote value must be 1 or -1")
    return value


class VoteLedger:
    """Durable record of votes bound to a session.

    Args:
        db: Session whose transaction each public method commits.
        aggregator: Score maintenance hook; swapped out only in tests.
    """

    def __init__(self, db: Session, aggregator: type[ScoreAggregator] = ScoreAggregator) -> None:
        self.db = db
        self.aggregator = aggregator

    def _get_post(self, post_id: uuid.UUID) -> Post:
        post = self.db.get(Post, post_id)
        if post is None:
            raise NotFoundError("Post not found")
        return post

    def get_vote(self, user_id: uuid.UUID, post_id: uuid.UUID) -> PostVote | None:
        """Return the caller's active vote on a post, if any."""
        stmt = select(PostVote).where(
            PostVote.user_id == user_id,
            PostVote.post_id == post_id,
        )
        return self.db.scalars(stmt).first()

    def votes_for_club(self, user_id: uuid.UUID, club_id: uuid.UUID) -> list[PostVote]:
        """Return the caller's active votes on posts of one club."""
        stmt = (
            select(PostVote)
            .join(Post, Post.id == PostVote.post_id)
            .where(PostVote.user_id == user_id, Post.club_id == club_id)
        )
        return list(self.db.scalars(stmt))

    def _insert(self, user_id: uuid.UUID, post: Post, value: int) -> PostVote:
        vote = PostVote(post_id=post.id, user_id=user_id, vote_value=value)
        authorize(self.db, user_id, vote, Action.INSERT)

        if self.get_vote(user_id, post.id) is not None:
            raise ConflictError("You have already voted on this post")

        self.db.add(vote)
        try:
            self.db.flush()
        except IntegrityError as err:
            # Lost a race with a concurrent insert for the same pair.
            raise ConflictError("You have already voted on this post") from err

        self.aggregator.on_vote_inserted(self.db, vote)
        return vote

    def _delete(self, user_id: uuid.UUID, vote: PostVote) -> int:
        authorize(self.db, user_id, vote, Action.DELETE)
        value = vote.vote_value
        self.db.delete(vote)
        self.db.flush()
        self.aggregator.on_vote_deleted(self.db, vote)
        return value

    def cast_vote(self, user_id: uuid.UUID, post_id: uuid.UUID, value: int) -> PostVote:
        """Insert a new vote and apply its delta.

        Raises:
            ValidationError: If ``value`` is not +1 or -1.
            NotFoundError: If the post does not exist.
            ConflictError: If the user already has a vote on this post.
        """
        validate_vote_value(value)
        post = self._get_post(post_id)
        try:
            vote = self._insert(user_id, post, value)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.debug("User %s voted %+d on post %s", user_id, value, post_id)
        return vote

    def remove_vote(self, user_id: uuid.UUID, post_id: uuid.UUID) -> int | None:
        """Delete the caller's vote on a post.

        Returns:
            The removed vote value, or None when there was nothing to remove.
        """
        vote = self.get_vote(user_id, post_id)
        if vote is None:
            return None
        try:
            value = self._delete(user_id, vote)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.debug("User %s removed vote %+d from post %s", user_id, value, post_id)
        return value

    def toggle_vote(self, user_id: uuid.UUID, post_id: uuid.UUID, value: int) -> int:
        """Apply a vote-button press.

        No vote yet: insert. Same value again: remove. Opposite value: remove
        the old vote and insert the new one. All steps commit together.

        Returns:
            The caller's resulting vote value, 0 when no vote remains.
        """
        validate_vote_value(value)
        post = self._get_post(post_id)
        existing = self.get_vote(user_id, post_id)
        try:
            if existing is None:
                self._insert(user_id, post, value)
                result = value
            else:
                previous = self._delete(user_id, existing)
                if previous == value:
                    result = 0
                else:
                    self._insert(user_id, post, value)
                    result = value
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        logger.debug("User %s toggled vote on post %s to %d", user_id, post_id, result)
        return result
