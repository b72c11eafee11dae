# tests/test_vote_ledger.py
"""Tests for the vote ledger and its score maintenance."""

from __future__ import annotations

import random
import uuid

import pytest
from sqlalchemy import func, select, text

from tunein_stage.core.errors import ConflictError, NotFoundError, ValidationError
from tunein_stage.models import Post, PostVote
from tunein_stage.services.score_aggregator import ScoreAggregator
from tunein_stage.services.vote_ledger import VoteLedger


def _vote_sum(db_session, post_id) -> int:
    total = db_session.scalar(
        select(func.coalesce(func.sum(PostVote.vote_value), 0)).where(PostVote.post_id == post_id)
    )
    return int(total)


def _score(db_session, post: Post) -> int:
    db_session.refresh(post)
    return post.score


def test_cast_upvote_increments_score(db_session, test_post, other_user) -> None:
    ledger = VoteLedger(db_session)

    vote = ledger.cast_vote(other_user.id, test_post.id, 1)

    assert vote.vote_value == 1
    assert _score(db_session, test_post) == 1


def test_cast_downvote_decrements_score(db_session, test_post, other_user) -> None:
    VoteLedger(db_session).cast_vote(other_user.id, test_post.id, -1)

    assert _score(db_session, test_post) == -1


def test_second_cast_conflicts_and_leaves_score_alone(db_session, test_post, other_user) -> None:
    ledger = VoteLedger(db_session)
    ledger.cast_vote(other_user.id, test_post.id, 1)

    with pytest.raises(ConflictError):
        ledger.cast_vote(other_user.id, test_post.id, -1)

    assert _score(db_session, test_post) == 1
    assert ledger.get_vote(other_user.id, test_post.id).vote_value == 1


@pytest.mark.parametrize("new_value", [1, -1])
def test_recast_after_removal_succeeds(db_session, test_post, other_user, new_value) -> None:
    ledger = VoteLedger(db_session)
    ledger.cast_vote(other_user.id, test_post.id, 1)

    assert ledger.remove_vote(other_user.id, test_post.id) == 1
    ledger.cast_vote(other_user.id, test_post.id, new_value)

    assert _score(db_session, test_post) == new_value


def test_remove_without_vote_is_noop(db_session, test_post, other_user) -> None:
    assert VoteLedger(db_session).remove_vote(other_user.id, test_post.id) is None
    assert _score(db_session, test_post) == 0


@pytest.mark.parametrize("value", [0, 2, -2, True])
def test_invalid_vote_value_rejected(db_session, test_post, other_user, value) -> None:
    with pytest.raises(ValidationError):
        VoteLedger(db_session).cast_vote(other_user.id, test_post.id, value)


def test_vote_on_missing_post(db_session, other_user) -> None:
    with pytest.raises(NotFoundError):
        VoteLedger(db_session).cast_vote(other_user.id, uuid.uuid4(), 1)


def test_non_member_can_vote(db_session, test_post, make_user) -> None:
    """Voting does not require membership of the post's club."""
    outsider = make_user("outsider")

    VoteLedger(db_session).cast_vote(outsider.id, test_post.id, 1)

    assert _score(db_session, test_post) == 1


def test_toggle_inserts_removes_and_replaces(db_session, test_post, other_user) -> None:
    ledger = VoteLedger(db_session)

    assert ledger.toggle_vote(other_user.id, test_post.id, 1) == 1
    assert _score(db_session, test_post) == 1

    assert ledger.toggle_vote(other_user.id, test_post.id, -1) == -1
    assert _score(db_session, test_post) == -1

    assert ledger.toggle_vote(other_user.id, test_post.id, -1) == 0
    assert _score(db_session, test_post) == 0
    assert ledger.get_vote(other_user.id, test_post.id) is None


def test_votes_for_club_only_returns_callers_votes(
    db_session, test_post, make_post, clubs, test_user, other_user
) -> None:
    music_post = make_post(clubs["music"], test_user, title="Music post")
    ledger = VoteLedger(db_session)
    ledger.cast_vote(other_user.id, test_post.id, 1)
    ledger.cast_vote(other_user.id, music_post.id, -1)
    ledger.cast_vote(test_user.id, test_post.id, 1)

    votes = ledger.votes_for_club(other_user.id, clubs["tech"].id)

    assert [(v.post_id, v.vote_value) for v in votes] == [(test_post.id, 1)]


def test_score_matches_vote_sum_after_random_operations(
    db_session, make_post, make_user, tech_club, test_user
) -> None:
    rng = random.Random(1234)
    posts = [make_post(tech_club, test_user, title=f"Post {i}") for i in range(3)]
    voters = [make_user(f"voter_{i}") for i in range(5)]
    ledger = VoteLedger(db_session)

    for _ in range(120):
        voter = rng.choice(voters)
        post = rng.choice(posts)
        op = rng.choice(["cast", "remove", "toggle"])
        value = rng.choice([1, -1])
        if op == "cast":
            try:
                ledger.cast_vote(voter.id, post.id, value)
            except ConflictError:
                pass
        elif op == "remove":
            ledger.remove_vote(voter.id, post.id)
        else:
            ledger.toggle_vote(voter.id, post.id, value)

    for post in posts:
        assert _score(db_session, post) == _vote_sum(db_session, post.id)


def test_apply_delta_adds_to_stored_score(db_session, test_post) -> None:
    """Deltas add to the row's current value, not to a stale in-memory copy."""
    db_session.execute(text("UPDATE post SET score = 10"))

    ScoreAggregator.apply_delta(db_session, test_post.id, 1)
    ScoreAggregator.apply_delta(db_session, test_post.id, 1)
    db_session.commit()

    assert _score(db_session, test_post) == 12


def test_apply_delta_on_missing_post(db_session) -> None:
    with pytest.raises(NotFoundError):
        ScoreAggregator.apply_delta(db_session, uuid.uuid4(), 1)


class _ExplodingAggregator(ScoreAggregator):
    @classmethod
    def on_vote_inserted(cls, db, vote) -> None:
        raise RuntimeError("boom")


def test_failed_score_update_rolls_back_vote(db_session, test_post, other_user) -> None:
    ledger = VoteLedger(db_session, aggregator=_ExplodingAggregator)

    with pytest.raises(RuntimeError):
        ledger.cast_vote(other_user.id, test_post.id, 1)

    assert ledger.get_vote(other_user.id, test_post.id) is None
    assert _score(db_session, test_post) == 0
