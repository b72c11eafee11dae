# tests/test_post_service.py
"""Tests for post creation and listing."""

from __future__ import annotations

import uuid
from datetime import timedelta

import pytest

from tunein_stage.core.errors import AuthorizationError, NotFoundError, ValidationError
from tunein_stage.db.time import utcnow
from tunein_stage.services import post_service
from tunein_stage.services.feed_ranker import RankMode, TopWindow


def test_member_creates_post(db_session, test_user, tech_club, membership) -> None:
    post = post_service.create_post(
        db_session, test_user.id, tech_club, "  Hello tech  ", "  Some content  "
    )

    assert post.title == "Hello tech"
    assert post.content == "Some content"
    assert post.score == 0
    assert post.club_id == tech_club.id


def test_blank_content_is_stored_as_null(db_session, test_user, tech_club, membership) -> None:
    post = post_service.create_post(db_session, test_user.id, tech_club, "Title only", "   ")

    assert post.content is None


def test_blank_title_rejected(db_session, test_user, tech_club, membership) -> None:
    with pytest.raises(ValidationError, match="Title is required"):
        post_service.create_post(db_session, test_user.id, tech_club, "   ")


def test_non_member_cannot_post(db_session, other_user, tech_club) -> None:
    with pytest.raises(AuthorizationError):
        post_service.create_post(db_session, other_user.id, tech_club, "Hello")


def test_get_post(db_session, test_post) -> None:
    assert post_service.get_post(db_session, test_post.id).title == test_post.title
    with pytest.raises(NotFoundError):
        post_service.get_post(db_session, uuid.uuid4())


def test_list_club_posts_newest_first(db_session, make_post, clubs, tech_club, test_user) -> None:
    now = utcnow()
    older = make_post(tech_club, test_user, title="older", created_at=now - timedelta(days=2))
    newer = make_post(tech_club, test_user, title="newer", created_at=now)
    make_post(clubs["music"], test_user, title="elsewhere")

    rows = post_service.list_club_posts(db_session, tech_club)

    assert [post.id for post, _ in rows] == [newer.id, older.id]
    assert all(profile.username == "test_user" for _, profile in rows)
    assert len(post_service.list_club_posts(db_session, tech_club, limit=1)) == 1


def test_to_post_response_embeds_author(db_session, test_post, tech_club) -> None:
    rows = post_service.list_club_posts(db_session, tech_club)
    post, profile = rows[0]

    response = post_service.to_post_response(post, profile)

    assert response.id == test_post.id
    assert response.author.username == "test_user"
    assert post_service.to_post_response(post).author is None


def test_list_club_posts_top_mode_orders_by_score_before_limit(
    db_session, make_post, tech_club, test_user
) -> None:
    now = utcnow()
    best = make_post(tech_club, test_user, title="best", score=7, created_at=now - timedelta(days=50))
    make_post(tech_club, test_user, title="recent", score=0, created_at=now)
    tied = make_post(tech_club, test_user, title="tied", score=7, created_at=now - timedelta(days=5))

    rows = post_service.list_club_posts(db_session, tech_club, limit=2, mode=RankMode.top_of())

    assert [post.id for post, _ in rows] == [tied.id, best.id]


def test_list_club_posts_top_window_excludes_old_posts(
    db_session, make_post, tech_club, test_user
) -> None:
    now = utcnow()
    make_post(tech_club, test_user, title="old", score=50, created_at=now - timedelta(days=200))
    inside = make_post(tech_club, test_user, title="inside", score=1, created_at=now - timedelta(days=10))

    rows = post_service.list_club_posts(
        db_session, tech_club, mode=RankMode.top_of(TopWindow.THREE_MONTHS), now=now
    )

    assert [post.id for post, _ in rows] == [inside.id]


def test_list_club_posts_query_matches_title_or_content(
    db_session, make_post, tech_club, test_user
) -> None:
    in_title = make_post(tech_club, test_user, title="Modular SYNTH", content=None)
    in_content = make_post(tech_club, test_user, title="Gear", content="a synth rack")
    make_post(tech_club, test_user, title="Drums", content="100% acoustic")

    rows = post_service.list_club_posts(db_session, tech_club, query="synth")
    literal = post_service.list_club_posts(db_session, tech_club, query="%")

    assert {post.id for post, _ in rows} == {in_title.id, in_content.id}
    assert [post.title for post, _ in literal] == ["Drums"]
