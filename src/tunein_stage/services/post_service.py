"""Service-level helpers for creating and reading posts."""
from __future__ import annotations

import logging
import uuid
from datetime import datetime

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from tunein_stage.core.errors import NotFoundError, ValidationError
from tunein_stage.models import Club, Post, Profile
from tunein_stage.schemas.post import PostResponse
from tunein_stage.schemas.profile import AuthorSummary
from tunein_stage.db.time import utcnow
from tunein_stage.services.authorization import Action, authorize
from tunein_stage.services.feed_ranker import RankMode

TITLE_MAX_LENGTH = 300
CONTENT_MAX_LENGTH = 10_000

logger = logging.getLogger(__name__)


def create_post(
    db: Session,
    actor_id: uuid.UUID,
    club: Club,
    title: str,
    content: str | None = None,
) -> Post:
    """Publish a post in ``club`` on behalf of ``actor_id``.

    Args:
        db: Database session.
        actor_id: Authenticated author.
        club: Target club; the author must be a member.
        title: Required headline, trimmed.
        content: Optional body, trimmed; blank is stored as null.

    Raises:
        ValidationError: If the title is blank or either field is too long.
        AuthorizationError: If the author is not a member of the club.
    """
    title = title.strip()
    if not title:
        raise ValidationError("Title is required")
    if len(title) > TITLE_MAX_LENGTH:
        raise ValidationError(f"Title must be at most {TITLE_MAX_LENGTH} characters")

    body = content.strip() if content else None
    if body and len(body) > CONTENT_MAX_LENGTH:
        raise ValidationError(f"Content must be at most {CONTENT_MAX_LENGTH} characters")

    post = Post(club_id=club.id, user_id=actor_id, title=title, content=body or None)
    authorize(db, actor_id, post, Action.INSERT)

    db.add(post)
    db.commit()
    db.refresh(post)
    logger.info("User %s created post %s in club %s", actor_id, post.id, club.slug)
    return post


def get_post(db: Session, post_id: uuid.UUID) -> Post:
    """Return a post by id or raise :class:`NotFoundError`."""
    post = db.get(Post, post_id)
    if post is None:
        raise NotFoundError("Post not found")
    return post


def list_club_posts(
    db: Session,
    club: Club,
    limit: int | None = None,
    mode: RankMode | None = None,
    query: str | None = None,
    now: datetime | None = None,
) -> list[tuple[Post, Profile | None]]:
    """Return a club's posts, each with its author's profile.

    Without ``mode`` the rows come newest first. For a Top mode only posts
    inside its window are selected and the rows come highest score first,
    newest first among equal scores. ``query`` keeps posts whose title or
    content contains it, ignoring case.
    ``limit`` applies after ordering and filtering.
    """
    stmt = (
        select(Post, Profile)
        .outerjoin(Profile, Profile.user_id == Post.user_id)
        .where(Post.club_id == club.id)
    )
    if query:
        stmt = stmt.where(
            or_(
                Post.title.icontains(query, autoescape=True),
                Post.content.icontains(query, autoescape=True),
            )
        )

    if mode is not None and mode.top:
        window = mode.window.value
        if window is not None:
            reference = now if now is not None else utcnow()
            stmt = stmt.where(Post.created_at > reference - window)
        stmt = stmt.order_by(Post.score.desc(), Post.created_at.desc())
    else:
        stmt = stmt.order_by(Post.created_at.desc())

    if limit is not None:
        stmt = stmt.limit(limit)
    return [(post, profile) for post, profile in db.execute(stmt).all()]


def to_post_response(post: Post, author: Profile | None = None) -> PostResponse:
    """Convert a Post ORM instance (and its author's profile) to an API schema."""
    return PostResponse(
        id=post.id,
        club_id=post.club_id,
        user_id=post.user_id,
        title=post.title,
        content=post.content,
        score=post.score,
        created_at=post.created_at,
        author=AuthorSummary.model_validate(author) if author is not None else None,
    )
