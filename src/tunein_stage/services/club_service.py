"""Club lookup and membership management."""
from __future__ import annotations

import logging
import uuid
from collections.abc import Iterable, Sequence

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from tunein_stage.core.errors import ConflictError, NotFoundError
from tunein_stage.models import Club, ClubMembership, Profile
from tunein_stage.services.authorization import Action, authorize

__all__ = [
    "DEFAULT_CLUBS",
    "list_clubs",
    "get_club_by_slug",
    "get_membership",
    "join_club",
    "leave_club",
    "join_clubs_by_slug",
    "list_members",
    "list_user_clubs",
    "seed_default_clubs",
]

# Reference data shipped with every deployment.
DEFAULT_CLUBS: tuple[dict[str, str], ...] = (
    {
        "name": "Tech",
        "slug": "tech",
        "description": "All things technology, programming, and innovation",
        "icon": "Cpu",
    },
    {
        "name": "Music",
        "slug": "music",
        "description": "Share and discuss your favorite music",
        "icon": "Music",
    },
    {
        "name": "Gaming",
        "slug": "gaming",
        "description": "Gaming discussions, reviews, and communities",
        "icon": "Gamepad2",
    },
    {
        "name": "Movies & Cinema",
        "slug": "movies",
        "description": "Film discussions, reviews, and recommendations",
        "icon": "Film",
    },
)

logger = logging.getLogger(__name__)


def list_clubs(db: Session) -> Sequence[Club]:
    """Return every club ordered by name."""
    return db.scalars(select(Club).order_by(Club.name)).all()


def get_club_by_slug(db: Session, slug: str) -> Club:
    """Return the club with ``slug`` or raise :class:`NotFoundError`."""
    club = db.scalar(select(Club).where(Club.slug == slug))
    if club is None:
        raise NotFoundError("Club not found")
    return club


def get_membership(db: Session, user_id: uuid.UUID, club_id: uuid.UUID) -> ClubMembership | None:
    """Return the membership row for a user and club, if any."""
    return db.scalar(
        select(ClubMembership).where(
            ClubMembership.user_id == user_id,
            ClubMembership.club_id == club_id,
        )
    )


def join_club(db: Session, actor_id: uuid.UUID, club: Club) -> ClubMembership:
    """Make ``actor_id`` a member of ``club``.

    Raises:
        ConflictError: If the user is already a member.
    """
    if get_membership(db, actor_id, club.id) is not None:
        raise ConflictError("Already a member of this club")

    membership = ClubMembership(user_id=actor_id, club_id=club.id)
    authorize(db, actor_id, membership, Action.INSERT)
    db.add(membership)
    try:
        db.commit()
    except IntegrityError as err:
        db.rollback()
        raise ConflictError("Already a member of this club") from err
    logger.info("User %s joined club %s", actor_id, club.slug)
    return membership


def leave_club(db: Session, actor_id: uuid.UUID, club: Club) -> None:
    """Remove ``actor_id`` from ``club``.

    Raises:
        NotFoundError: If the user is not a member.
    """
    membership = get_membership(db, actor_id, club.id)
    if membership is None:
        raise NotFoundError("Not a member of this club")

    authorize(db, actor_id, membership, Action.DELETE)
    db.delete(membership)
    db.commit()
    logger.info("User %s left club %s", actor_id, club.slug)


def join_clubs_by_slug(db: Session, actor_id: uuid.UUID, slugs: Iterable[str]) -> list[Club]:
    """Join every club whose slug is in ``slugs`` in one transaction.

    Unknown slugs are ignored and clubs already joined are skipped.

    Returns:
        Clubs for which a new membership was created.
    """
    wanted = set(slugs)
    if not wanted:
        return []

    clubs = db.scalars(select(Club).where(Club.slug.in_(wanted)).order_by(Club.name)).all()
    joined: list[Club] = []
    for club in clubs:
        if get_membership(db, actor_id, club.id) is not None:
            continue
        membership = ClubMembership(user_id=actor_id, club_id=club.id)
        authorize(db, actor_id, membership, Action.INSERT)
        db.add(membership)
        joined.append(club)

    try:
        db.commit()
    except IntegrityError as err:
        db.rollback()
        raise ConflictError("Already a member of this club") from err
    if joined:
        logger.info(
            "User %s joined clubs %s", actor_id, ", ".join(club.slug for club in joined)
        )
    return joined


def list_members(db: Session, club: Club) -> list[tuple[ClubMembership, Profile | None]]:
    """Return the memberships of ``club`` paired with each member's profile."""
    stmt = (
        select(ClubMembership, Profile)
        .outerjoin(Profile, Profile.user_id == ClubMembership.user_id)
        .where(ClubMembership.club_id == club.id)
        .order_by(ClubMembership.created_at)
    )
    return [(membership, profile) for membership, profile in db.execute(stmt).all()]


def list_user_clubs(db: Session, user_id: uuid.UUID) -> Sequence[Club]:
    """Return the clubs ``user_id`` belongs to, ordered by name."""
    stmt = (
        select(Club)
        .join(ClubMembership, ClubMembership.club_id == Club.id)
        .where(ClubMembership.user_id == user_id)
        .order_by(Club.name)
    )
    return db.scalars(stmt).all()


def seed_default_clubs(db: Session) -> int:
    """Insert any missing default clubs; return how many were added."""
    existing = set(db.scalars(select(Club.slug)).all())
    added = 0
    for data in DEFAULT_CLUBS:
        if data["slug"] in existing:
            continue
        db.add(Club(**data))
        added += 1
    db.commit()
    return added
