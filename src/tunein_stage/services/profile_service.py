"""Profile onboarding and maintenance."""
from __future__ import annotations

import logging
import re
import uuid
from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from tunein_stage.core.errors import ConflictError, NotFoundError, ValidationError
from tunein_stage.models import Profile, User
from tunein_stage.services.authorization import Action, authorize

__all__ = [
    "UsernameAvailability",
    "validate_username",
    "validate_bio",
    "check_username",
    "create_profile",
    "get_profile_for_user",
    "get_profile_by_username",
    "update_profile",
    "set_avatar_url",
]

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 30
BIO_MAX_LENGTH = 160
USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9_]+$")

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UsernameAvailability:
    """Result of an availability probe; ``reason`` is set when unavailable."""

    username: str
    available: bool
    reason: str | None = None


def validate_username(username: str) -> str:
    """Return ``username`` if it satisfies the format rules."""
    if len(username) < USERNAME_MIN_LENGTH:
        raise ValidationError(f"Username must be at least {USERNAME_MIN_LENGTH} characters")
    if len(username) > USERNAME_MAX_LENGTH:
        raise ValidationError(f"Username must be at most {USERNAME_MAX_LENGTH} characters")
    if not USERNAME_PATTERN.match(username):
        raise ValidationError("Only letters, numbers, and underscores")
    return username


def validate_bio(bio: str | None) -> str | None:
    """Normalize an optional bio; blank becomes None."""
    if bio is None:
        return None
    bio = bio.strip()
    if not bio:
        return None
    if len(bio) > BIO_MAX_LENGTH:
        raise ValidationError(f"Bio must be at most {BIO_MAX_LENGTH} characters")
    return bio


def _username_owner(db: Session, username: str) -> uuid.UUID | None:
    return db.scalar(select(Profile.user_id).where(Profile.username == username))


def check_username(db: Session, username: str) -> UsernameAvailability:
    """Report whether ``username`` is well-formed and free."""
    try:
        validate_username(username)
    except ValidationError as err:
        return UsernameAvailability(username=username, available=False, reason=err.detail)
    if _username_owner(db, username) is not None:
        return UsernameAvailability(
            username=username, available=False, reason="Username already taken"
        )
    return UsernameAvailability(username=username, available=True)


def get_profile_for_user(db: Session, user_id: uuid.UUID) -> Profile | None:
    """Return the profile owned by ``user_id``, if onboarding happened."""
    return db.scalar(select(Profile).where(Profile.user_id == user_id))


def get_profile_by_username(db: Session, username: str) -> Profile:
    """Return the profile with ``username`` or raise :class:`NotFoundError`."""
    profile = db.scalar(select(Profile).where(Profile.username == username))
    if profile is None:
        raise NotFoundError("Profile not found")
    return profile


def create_profile(
    db: Session,
    actor_id: uuid.UUID,
    username: str,
    bio: str | None = None,
    avatar_url: str | None = None,
) -> Profile:
    """Create the single profile of ``actor_id``.

    Raises:
        NotFoundError: If the user row does not exist.
        ValidationError: If the username or bio is malformed.
        ConflictError: If the user already has a profile or the username is taken.
    """
    if db.get(User, actor_id) is None:
        raise NotFoundError("User not found")

    username = validate_username(username)
    bio = validate_bio(bio)

    if get_profile_for_user(db, actor_id) is not None:
        raise ConflictError("Profile already exists")
    if _username_owner(db, username) is not None:
        raise ConflictError("Username already taken")

    profile = Profile(user_id=actor_id, username=username, bio=bio, avatar_url=avatar_url)
    authorize(db, actor_id, profile, Action.INSERT)
    db.add(profile)
    try:
        db.commit()
    except IntegrityError as err:
        db.rollback()
        raise ConflictError("Username already taken") from err
    db.refresh(profile)
    logger.info("Created profile %s for user %s", profile.username, actor_id)
    return profile


def update_profile(
    db: Session,
    actor_id: uuid.UUID,
    profile: Profile,
    changes: dict[str, object],
) -> Profile:
    """Apply partial updates (username, bio, avatar_url) to an owned profile."""
    authorize(db, actor_id, profile, Action.UPDATE)

    if changes.get("username") is not None:
        username = validate_username(str(changes["username"]))
        owner = _username_owner(db, username)
        if owner is not None and owner != actor_id:
            raise ConflictError("Username already taken")
        profile.username = username
    if "bio" in changes:
        bio = changes["bio"]
        profile.bio = validate_bio(None if bio is None else str(bio))
    if "avatar_url" in changes:
        avatar_url = changes["avatar_url"]
        profile.avatar_url = None if avatar_url is None else str(avatar_url)

    try:
        db.commit()
    except IntegrityError as err:
        db.rollback()
        raise ConflictError("Username already taken") from err
    db.refresh(profile)
    return profile


def set_avatar_url(db: Session, actor_id: uuid.UUID, profile: Profile, url: str) -> Profile:
    """Point an owned profile at a freshly stored avatar."""
    return update_profile(db, actor_id, profile, {"avatar_url": url})
