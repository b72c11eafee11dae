"""Capability checks applied before every mutation.

Each rule mirrors a row-level policy of the storage layer: the caller passes
the acting user, the resource being touched and the action, and either gets
``None`` back or an :class:`AuthorizationError`. Reads are open to everyone
and are therefore not routed through here.
"""

from __future__ import annotations

import uuid
from enum import StrEnum

from sqlalchemy import exists, select
from sqlalchemy.orm import Session

from tunein_stage.core.errors import AuthorizationError
from tunein_stage.models import ClubMembership, Post, PostVote, Profile


class Action(StrEnum):
    """Mutations guarded by :func:`authorize`."""

    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"


def is_club_member(db: Session, user_id: uuid.UUID, club_id: uuid.UUID) -> bool:
    """Return True if ``user_id`` holds a membership in ``club_id``."""
    stmt = select(
        exists().where(
            ClubMembership.user_id == user_id,
            ClubMembership.club_id == club_id,
        )
    )
    return bool(db.scalar(stmt))


def authorize(
    db: Session,
    actor_id: uuid.UUID,
    resource: Profile | ClubMembership | Post | PostVote,
    action: Action,
) -> None:
    """Raise :class:`AuthorizationError` unless ``actor_id`` may apply ``action``.

    Args:
        db: Session used for membership lookups.
        actor_id: Identity supplied by the authentication provider.
        resource: The row about to be written (possibly still transient).
        action: The mutation being attempted.
    """
    if isinstance(resource, Profile):
        if action is Action.DELETE or resource.user_id != actor_id:
            raise AuthorizationError("You can only modify your own profile")
        return

    if isinstance(resource, ClubMembership):
        if action is Action.UPDATE or resource.user_id != actor_id:
            raise AuthorizationError("You can only join or leave clubs for yourself")
        return

    if isinstance(resource, Post):
        if action is not Action.INSERT:
            raise AuthorizationError("Posts cannot be modified")
        if resource.user_id != actor_id:
            raise AuthorizationError("You can only post as yourself")
        if not is_club_member(db, actor_id, resource.club_id):
            raise AuthorizationError("Only club members can post in this club")
        return

    if isinstance(resource, PostVote):
        # Voting is open to any authenticated user; membership is not checked.
        if action is Action.UPDATE:
            raise AuthorizationError("Votes cannot be changed in place; remove the vote first")
        if resource.user_id != actor_id:
            raise AuthorizationError("You can only cast or remove your own vote")
        return

    raise AuthorizationError(f"No policy allows {action} on {type(resource).__name__}")
