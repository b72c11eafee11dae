"""Shared API dependencies for authentication and common functionality."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from tunein_stage.core.security import decode_subject
from tunein_stage.db.session import get_db
from tunein_stage.models import Profile, User
from tunein_stage.services.profile_service import get_profile_for_user

# HTTP Bearer scheme for JWT authentication
bearer_scheme = HTTPBearer()

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(bearer_scheme)],
    db: SessionDep,
) -> User:
    """Get the current authenticated user from the bearer token.

    The token is issued by the authentication provider and trusted as-is once
    its signature checks out; the user row must already exist.

    Raises:
        HTTPException: If the token is invalid or the user is unknown.
    """
    try:
        user_id = decode_subject(credentials.credentials)
    except ValueError as err:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        ) from err

    user = db.get(User, user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )
    return user


# Type alias for current user dependency
CurrentUserDep = Annotated[User, Depends(get_current_user)]


def get_current_profile(current_user: CurrentUserDep, db: SessionDep) -> Profile:
    """Return the caller's profile, or 404 if onboarding has not happened yet."""
    profile = get_profile_for_user(db, current_user.id)
    if profile is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Profile not found",
        )
    return profile


CurrentProfileDep = Annotated[Profile, Depends(get_current_profile)]
