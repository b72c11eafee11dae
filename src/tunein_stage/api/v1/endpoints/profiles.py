# src/tunein_stage/api/v1/endpoints/profiles.py
"""Profile endpoints: onboarding, lookup, edits and avatar upload."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, File, Query, UploadFile, status

from tunein_stage.models import Profile
from tunein_stage.schemas.profile import (
    ProfileCreate,
    ProfileResponse,
    ProfileUpdate,
    UsernameAvailabilityResponse,
)
from tunein_stage.services import profile_service
from tunein_stage.services.avatar_store import AvatarStore, get_avatar_store

from ..dependencies import CurrentProfileDep, CurrentUserDep, SessionDep

router = APIRouter(prefix="/profiles", tags=["profiles"])


def get_avatar_store_dep() -> AvatarStore:
    """Return the shared avatar store."""
    return get_avatar_store()


AvatarStoreDep = Annotated[AvatarStore, Depends(get_avatar_store_dep)]


@router.get("/availability", response_model=UsernameAvailabilityResponse)
async def check_username_availability(
    db: SessionDep,
    username: str = Query(..., description="Username to probe"),
) -> UsernameAvailabilityResponse:
    """Report whether a username is well-formed and free."""
    result = profile_service.check_username(db, username)
    return UsernameAvailabilityResponse(
        username=result.username,
        available=result.available,
        reason=result.reason,
    )


@router.post("/", response_model=ProfileResponse, status_code=status.HTTP_201_CREATED)
async def create_profile(
    profile_data: ProfileCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> Profile:
    """Create the caller's profile. Each user gets exactly one."""
    return profile_service.create_profile(
        db,
        current_user.id,
        username=profile_data.username,
        bio=profile_data.bio,
        avatar_url=profile_data.avatar_url,
    )


@router.get("/me", response_model=ProfileResponse)
async def get_my_profile(profile: CurrentProfileDep) -> Profile:
    """Return the caller's own profile."""
    return profile


@router.patch("/me", response_model=ProfileResponse)
async def update_my_profile(
    update_data: ProfileUpdate,
    current_user: CurrentUserDep,
    profile: CurrentProfileDep,
    db: SessionDep,
) -> Profile:
    """Apply partial updates to the caller's profile."""
    changes = update_data.model_dump(exclude_unset=True)
    return profile_service.update_profile(db, current_user.id, profile, changes)


@router.put("/me/avatar", response_model=ProfileResponse)
async def upload_my_avatar(
    current_user: CurrentUserDep,
    profile: CurrentProfileDep,
    db: SessionDep,
    store: AvatarStoreDep,
    file: UploadFile = File(...),
) -> Profile:
    """Store a new avatar under ``{user_id}/avatar.{ext}`` and link it."""
    data = await file.read()
    url = store.upload(current_user.id, file.filename or "", data)
    return profile_service.set_avatar_url(db, current_user.id, profile, url)


@router.get("/{username}", response_model=ProfileResponse)
async def get_profile(username: str, db: SessionDep) -> Profile:
    """Return a public profile by username."""
    return profile_service.get_profile_by_username(db, username)
