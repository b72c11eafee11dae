# src/tunein_stage/api/v1/endpoints/posts.py
"""Post-related endpoints for the TUNE-IN API."""

import uuid

from fastapi import APIRouter, status

from tunein_stage.schemas.post import PostCreate, PostResponse
from tunein_stage.services import club_service, post_service
from tunein_stage.services.profile_service import get_profile_for_user

from ..dependencies import CurrentUserDep, SessionDep

router = APIRouter(prefix="/posts", tags=["posts"])


@router.post("/", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
async def create_post(
    post_data: PostCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> PostResponse:
    """Create a new post in a club the caller is a member of.

    Raises:
        NotFoundError: If the club does not exist.
        AuthorizationError: If the caller is not a member of the club.
    """
    club = club_service.get_club_by_slug(db, post_data.club_slug)
    post = post_service.create_post(
        db,
        current_user.id,
        club,
        title=post_data.title,
        content=post_data.content,
    )
    return post_service.to_post_response(post, get_profile_for_user(db, current_user.id))


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(post_id: uuid.UUID, db: SessionDep) -> PostResponse:
    """Get a specific post by ID."""
    post = post_service.get_post(db, post_id)
    return post_service.to_post_response(post, get_profile_for_user(db, post.user_id))
