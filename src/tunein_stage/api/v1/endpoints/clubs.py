# src/tunein_stage/api/v1/endpoints/clubs.py
"""Club endpoints: listing, membership and the ranked feed."""

from __future__ import annotations

from collections.abc import Sequence

from fastapi import APIRouter, Query, Response, status

from tunein_stage.core.settings import settings
from tunein_stage.db.time import utcnow
from tunein_stage.models import Club
from tunein_stage.schemas.club import ClubJoinRequest, ClubResponse, MemberResponse
from tunein_stage.schemas.post import FeedResponse
from tunein_stage.schemas.profile import AuthorSummary
from tunein_stage.schemas.vote import VoteResponse
from tunein_stage.services import club_service
from tunein_stage.services.feed_ranker import RankMode, rank
from tunein_stage.services.post_service import list_club_posts, to_post_response
from tunein_stage.services.vote_ledger import VoteLedger

from ..dependencies import CurrentUserDep, SessionDep

router = APIRouter(prefix="/clubs", tags=["clubs"])


@router.get("/", response_model=list[ClubResponse])
async def list_clubs(db: SessionDep) -> Sequence[Club]:
    """List all clubs."""
    return club_service.list_clubs(db)


@router.get("/mine", response_model=list[ClubResponse])
async def list_my_clubs(current_user: CurrentUserDep, db: SessionDep) -> Sequence[Club]:
    """List the clubs the caller belongs to."""
    return club_service.list_user_clubs(db, current_user.id)


@router.post("/join", response_model=list[ClubResponse])
async def join_clubs(
    join_data: ClubJoinRequest,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> list[Club]:
    """Join several clubs by slug; returns the clubs newly joined."""
    return club_service.join_clubs_by_slug(db, current_user.id, join_data.slugs)


@router.get("/{slug}", response_model=ClubResponse)
async def get_club(slug: str, db: SessionDep) -> Club:
    """Get a specific club by slug."""
    return club_service.get_club_by_slug(db, slug)


@router.post("/{slug}/join", status_code=status.HTTP_201_CREATED)
async def join_club(slug: str, current_user: CurrentUserDep, db: SessionDep) -> dict[str, str]:
    """Join a club."""
    club = club_service.get_club_by_slug(db, slug)
    club_service.join_club(db, current_user.id, club)
    return {"status": "joined"}


@router.delete(
    "/{slug}/leave",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def leave_club(slug: str, current_user: CurrentUserDep, db: SessionDep) -> Response:
    """Leave a club."""
    club = club_service.get_club_by_slug(db, slug)
    club_service.leave_club(db, current_user.id, club)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{slug}/members", response_model=list[MemberResponse])
async def list_members(slug: str, db: SessionDep) -> list[MemberResponse]:
    """List club members with their public profiles."""
    club = club_service.get_club_by_slug(db, slug)
    return [
        MemberResponse(
            user_id=membership.user_id,
            joined_at=membership.created_at,
            profile=AuthorSummary.model_validate(profile) if profile is not None else None,
        )
        for membership, profile in club_service.list_members(db, club)
    ]


@router.get("/{slug}/feed", response_model=FeedResponse)
async def get_feed(
    slug: str,
    db: SessionDep,
    sort: str = Query("new", description="new, top-3m, top-6m, top-1y or top-all"),
    q: str | None = Query(None, description="Case-insensitive search in title and content"),
) -> FeedResponse:
    """Return a club's posts filtered by ``q`` and ranked by ``sort``."""
    club = club_service.get_club_by_slug(db, slug)
    mode = RankMode.parse(sort)
    now = utcnow()
    rows = list_club_posts(
        db, club, limit=settings.feed_max_posts, mode=mode, query=q, now=now
    )
    authors = {post.id: profile for post, profile in rows}

    ranked = rank([post for post, _ in rows], mode, query=q, now=now)
    return FeedResponse(
        club_slug=club.slug,
        sort=mode.key,
        query=q or None,
        posts=[to_post_response(post, authors[post.id]) for post in ranked],
    )


@router.get("/{slug}/my-votes", response_model=list[VoteResponse])
async def get_my_votes(slug: str, current_user: CurrentUserDep, db: SessionDep) -> list[VoteResponse]:
    """Return the caller's active votes on posts of this club."""
    club = club_service.get_club_by_slug(db, slug)
    votes = VoteLedger(db).votes_for_club(current_user.id, club.id)
    return [VoteResponse.model_validate(vote) for vote in votes]
