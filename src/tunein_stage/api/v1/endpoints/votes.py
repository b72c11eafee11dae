# src/tunein_stage/api/v1/endpoints/votes.py
"""Vote-related endpoints for the TUNE-IN API."""

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from tunein_stage.schemas.vote import (
    MyVoteResponse,
    VoteCreate,
    VoteResponse,
    VoteToggleResponse,
)
from tunein_stage.services.post_service import get_post
from tunein_stage.services.vote_ledger import VoteLedger

from ..dependencies import CurrentUserDep, SessionDep

router = APIRouter(prefix="/votes", tags=["votes"])


def get_vote_ledger(db: SessionDep) -> VoteLedger:
    """Return a vote ledger bound to the request's session."""
    return VoteLedger(db)


VoteLedgerDep = Annotated[VoteLedger, Depends(get_vote_ledger)]


@router.post("/", response_model=VoteResponse, status_code=status.HTTP_201_CREATED)
async def cast_vote(
    vote_data: VoteCreate,
    current_user: CurrentUserDep,
    ledger: VoteLedgerDep,
) -> VoteResponse:
    """Cast a vote; fails with 409 if the caller already voted on the post."""
    vote = ledger.cast_vote(current_user.id, vote_data.post_id, vote_data.vote_value)
    return VoteResponse(post_id=vote.post_id, vote_value=vote.vote_value)


@router.put("/", response_model=VoteToggleResponse)
async def toggle_vote(
    vote_data: VoteCreate,
    current_user: CurrentUserDep,
    ledger: VoteLedgerDep,
) -> VoteToggleResponse:
    """Press a vote button: insert, remove, or replace the caller's vote."""
    result = ledger.toggle_vote(current_user.id, vote_data.post_id, vote_data.vote_value)
    post = get_post(ledger.db, vote_data.post_id)
    return VoteToggleResponse(post_id=post.id, vote_value=result, score=post.score)


@router.delete(
    "/{post_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def remove_vote(
    post_id: uuid.UUID,
    current_user: CurrentUserDep,
    ledger: VoteLedgerDep,
) -> Response:
    """Remove the caller's vote; a no-op when there is none."""
    ledger.remove_vote(current_user.id, post_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{post_id}/my-vote", response_model=MyVoteResponse)
async def get_my_vote(
    post_id: uuid.UUID,
    current_user: CurrentUserDep,
    ledger: VoteLedgerDep,
) -> MyVoteResponse:
    """Get the caller's vote on a specific post (0 when absent)."""
    vote = ledger.get_vote(current_user.id, post_id)
    return MyVoteResponse(vote_value=vote.vote_value if vote is not None else 0)
