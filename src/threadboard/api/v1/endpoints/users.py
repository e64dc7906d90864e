"""Public user profiles and the follow graph."""

from __future__ import annotations

from fastapi import APIRouter, status

from threadboard.schemas.common import StatusResponse
from threadboard.schemas.thread import ThreadOut
from threadboard.schemas.user import ProfileOut
from threadboard.services import content, identity, social

from ..dependencies import CurrentUserDep, SessionDep

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/{username}", response_model=ProfileOut)
async def get_profile(username: str, db: SessionDep) -> ProfileOut:
    """Return a user's public profile with follower and following ids."""
    user = identity.get_user_by_username(db, username)
    return identity.to_profile_out(db, user)


@router.get("/{username}/threads", response_model=list[ThreadOut])
async def get_user_threads(username: str, db: SessionDep) -> list[ThreadOut]:
    """List threads written by a user, newest first."""
    threads = content.list_threads_by_author_username(db, username)
    return [ThreadOut.model_validate(t) for t in threads]


@router.post(
    "/{user_id}/follow",
    response_model=StatusResponse,
    status_code=status.HTTP_201_CREATED,
)
async def follow_user(
    user_id: str,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> StatusResponse:
    """Follow a user."""
    social.follow(db, user_id, current_user.id)
    return StatusResponse()


@router.delete("/{user_id}/follow", response_model=StatusResponse)
async def unfollow_user(
    user_id: str,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> StatusResponse:
    """Stop following a user; succeeds even if not following."""
    social.unfollow(db, user_id, current_user.id)
    return StatusResponse()
