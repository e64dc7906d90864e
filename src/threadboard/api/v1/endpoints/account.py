"""Self-service account endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from threadboard.schemas.common import StatusResponse
from threadboard.schemas.user import (
    AccountDeleteRequest,
    EmailChangeRequest,
    PasswordChangeRequest,
    ProfileUpdateRequest,
    UserOut,
)
from threadboard.services import identity

from ..dependencies import CurrentUserDep, SessionDep

router = APIRouter(prefix="/account", tags=["account"])


@router.patch("/profile", response_model=UserOut)
async def update_profile(
    payload: ProfileUpdateRequest,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> UserOut:
    """Update display name and/or avatar."""
    user = identity.update_profile(
        db,
        current_user.id,
        display_name=payload.display_name,
        avatar_url=payload.avatar_url,
    )
    return identity.to_user_out(db, user)


@router.post("/password", response_model=StatusResponse)
async def change_password(
    payload: PasswordChangeRequest,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> StatusResponse:
    """Change the password after confirming the current one."""
    identity.change_password(db, current_user.id, payload.current_password, payload.new_password)
    return StatusResponse()


@router.post("/email", response_model=UserOut)
async def change_email(
    payload: EmailChangeRequest,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> UserOut:
    """Change the login email after confirming the password."""
    user = identity.change_email(db, current_user.id, payload.new_email, payload.current_password)
    return identity.to_user_out(db, user)


@router.post("/delete", response_model=StatusResponse)
async def delete_account(
    payload: AccountDeleteRequest,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> StatusResponse:
    """Delete the caller's own account."""
    identity.delete_own_account(db, current_user.id, payload.current_password)
    return StatusResponse()
