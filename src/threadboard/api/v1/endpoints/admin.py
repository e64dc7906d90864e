"""Admin console endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from threadboard.schemas.common import StatusResponse
from threadboard.schemas.user import AdminStatusUpdate, AdminUserCreate, UserOut
from threadboard.services import admin, identity

from ..dependencies import CurrentUserDep, SessionDep

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/users", response_model=list[UserOut])
async def list_users(current_user: CurrentUserDep, db: SessionDep) -> list[UserOut]:
    """List every account (admins and owners only)."""
    users = admin.list_users_for_admin(db, current_user.id)
    return [identity.to_user_out(db, user) for user in users]


@router.post("/users", response_model=UserOut, status_code=status.HTTP_201_CREATED)
async def create_user(
    payload: AdminUserCreate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> UserOut:
    """Provision an account."""
    user = admin.create_user(
        db,
        current_user.id,
        email=payload.email,
        username=payload.username,
        password=payload.password,
        display_name=payload.display_name,
        is_admin=payload.is_admin,
    )
    return identity.to_user_out(db, user)


@router.post("/users/{user_id}/admin-status", response_model=UserOut)
async def set_admin_status(
    user_id: str,
    payload: AdminStatusUpdate,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> UserOut:
    """Grant or revoke admin rights (owners only)."""
    user = admin.set_admin_status(db, user_id, payload.make_admin, current_user.id)
    return identity.to_user_out(db, user)


@router.delete("/users/{user_id}", response_model=StatusResponse)
async def delete_user(
    user_id: str,
    current_user: CurrentUserDep,
    db: SessionDep,
) -> StatusResponse:
    """Delete an account and anonymise its content."""
    admin.delete_user(db, user_id, current_user.id)
    return StatusResponse()
