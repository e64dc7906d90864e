"""Authentication endpoints for the Threadboard API."""

from __future__ import annotations

from fastapi import APIRouter, status

from threadboard.core.security import create_access_token
from threadboard.schemas.user import LoginRequest, SignupRequest, TokenResponse, UserOut
from threadboard.services import identity

from ..dependencies import CurrentUserDep, SessionDep

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post("/signup", response_model=UserOut, status_code=status.HTTP_201_CREATED)
async def signup(payload: SignupRequest, db: SessionDep) -> UserOut:
    """Register a new account."""
    user = identity.signup(
        db,
        email=payload.email,
        username=payload.username,
        password=payload.password,
        display_name=payload.display_name,
    )
    return identity.to_user_out(db, user)


@router.post("/login", response_model=TokenResponse)
async def login(payload: LoginRequest, db: SessionDep) -> TokenResponse:
    """Exchange email and password for a bearer token.

    The client keeps the token as its session.
    """
    user = identity.authenticate(db, payload.email, payload.password)
    return TokenResponse(
        access_token=create_access_token(user.id),
        token_type="bearer",
        user=identity.to_user_out(db, user),
    )


@router.get("/me", response_model=UserOut)
async def me(current_user: CurrentUserDep, db: SessionDep) -> UserOut:
    """Return the authenticated user."""
    return identity.to_user_out(db, current_user)
