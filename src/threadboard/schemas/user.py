"""User-related Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from threadboard.models.user import (
    DELETED_DISPLAY_NAME,
    DELETED_USERNAME,
    AVATAR_PLACEHOLDER_URL,
)


class SignupRequest(BaseModel):
    """Schema for account registration."""

    email: str = Field(..., description="Login email, unique")
    username: str = Field(..., description="Public handle, unique")
    display_name: str | None = Field(None, description="Optional display name")
    password: str = Field(..., description="Plain password, hashed before storage")


class LoginRequest(BaseModel):
    """Schema for login submissions."""

    email: str
    password: str


class ProfileOut(BaseModel):
    """Public view of a user."""

    id: str
    username: str
    display_name: str | None
    avatar_url: str | None
    created_at: datetime
    is_admin: bool
    is_owner: bool
    follower_ids: list[str] = Field(default_factory=list)
    following_ids: list[str] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)


class UserOut(ProfileOut):
    """Private view of a user, shown to the user themselves and to staff."""

    email: str


class TokenResponse(BaseModel):
    """Response returned after successful login."""

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field("bearer", description="Token type")
    user: UserOut


class AuthorOut(BaseModel):
    """Author reference embedded in threads and comments.

    A removed author is represented by a fixed "deleted user" view with
    ``deleted`` set and no id.
    """

    id: str | None
    username: str
    display_name: str
    avatar_url: str | None
    deleted: bool = False

    @classmethod
    def from_user(cls, user: object | None) -> "AuthorOut":
        """Build the reference from a User row, or the deleted-user view for None."""
        if user is None:
            return cls(
                id=None,
                username=DELETED_USERNAME,
                display_name=DELETED_DISPLAY_NAME,
                avatar_url=AVATAR_PLACEHOLDER_URL.format(initial="X"),
                deleted=True,
            )
        return cls(
            id=user.id,  # type: ignore[attr-defined]
            username=user.username,  # type: ignore[attr-defined]
            display_name=user.name,  # type: ignore[attr-defined]
            avatar_url=user.avatar_url,  # type: ignore[attr-defined]
        )


class ProfileUpdateRequest(BaseModel):
    """Schema for updating profile information; omitted fields are unchanged."""

    display_name: str | None = None
    avatar_url: str | None = None


class PasswordChangeRequest(BaseModel):
    """Schema for changing the account password."""

    current_password: str
    new_password: str


class EmailChangeRequest(BaseModel):
    """Schema for changing the login email."""

    new_email: str
    current_password: str


class AccountDeleteRequest(BaseModel):
    """Password confirmation for deleting one's own account."""

    current_password: str


class AdminUserCreate(BaseModel):
    """Schema for staff-provisioned accounts."""

    email: str
    username: str
    display_name: str | None = None
    password: str
    is_admin: bool = False


class AdminStatusUpdate(BaseModel):
    """Grant or revoke admin rights."""

    make_admin: bool
