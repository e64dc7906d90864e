# src/threadboard/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .common import ErrorBody, ErrorResponse, StatusResponse
from .notification import NotificationOut, UnreadCountOut
from .thread import (
    CommentCreate,
    CommentOut,
    ThreadCreate,
    ThreadDetailOut,
    ThreadOut,
    VoteRequest,
    VoteResult,
)
from .user import (
    AccountDeleteRequest,
    AdminStatusUpdate,
    AdminUserCreate,
    AuthorOut,
    EmailChangeRequest,
    LoginRequest,
    PasswordChangeRequest,
    ProfileOut,
    ProfileUpdateRequest,
    SignupRequest,
    TokenResponse,
    UserOut,
)

__all__ = [
    "ErrorBody", "ErrorResponse", "StatusResponse",
    "NotificationOut", "UnreadCountOut",
    "CommentCreate", "CommentOut", "ThreadCreate", "ThreadDetailOut", "ThreadOut",
    "VoteRequest", "VoteResult",
    "AccountDeleteRequest", "AdminStatusUpdate", "AdminUserCreate", "AuthorOut",
    "EmailChangeRequest", "LoginRequest", "PasswordChangeRequest", "ProfileOut",
    "ProfileUpdateRequest", "SignupRequest", "TokenResponse", "UserOut",
]
