# src/threadboard/api/v1/endpoints/__init__.py
"""API endpoint modules for version 1."""

from .account import router as account_router
from .admin import router as admin_router
from .auth import router as auth_router
from .notifications import router as notifications_router
from .threads import router as threads_router
from .users import router as users_router

__all__ = [
    "account_router",
    "admin_router",
    "auth_router",
    "notifications_router",
    "threads_router",
    "users_router",
]
