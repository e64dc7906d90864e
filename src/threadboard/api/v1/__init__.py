# src/threadboard/api/v1/__init__.py
"""Version 1 API endpoints."""

from .endpoints import (
    account_router,
    admin_router,
    auth_router,
    notifications_router,
    threads_router,
    users_router,
)

__all__ = [
    "account_router",
    "admin_router",
    "auth_router",
    "notifications_router",
    "threads_router",
    "users_router",
]
