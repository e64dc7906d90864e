"""Notification Pydantic schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict


class NotificationOut(BaseModel):
    """A stored notification; ``content_key`` + ``content_args`` are rendered client-side."""

    id: str
    user_id: str
    type: str
    actor_id: str | None
    entity_id: str
    entity_type: str
    related_entity_id: str | None
    content_key: str
    content_args: dict[str, Any]
    link: str
    created_at: datetime
    is_read: bool

    model_config = ConfigDict(from_attributes=True)


class UnreadCountOut(BaseModel):
    """Number of unread notifications."""

    count: int
