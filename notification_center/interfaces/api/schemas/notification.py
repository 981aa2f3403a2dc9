"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from notification_center.domain.entities import NotificationType


class NotificationRead(BaseModel):
    """Representation of a notification delivered to the client."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    type: NotificationType
    title: str
    message: str
    item_id: str | None = None
    created_at: datetime
    expires_at: datetime
    delivered_at: datetime | None = None
    read_at: datetime | None = None


__all__ = ["NotificationRead"]
