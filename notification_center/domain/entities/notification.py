"""Domain entity representing a user notification."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class NotificationType(str, Enum):
    """Kinds of catalog events a notification can describe."""

    NEW_MOVIE = "NewMovie"
    NEW_EPISODE = "NewEpisode"
    NEW_SEASON = "NewSeason"
    NEW_SERIES = "NewSeries"
    NEW_ALBUM = "NewAlbum"
    LIBRARY_UPDATE = "LibraryUpdate"
    CUSTOM = "Custom"


@dataclass
class Notification:
    """Information message delivered to a specific user.

    Only ``read_at`` and ``delivered_at`` change after creation; every other
    field is fixed when the row is written.
    """

    id: str
    user_id: str
    type: NotificationType
    title: str
    message: str
    created_at: datetime
    expires_at: datetime
    item_id: str | None = None
    delivered_at: datetime | None = None
    read_at: datetime | None = None

    @property
    def is_read(self) -> bool:
        return self.read_at is not None

    def is_expired(self, now: datetime) -> bool:
        """Return ``True`` once ``now`` has reached the expiry timestamp."""

        return self.expires_at <= now


__all__ = ["Notification", "NotificationType"]
