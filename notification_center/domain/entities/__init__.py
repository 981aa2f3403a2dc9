"""Domain entities exposed by the application."""

from .media import ItemKind, MediaItem, MediaUser, UserData
from .notification import Notification, NotificationType
from .notification_level import (
    DEFAULT_RETENTION_DAYS,
    MediaCategory,
    NotificationConfiguration,
    NotificationLevel,
)

__all__ = [
    "DEFAULT_RETENTION_DAYS",
    "ItemKind",
    "MediaCategory",
    "MediaItem",
    "MediaUser",
    "Notification",
    "NotificationConfiguration",
    "NotificationLevel",
    "NotificationType",
    "UserData",
]
