"""Aggregate application use cases."""

from .notifications import (
    MediaAddedHandler,
    count_unread_notifications,
    list_notifications,
    mark_notification_delivered,
    mark_notification_read,
    purge_expired_notifications,
)

__all__ = [
    "MediaAddedHandler",
    "count_unread_notifications",
    "list_notifications",
    "mark_notification_delivered",
    "mark_notification_read",
    "purge_expired_notifications",
]
