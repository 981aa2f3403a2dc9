"""Use cases that create, query and acknowledge notifications."""

from .count_unread import count_unread_notifications
from .list_notifications import list_notifications
from .mark_notification import mark_notification_delivered, mark_notification_read
from .media_added import ClassifiedItem, MediaAddedHandler
from .purge_expired import purge_expired_notifications, purge_expired_periodically
from .throttle import SeriesThrottle

__all__ = [
    "ClassifiedItem",
    "MediaAddedHandler",
    "SeriesThrottle",
    "count_unread_notifications",
    "list_notifications",
    "mark_notification_delivered",
    "mark_notification_read",
    "purge_expired_notifications",
    "purge_expired_periodically",
]
