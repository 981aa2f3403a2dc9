"""Repository implementations for infrastructure layer."""

from .notification_repository import PAGE_SIZE, NotificationRepository

__all__ = ["PAGE_SIZE", "NotificationRepository"]
