from .notification import NotificationRead

__all__ = ["NotificationRead"]
