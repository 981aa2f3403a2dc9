"""Notification center: per-user notifications for media catalog additions."""

__version__ = "1.0.0"
