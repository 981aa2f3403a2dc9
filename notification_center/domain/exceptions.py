"""Errors raised by the notification engine and its storage layer."""


class NotificationCenterError(RuntimeError):
    """Base class for errors raised by the notification center."""


class NotFoundError(NotificationCenterError, LookupError):
    """Raised when a targeted operation references an unknown identifier."""


class StorageError(NotificationCenterError):
    """Raised when the notification store cannot be reached or a write fails."""


class CollaboratorError(NotificationCenterError):
    """Raised by host adapters when a catalog, user or watch-state lookup fails."""


class ConfigurationUnavailable(NotificationCenterError):
    """Raised when the engine runs before its configuration can be loaded."""


__all__ = [
    "CollaboratorError",
    "ConfigurationUnavailable",
    "NotFoundError",
    "NotificationCenterError",
    "StorageError",
]
