"""Interfaces the host media server implements for the notification engine.

Adapters raise :class:`~notification_center.domain.exceptions.CollaboratorError`
when a lookup cannot be answered.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Protocol

from notification_center.domain.entities import ItemKind, MediaItem, MediaUser, UserData


class CatalogService(Protocol):
    """Read access to the media catalog."""

    def get_item(self, item_id: str) -> MediaItem | None:
        """Return the item or ``None`` when it no longer exists."""

    def list_series_episodes(self, series_id: str) -> Sequence[MediaItem]:
        """Return every episode under ``series_id``, recursively."""

    def list_items(self, kinds: Iterable[ItemKind]) -> Sequence[MediaItem]:
        """Return every catalog item of the given ``kinds``."""


class UserDirectory(Protocol):
    """Access to the users known to the host."""

    def list_users(self) -> Sequence[MediaUser]:
        ...

    def get_user(self, user_id: str) -> MediaUser | None:
        ...


class WatchHistoryService(Protocol):
    """Per-user play state for catalog items."""

    def get_user_data(self, user: MediaUser, item: MediaItem) -> UserData | None:
        ...


@dataclass(frozen=True)
class HostCollaborators:
    """Bundle of host services injected into the notification engine."""

    catalog: CatalogService
    users: UserDirectory
    watch_history: WatchHistoryService


__all__ = [
    "CatalogService",
    "HostCollaborators",
    "UserDirectory",
    "WatchHistoryService",
]
