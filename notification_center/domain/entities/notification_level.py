"""Verbosity levels and the configuration snapshot read by the engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

DEFAULT_RETENTION_DAYS = 7


class NotificationLevel(str, Enum):
    """How aggressively notifications are generated for a media category."""

    DISABLED = "disabled"
    ALL = "all"
    RELEVANT = "relevant"
    HIGHLY_RELEVANT = "highly_relevant"


class MediaCategory(str, Enum):
    """Categories that carry their own verbosity level."""

    MOVIE = "movie"
    SERIES = "series"
    MUSIC = "music"
    BOOK = "book"


@dataclass(frozen=True)
class NotificationConfiguration:
    """Immutable view of the notification settings for one unit of work."""

    movie_level: NotificationLevel = NotificationLevel.ALL
    series_level: NotificationLevel = NotificationLevel.ALL
    music_level: NotificationLevel = NotificationLevel.DISABLED
    book_level: NotificationLevel = NotificationLevel.DISABLED
    retention_days: int = DEFAULT_RETENTION_DAYS

    @property
    def effective_retention_days(self) -> int:
        """Return the retention in days, falling back to the default for ``<= 0``."""

        if self.retention_days > 0:
            return self.retention_days
        return DEFAULT_RETENTION_DAYS

    def level_for(self, category: MediaCategory) -> NotificationLevel:
        levels = {
            MediaCategory.MOVIE: self.movie_level,
            MediaCategory.SERIES: self.series_level,
            MediaCategory.MUSIC: self.music_level,
            MediaCategory.BOOK: self.book_level,
        }
        return levels[category]


__all__ = [
    "DEFAULT_RETENTION_DAYS",
    "MediaCategory",
    "NotificationConfiguration",
    "NotificationLevel",
]
