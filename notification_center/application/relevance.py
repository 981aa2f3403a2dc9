"""Watch-history analysis deciding which users care about a new catalog item."""

from __future__ import annotations

import logging
from collections import Counter

from notification_center.application.ports import (
    CatalogService,
    UserDirectory,
    WatchHistoryService,
)
from notification_center.domain.entities import (
    ItemKind,
    MediaItem,
    MediaUser,
    NotificationLevel,
)
from notification_center.domain.exceptions import CollaboratorError

DEFAULT_MIN_WATCH_COUNT = 3
HIGHLY_RELEVANT_MIN_SCORE = 2

logger = logging.getLogger(__name__)


class UserHistoryAnalyzer:
    """Score catalog items against a user's watch history.

    Every lookup goes to the host services; nothing is cached between calls.
    Failed lookups are logged and count as "not relevant".
    """

    def __init__(
        self,
        catalog: CatalogService,
        users: UserDirectory,
        watch_history: WatchHistoryService,
        *,
        min_watch_count: int = DEFAULT_MIN_WATCH_COUNT,
    ) -> None:
        self._catalog = catalog
        self._users = users
        self._watch_history = watch_history
        self._min_watch_count = min_watch_count

    def has_watched(self, user_id: str, series_id: str) -> bool:
        """Return ``True`` when any episode of the series was played or started."""

        try:
            user = self._users.get_user(user_id)
            if user is None:
                return False
            for episode in self._catalog.list_series_episodes(series_id):
                user_data = self._watch_history.get_user_data(user, episode)
                if user_data is None:
                    continue
                if user_data.played or user_data.playback_position_ticks > 0:
                    return True
            return False
        except CollaboratorError:
            logger.exception("Error checking watch history for series %s", series_id)
            return False

    def is_actively_watching(self, user_id: str, series_id: str) -> bool:
        """Return ``True`` when an episode of the series is partially watched."""

        try:
            user = self._users.get_user(user_id)
            if user is None:
                return False
            for episode in self._catalog.list_series_episodes(series_id):
                user_data = self._watch_history.get_user_data(user, episode)
                if user_data is None or not episode.runtime_ticks:
                    continue
                if 0 < user_data.playback_position_ticks < episode.runtime_ticks:
                    return True
            return False
        except CollaboratorError:
            logger.exception("Error checking current watch status for series %s", series_id)
            return False

    def favorite_genres(self, user_id: str, min_watch_count: int | None = None) -> set[str]:
        """Return the genres seen in at least ``min_watch_count`` played items."""

        threshold = self._min_watch_count if min_watch_count is None else min_watch_count
        try:
            user = self._users.get_user(user_id)
            if user is None:
                return set()
            genre_counts = self._count_played_genres(user)
        except CollaboratorError:
            logger.exception("Error analyzing favorite genres for user %s", user_id)
            return set()
        return {genre for genre, count in genre_counts.items() if count >= threshold}

    def movie_relevance_score(self, user_id: str, movie: MediaItem) -> int:
        """Return how many of the movie's genres are among the user's favorites."""

        favorite_genres = self.favorite_genres(user_id)
        if not favorite_genres:
            return 0
        return sum(1 for genre in movie.genres if genre in favorite_genres)

    def should_notify(self, user_id: str, item: MediaItem, level: NotificationLevel) -> bool:
        """Apply the verbosity ``level`` to ``item`` for one user."""

        if level is NotificationLevel.DISABLED:
            return False
        if level is NotificationLevel.ALL:
            return True

        if item.kind is ItemKind.MOVIE:
            score = self.movie_relevance_score(user_id, item)
            if level is NotificationLevel.RELEVANT:
                return score > 0
            return score >= HIGHLY_RELEVANT_MIN_SCORE

        if item.kind in (ItemKind.EPISODE, ItemKind.SEASON):
            if not item.has_series:
                return False
            if level is NotificationLevel.RELEVANT:
                return self.has_watched(user_id, item.series_id)
            return self.is_actively_watching(user_id, item.series_id)

        # No watch-history signal exists for other kinds; only ``ALL`` notifies.
        return False

    def _count_played_genres(self, user: MediaUser) -> Counter[str]:
        genre_counts: Counter[str] = Counter()
        for item in self._catalog.list_items((ItemKind.MOVIE, ItemKind.EPISODE)):
            user_data = self._watch_history.get_user_data(user, item)
            if user_data is not None and user_data.played:
                genre_counts.update(item.genres)
        return genre_counts


__all__ = [
    "DEFAULT_MIN_WATCH_COUNT",
    "HIGHLY_RELEVANT_MIN_SCORE",
    "UserHistoryAnalyzer",
]
