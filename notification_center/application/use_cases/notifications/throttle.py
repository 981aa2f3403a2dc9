"""Per-series suppression of bulk catalog additions."""

from __future__ import annotations

import threading
from datetime import datetime, timedelta

from notification_center.utils import now_utc

DEFAULT_WINDOW = timedelta(minutes=5)
DEFAULT_RETENTION = timedelta(hours=1)


class SeriesThrottle:
    """Track when each series last produced a notification.

    A whole season imported at once yields one notification per window
    instead of one per episode. Entries are safe to read and update from the
    worker threads that process catalog events.
    """

    def __init__(
        self,
        window: timedelta = DEFAULT_WINDOW,
        retention: timedelta = DEFAULT_RETENTION,
    ) -> None:
        self.window = window
        self.retention = retention
        self._last_notified: dict[str, datetime] = {}
        self._lock = threading.Lock()

    def is_recent(self, series_id: str, now: datetime | None = None) -> bool:
        """Return ``True`` when ``series_id`` was notified inside the window."""

        current = now or now_utc()
        with self._lock:
            last = self._last_notified.get(series_id)
        return last is not None and current - last < self.window

    def try_acquire(self, series_id: str, now: datetime | None = None) -> bool:
        """Record a notification for ``series_id`` unless one is still recent.

        The check and the update happen under one lock, so two concurrent
        additions for the same series cannot both pass.
        """

        current = now or now_utc()
        with self._lock:
            last = self._last_notified.get(series_id)
            if last is not None and current - last < self.window:
                return False
            self._last_notified[series_id] = current if last is None else max(last, current)
            return True

    def sweep(self, now: datetime | None = None) -> int:
        """Drop entries older than the retention period.

        Returns:
            Number of entries removed
        """

        cutoff = (now or now_utc()) - self.retention
        with self._lock:
            expired = [key for key, last in self._last_notified.items() if last < cutoff]
            for key in expired:
                del self._last_notified[key]
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._last_notified)


__all__ = ["DEFAULT_RETENTION", "DEFAULT_WINDOW", "SeriesThrottle"]
