"""Turn catalog "item added" signals into per-user notifications."""

from __future__ import annotations

import asyncio
import logging
import uuid
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta

import anyio
from anyio import to_thread
from sqlalchemy.orm import Session

from notification_center.application.ports import HostCollaborators
from notification_center.application.relevance import UserHistoryAnalyzer
from notification_center.config import get_notification_configuration
from notification_center.domain.entities import (
    ItemKind,
    MediaCategory,
    MediaItem,
    MediaUser,
    Notification,
    NotificationConfiguration,
    NotificationLevel,
    NotificationType,
)
from notification_center.domain.exceptions import (
    CollaboratorError,
    ConfigurationUnavailable,
    StorageError,
)
from notification_center.infrastructure.repositories import NotificationRepository
from notification_center.utils import now_utc

from .throttle import SeriesThrottle

DEFAULT_DELAY_SECONDS = 2.0
DEFAULT_MESSAGE_TEMPLATE = "{name} has been added to your library"
UNKNOWN_SEASON_MARKER = "Unknown"
UNKNOWN_ARTIST = "Unknown Artist"

logger = logging.getLogger(__name__)

ConfigurationProvider = Callable[[], NotificationConfiguration]
SessionFactory = Callable[[], Session]


@dataclass(frozen=True)
class ClassifiedItem:
    """Outcome of classifying an added item that may notify users."""

    item: MediaItem
    notification_type: NotificationType
    level: NotificationLevel
    title: str
    message: str


class MediaAddedHandler:
    """Process catalog additions and persist the resulting notifications.

    The host calls :meth:`notify_item_added` for every added item. Each call is
    handled by its own background task which waits for metadata to settle,
    classifies the item, suppresses bulk additions for the same series and
    fans out to every user whose verbosity level accepts the item.
    """

    def __init__(
        self,
        collaborators: HostCollaborators,
        session_factory: SessionFactory,
        *,
        configuration: ConfigurationProvider = get_notification_configuration,
        analyzer: UserHistoryAnalyzer | None = None,
        throttle: SeriesThrottle | None = None,
        delay_seconds: float = DEFAULT_DELAY_SECONDS,
        message_template: str = DEFAULT_MESSAGE_TEMPLATE,
        clock: Callable[[], datetime] = now_utc,
    ) -> None:
        self._catalog = collaborators.catalog
        self._users = collaborators.users
        self._session_factory = session_factory
        self._configuration = configuration
        self._analyzer = analyzer or UserHistoryAnalyzer(
            collaborators.catalog, collaborators.users, collaborators.watch_history
        )
        self._throttle = throttle or SeriesThrottle()
        self._delay_seconds = delay_seconds
        self._message_template = message_template
        self._clock = clock
        self._loop: asyncio.AbstractEventLoop | None = None
        self._tasks: set[asyncio.Task[int]] = set()

    @property
    def throttle(self) -> SeriesThrottle:
        return self._throttle

    @property
    def pending_tasks(self) -> set[asyncio.Task[int]]:
        return set(self._tasks)

    def bind_loop(self, loop: asyncio.AbstractEventLoop) -> None:
        """Use ``loop`` for signals raised from threads outside the event loop."""

        self._loop = loop

    def notify_item_added(self, item_id: str) -> None:
        """Schedule processing of an added catalog item and return immediately."""

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            if self._loop is None or self._loop.is_closed():
                raise RuntimeError("MediaAddedHandler is not bound to a running event loop")
            asyncio.run_coroutine_threadsafe(self.handle_item_added(item_id), self._loop)
        else:
            task = loop.create_task(self.handle_item_added(item_id))
            self._tasks.add(task)
            task.add_done_callback(self._tasks.discard)

    async def handle_item_added(self, item_id: str) -> int:
        """Wait for the settle delay, then process ``item_id`` in a worker thread."""

        try:
            if self._delay_seconds > 0:
                await anyio.sleep(self._delay_seconds)
            return await to_thread.run_sync(self.process_item_added, item_id)
        except Exception:
            logger.exception("Error handling item added event for item %s", item_id)
            return 0

    def process_item_added(self, item_id: str) -> int:
        """Classify ``item_id`` and fan out notifications.

        Returns:
            Number of notifications created
        """

        try:
            configuration = self._configuration()
        except ConfigurationUnavailable:
            logger.warning("Configuration unavailable, ignoring added item %s", item_id)
            return 0

        try:
            item = self._catalog.get_item(item_id)
            if item is None:
                logger.warning("Item %s not found after delay", item_id)
                return 0

            now = self._clock()
            classified = self.classify(item, configuration, now=now)
            if classified is None:
                return 0

            users = list(self._users.list_users())
        except CollaboratorError:
            logger.exception("Error resolving added item %s", item_id)
            return 0

        created = self._fan_out(classified, users, configuration, now)
        self._throttle.sweep(now)
        return created

    def classify(
        self,
        item: MediaItem,
        configuration: NotificationConfiguration,
        *,
        now: datetime | None = None,
    ) -> ClassifiedItem | None:
        """Map ``item`` to a notification, or ``None`` when nothing should be sent.

        Episodes and seasons that pass classification are recorded against
        their series, so later additions inside the window are suppressed.
        """

        if item.kind is ItemKind.MOVIE:
            level = configuration.level_for(MediaCategory.MOVIE)
            if level is NotificationLevel.DISABLED:
                return None
            label = _with_year(item.name, item.production_year)
            return self._classified(item, NotificationType.NEW_MOVIE, level, item.name, label)

        if item.kind is ItemKind.EPISODE:
            level = configuration.level_for(MediaCategory.SERIES)
            if level is NotificationLevel.DISABLED:
                return None
            series_name = self._resolve_series_name(item)
            if series_name is None:
                logger.warning("Episode %s has no series linked", item.name)
                return None
            if not self._throttle.try_acquire(item.series_id, now):
                logger.debug("Skipping notification for %s - recent bulk add", series_name)
                return None
            label = (
                f"{series_name} S{item.season_number or 0:02d}"
                f"E{item.index_number or 0:02d} - {item.name}"
            )
            return self._classified(item, NotificationType.NEW_EPISODE, level, series_name, label)

        if item.kind is ItemKind.SEASON:
            level = configuration.level_for(MediaCategory.SERIES)
            if level is NotificationLevel.DISABLED:
                return None
            series_name = self._resolve_series_name(item)
            if series_name is None:
                logger.warning("Season %s has no series linked", item.name)
                return None
            if UNKNOWN_SEASON_MARKER in (item.name or ""):
                logger.debug("Skipping temporary/unknown season %s", item.name)
                return None
            if not self._throttle.try_acquire(item.series_id, now):
                logger.debug("Skipping season notification for %s - recent bulk add", series_name)
                return None
            label = f"{series_name} Season {item.index_number or 0}"
            return self._classified(item, NotificationType.NEW_SEASON, level, series_name, label)

        if item.kind is ItemKind.MUSIC_ALBUM:
            level = configuration.level_for(MediaCategory.MUSIC)
            if level is NotificationLevel.DISABLED:
                return None
            artist = next((name for name in item.album_artists if name), UNKNOWN_ARTIST)
            label = _with_year(f"{artist} - {item.name}", item.production_year)
            return self._classified(item, NotificationType.NEW_ALBUM, level, item.name, label)

        logger.debug("Ignoring added item %s of kind %s", item.id, item.kind.value)
        return None

    def _classified(
        self,
        item: MediaItem,
        notification_type: NotificationType,
        level: NotificationLevel,
        title: str,
        label: str,
    ) -> ClassifiedItem:
        return ClassifiedItem(
            item=item,
            notification_type=notification_type,
            level=level,
            title=title,
            message=self._message_template.format(name=label),
        )

    def _resolve_series_name(self, item: MediaItem) -> str | None:
        if not item.has_series:
            return None
        if item.series_name:
            return item.series_name
        series = self._catalog.get_item(item.series_id)
        return series.name if series is not None else None

    def _fan_out(
        self,
        classified: ClassifiedItem,
        users: list[MediaUser],
        configuration: NotificationConfiguration,
        now: datetime,
    ) -> int:
        expires_at = now + timedelta(days=configuration.effective_retention_days)
        created = 0
        session = self._session_factory()
        try:
            repository = NotificationRepository(session)
            for user in users:
                try:
                    relevant = self._analyzer.should_notify(
                        user.id, classified.item, classified.level
                    )
                except Exception:
                    logger.exception(
                        "Relevance check failed for user %s on item %s",
                        user.id,
                        classified.item.id,
                    )
                    continue

                if not relevant:
                    logger.debug(
                        "Skipped notification for user %s: %s (level %s not met)",
                        user.id,
                        classified.title,
                        classified.level.value,
                    )
                    continue

                notification = Notification(
                    id=str(uuid.uuid4()),
                    user_id=user.id,
                    type=classified.notification_type,
                    title=classified.title,
                    message=classified.message,
                    item_id=classified.item.id,
                    created_at=now,
                    expires_at=expires_at,
                )
                try:
                    repository.create(notification)
                except StorageError:
                    logger.exception(
                        "Failed to store notification for user %s: %s",
                        user.id,
                        classified.title,
                    )
                    continue

                created += 1
                logger.info(
                    "Created notification %s for user %s: %s (level: %s)",
                    notification.id,
                    user.id,
                    classified.title,
                    classified.level.value,
                )
        finally:
            session.close()
        return created


def _with_year(name: str, year: int | None) -> str:
    return f"{name} ({year})" if year else name


__all__ = [
    "ClassifiedItem",
    "DEFAULT_DELAY_SECONDS",
    "DEFAULT_MESSAGE_TEMPLATE",
    "MediaAddedHandler",
    "UNKNOWN_ARTIST",
    "UNKNOWN_SEASON_MARKER",
]
