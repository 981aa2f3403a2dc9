"""Persistence helpers for notification entities."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Query, Session

from notification_center.domain.entities import Notification, NotificationType
from notification_center.domain.exceptions import NotFoundError, StorageError
from notification_center.infrastructure.models import NotificationModel
from notification_center.utils import ensure_naive_utc, ensure_utc, now_utc

PAGE_SIZE = 100

logger = logging.getLogger(__name__)


class NotificationRepository:
    """Provide storage operations for :class:`Notification` objects.

    Expired rows are filtered out of every read and removed by
    :meth:`purge_expired`. Each write is a single statement followed by a
    commit, so concurrent sweeps and reads only ever see whole rows.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    def create(self, notification: Notification) -> Notification:
        model = NotificationModel()
        self._apply_entity_to_model(model, notification)
        try:
            self.session.add(model)
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            msg = f"Notification with id {notification.id} already exists"
            raise StorageError(msg) from exc
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise StorageError("Failed to store notification") from exc
        return self._to_entity(model)

    def get(self, notification_id: str) -> Notification | None:
        try:
            model = self.session.get(NotificationModel, notification_id)
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise StorageError("Failed to load notification") from exc
        return self._to_entity(model) if model else None

    def list_for_user(
        self,
        user_id: str,
        *,
        unread_only: bool = False,
        limit: int = PAGE_SIZE,
        now: datetime | None = None,
    ) -> Sequence[Notification]:
        query = self._active_query(user_id, now)
        if unread_only:
            query = query.filter(NotificationModel.read_at.is_(None))
        query = query.order_by(
            NotificationModel.created_at.desc(), NotificationModel.id.desc()
        ).limit(min(limit, PAGE_SIZE))
        try:
            models = query.all()
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise StorageError("Failed to list notifications") from exc
        return [self._to_entity(model) for model in models]

    def count_unread(self, user_id: str, *, now: datetime | None = None) -> int:
        query = self._active_query(user_id, now).filter(NotificationModel.read_at.is_(None))
        try:
            return query.with_entities(func.count(NotificationModel.id)).scalar() or 0
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise StorageError("Failed to count unread notifications") from exc

    def mark_as_read(self, notification_id: str, *, now: datetime | None = None) -> None:
        """Set ``read_at`` once; later calls leave the first timestamp untouched."""

        self._stamp(notification_id, NotificationModel.read_at, now)

    def mark_as_delivered(self, notification_id: str, *, now: datetime | None = None) -> None:
        """Set ``delivered_at`` once; later calls leave the first timestamp untouched."""

        self._stamp(notification_id, NotificationModel.delivered_at, now)

    def purge_expired(self, *, now: datetime | None = None) -> int:
        """Delete every notification whose expiry is at or before ``now``."""

        cutoff = ensure_naive_utc(now or now_utc())
        try:
            deleted = (
                self.session.query(NotificationModel)
                .filter(NotificationModel.expires_at <= cutoff)
                .delete(synchronize_session=False)
            )
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise StorageError("Failed to purge expired notifications") from exc
        if deleted:
            logger.info("Cleaned up %s expired notifications", deleted)
        return deleted

    def _active_query(self, user_id: str, now: datetime | None) -> Query:
        cutoff = ensure_naive_utc(now or now_utc())
        return (
            self.session.query(NotificationModel)
            .filter(NotificationModel.user_id == user_id)
            .filter(NotificationModel.expires_at > cutoff)
        )

    def _stamp(self, notification_id: str, column, now: datetime | None) -> None:
        timestamp = ensure_naive_utc(now or now_utc())
        try:
            updated = (
                self.session.query(NotificationModel)
                .filter(NotificationModel.id == notification_id, column.is_(None))
                .update({column: timestamp}, synchronize_session=False)
            )
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise StorageError(f"Failed to update notification {notification_id}") from exc

        if updated == 0 and self.get(notification_id) is None:
            msg = f"Notification with id {notification_id} not found"
            raise NotFoundError(msg)

    @staticmethod
    def _apply_entity_to_model(model: NotificationModel, notification: Notification) -> None:
        model.id = notification.id
        model.user_id = notification.user_id
        model.type = notification.type.value
        model.title = notification.title
        model.message = notification.message or ""
        model.item_id = notification.item_id
        model.created_at = ensure_naive_utc(notification.created_at)
        model.expires_at = ensure_naive_utc(notification.expires_at)
        model.delivered_at = ensure_naive_utc(notification.delivered_at)
        model.read_at = ensure_naive_utc(notification.read_at)

    @staticmethod
    def _to_entity(model: NotificationModel) -> Notification:
        return Notification(
            id=model.id,
            user_id=model.user_id,
            type=NotificationType(model.type),
            title=model.title,
            message=model.message or "",
            item_id=model.item_id,
            created_at=ensure_utc(model.created_at),
            expires_at=ensure_utc(model.expires_at),
            delivered_at=ensure_utc(model.delivered_at),
            read_at=ensure_utc(model.read_at),
        )


__all__ = ["PAGE_SIZE", "NotificationRepository"]
