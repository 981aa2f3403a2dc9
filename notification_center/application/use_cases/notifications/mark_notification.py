"""Use cases for acknowledging notifications."""

import logging

from sqlalchemy.orm import Session

from notification_center.infrastructure.repositories import NotificationRepository

logger = logging.getLogger(__name__)


def mark_notification_read(session: Session, notification_id: str) -> None:
    """Mark ``notification_id`` as read.

    The identifier alone selects the row. Marking an already read
    notification keeps its original ``read_at``. Unknown identifiers raise
    :class:`~notification_center.domain.exceptions.NotFoundError`.
    """

    NotificationRepository(session).mark_as_read(notification_id)
    logger.info("Marked notification %s as read", notification_id)


def mark_notification_delivered(session: Session, notification_id: str) -> None:
    """Record that a client surface received ``notification_id``."""

    NotificationRepository(session).mark_as_delivered(notification_id)
    logger.debug("Marked notification %s as delivered", notification_id)
