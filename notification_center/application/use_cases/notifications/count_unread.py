"""Use case for counting unread notifications."""

from sqlalchemy.orm import Session

from notification_center.infrastructure.repositories import NotificationRepository


def count_unread_notifications(session: Session, *, user_id: str) -> int:
    """Return how many active notifications ``user_id`` has not read yet."""

    return NotificationRepository(session).count_unread(user_id)
