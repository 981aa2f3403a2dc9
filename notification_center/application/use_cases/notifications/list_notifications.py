"""Use case for listing the notifications of a user."""

from collections.abc import Sequence

from sqlalchemy.orm import Session

from notification_center.domain.entities import Notification
from notification_center.infrastructure.repositories import NotificationRepository


def list_notifications(
    session: Session,
    *,
    user_id: str,
    unread_only: bool = False,
) -> Sequence[Notification]:
    """Return the newest active notifications of ``user_id``."""

    repository = NotificationRepository(session)
    return repository.list_for_user(user_id, unread_only=unread_only)
