"""Use cases for removing expired notifications."""

from __future__ import annotations

import logging
from collections.abc import Callable

import anyio
from anyio import to_thread
from sqlalchemy.orm import Session

from notification_center.infrastructure.repositories import NotificationRepository

logger = logging.getLogger(__name__)


def purge_expired_notifications(session: Session) -> int:
    """Delete expired notifications and return how many were removed."""

    return NotificationRepository(session).purge_expired()


def _purge_with_new_session(session_factory: Callable[[], Session]) -> int:
    session = session_factory()
    try:
        return purge_expired_notifications(session)
    finally:
        session.close()


async def purge_expired_periodically(
    session_factory: Callable[[], Session],
    interval_seconds: float,
) -> None:
    """Sweep expired notifications every ``interval_seconds`` until cancelled."""

    while True:
        await anyio.sleep(interval_seconds)
        try:
            await to_thread.run_sync(_purge_with_new_session, session_factory)
        except Exception:
            logger.exception("Expired notification sweep failed")
