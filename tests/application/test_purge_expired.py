from __future__ import annotations

import asyncio
import uuid
from datetime import timedelta

import anyio
import pytest

from notification_center.application.use_cases.notifications import (
    purge_expired_notifications,
    purge_expired_periodically,
)
from notification_center.application.use_cases.notifications import purge_expired as purge_module
from notification_center.domain.entities import Notification, NotificationType
from notification_center.domain.exceptions import StorageError
from notification_center.infrastructure.repositories import NotificationRepository
from notification_center.utils import now_utc


def _store(session_factory, *, age_days: int) -> str:
    created_at = now_utc() - timedelta(days=age_days)
    with session_factory() as session:
        stored = NotificationRepository(session).create(
            Notification(
                id=str(uuid.uuid4()),
                user_id="alice",
                type=NotificationType.NEW_EPISODE,
                title="The Show",
                message="The Show S01E01 - Pilot has been added to your library",
                created_at=created_at,
                expires_at=created_at + timedelta(days=7),
            )
        )
    return stored.id


def test_purge_expired_notifications_keeps_active_rows(session, session_factory) -> None:
    expired_id = _store(session_factory, age_days=8)
    active_id = _store(session_factory, age_days=1)

    assert purge_expired_notifications(session) == 1

    repository = NotificationRepository(session)
    assert repository.get(expired_id) is None
    assert repository.get(active_id) is not None


@pytest.mark.anyio
async def test_periodic_purge_sweeps_until_cancelled(session_factory) -> None:
    expired_id = _store(session_factory, age_days=8)

    with anyio.move_on_after(0.5):
        await purge_expired_periodically(session_factory, 0.01)

    with session_factory() as session:
        assert NotificationRepository(session).get(expired_id) is None


@pytest.mark.anyio
async def test_periodic_purge_survives_storage_errors(session_factory, monkeypatch, caplog) -> None:
    calls: list[int] = []

    def failing_purge(self, *, now=None):
        calls.append(1)
        raise StorageError("database locked")

    monkeypatch.setattr(NotificationRepository, "purge_expired", failing_purge)

    with caplog.at_level("ERROR"), anyio.move_on_after(0.3):
        await purge_expired_periodically(session_factory, 0.01)

    assert len(calls) >= 2
    assert "Expired notification sweep failed" in caplog.text


@pytest.mark.anyio
async def test_periodic_purge_survives_unexpected_errors(session_factory, monkeypatch, caplog) -> None:
    calls: list[int] = []

    def broken_sweep(factory):
        calls.append(1)
        raise RuntimeError("unexpected")

    monkeypatch.setattr(purge_module, "_purge_with_new_session", broken_sweep)

    with caplog.at_level("ERROR"):
        task = asyncio.create_task(purge_expired_periodically(session_factory, 0.01))
        await anyio.sleep(0.2)
        assert not task.done()
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

    assert len(calls) >= 2
    assert "Expired notification sweep failed" in caplog.text
