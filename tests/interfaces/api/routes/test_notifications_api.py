"""HTTP tests for the notification polling endpoints."""

from __future__ import annotations

import uuid
from datetime import timedelta

import pytest
from fastapi.testclient import TestClient

from notification_center.application.ports import HostCollaborators
from notification_center.application.use_cases.notifications import MediaAddedHandler
from notification_center.domain.entities import Notification, NotificationType
from notification_center.domain.exceptions import StorageError
from notification_center.infrastructure.repositories import NotificationRepository
from notification_center.infrastructure.security import create_user_token
from notification_center.interfaces.api.routes import notifications as notifications_routes
from notification_center.main import create_app
from notification_center.utils import now_utc


@pytest.fixture()
def client() -> TestClient:
    return TestClient(create_app())


def _auth(user_id: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_user_token(user_id)}"}


def _store(session, user_id: str, *, title: str = "Heat", age_days: float = 0, retention_days: int = 7):
    created_at = now_utc() - timedelta(days=age_days)
    return NotificationRepository(session).create(
        Notification(
            id=str(uuid.uuid4()),
            user_id=user_id,
            type=NotificationType.NEW_MOVIE,
            title=title,
            message=f"{title} has been added to your library",
            item_id="m1",
            created_at=created_at,
            expires_at=created_at + timedelta(days=retention_days),
        )
    )


@pytest.mark.parametrize(
    ("method", "path"),
    [
        ("get", "/notifications"),
        ("get", "/notifications/unread/count"),
        ("post", "/notifications/abc/read"),
        ("post", "/notifications/abc/delivered"),
    ],
)
def test_endpoints_require_a_bearer_token(client, method: str, path: str) -> None:
    response = getattr(client, method)(path)

    assert response.status_code == 401


def test_invalid_token_is_rejected(client) -> None:
    response = client.get("/notifications", headers={"Authorization": "Bearer not-a-jwt"})

    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid credentials"


def test_list_returns_only_the_callers_notifications(client, session) -> None:
    mine = _store(session, "alice", title="Heat")
    _store(session, "bob", title="Alien")

    response = client.get("/notifications", headers=_auth("alice"))

    assert response.status_code == 200
    [payload] = response.json()
    assert payload["id"] == mine.id
    assert payload["user_id"] == "alice"
    assert payload["type"] == "NewMovie"
    assert payload["title"] == "Heat"
    assert payload["message"] == "Heat has been added to your library"
    assert payload["read_at"] is None


def test_list_hides_expired_notifications(client, session) -> None:
    _store(session, "alice", title="old", age_days=8)
    _store(session, "alice", title="fresh")

    response = client.get("/notifications", headers=_auth("alice"))

    assert [n["title"] for n in response.json()] == ["fresh"]


def test_read_flow_updates_listing_and_count(client, session) -> None:
    first = _store(session, "alice", title="first", age_days=0.01)
    _store(session, "alice", title="second")
    headers = _auth("alice")

    assert client.get("/notifications/unread/count", headers=headers).json() == 2

    response = client.post(f"/notifications/{first.id}/read", headers=headers)
    assert response.status_code == 204
    assert response.content == b""

    listed = client.get("/notifications", headers=headers).json()
    assert [n["title"] for n in listed] == ["second", "first"]
    assert listed[1]["read_at"] is not None

    unread = client.get("/notifications", params={"unreadOnly": "true"}, headers=headers).json()
    assert [n["title"] for n in unread] == ["second"]
    assert client.get("/notifications/unread/count", headers=headers).json() == 1

    read_at = listed[1]["read_at"]
    assert client.post(f"/notifications/{first.id}/read", headers=headers).status_code == 204
    again = client.get("/notifications", headers=headers).json()
    assert again[1]["read_at"] == read_at


def test_delivered_does_not_mark_as_read(client, session) -> None:
    stored = _store(session, "alice")
    headers = _auth("alice")

    assert client.post(f"/notifications/{stored.id}/delivered", headers=headers).status_code == 204

    [payload] = client.get("/notifications", headers=headers).json()
    assert payload["delivered_at"] is not None
    assert payload["read_at"] is None
    assert client.get("/notifications/unread/count", headers=headers).json() == 1


@pytest.mark.parametrize("action", ["read", "delivered"])
def test_unknown_notification_returns_404(client, action: str) -> None:
    response = client.post(f"/notifications/missing/{action}", headers=_auth("alice"))

    assert response.status_code == 404


def test_storage_failure_returns_500(client, monkeypatch) -> None:
    def failing(*args, **kwargs):
        raise StorageError("database unavailable")

    monkeypatch.setattr(notifications_routes, "list_notifications_uc", failing)

    response = client.get("/notifications", headers=_auth("alice"))

    assert response.status_code == 500
    assert response.json()["detail"] == "Error retrieving notifications"


def test_create_app_without_collaborators_has_no_intake() -> None:
    app = create_app()

    assert app.state.media_added_handler is None


def test_create_app_wires_the_intake_handler(catalog, users, watch_history) -> None:
    app = create_app(HostCollaborators(catalog=catalog, users=users, watch_history=watch_history))

    handler = app.state.media_added_handler
    assert isinstance(handler, MediaAddedHandler)
    assert handler.throttle.window == timedelta(minutes=5)


def test_lifespan_binds_the_intake_handler(catalog, users, watch_history) -> None:
    app = create_app(HostCollaborators(catalog=catalog, users=users, watch_history=watch_history))

    with TestClient(app) as client:
        assert client.get("/notifications", headers=_auth("alice")).json() == []
        assert app.state.media_added_handler._loop is not None


def test_openapi_declares_plain_bearer_auth(client) -> None:
    schemes = client.get("/openapi.json").json()["components"]["securitySchemes"]

    assert list(schemes) == ["HTTPBearer"]
    assert schemes["HTTPBearer"]["scheme"] == "bearer"
    assert "flows" not in schemes["HTTPBearer"]


def test_non_bearer_authorization_is_rejected(client) -> None:
    response = client.get("/notifications", headers={"Authorization": "Basic YWxpY2U6c2VjcmV0"})

    assert response.status_code == 401
