"""Endpoints for polling and acknowledging notifications."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from notification_center.application.use_cases.notifications import (
    count_unread_notifications,
    list_notifications as list_notifications_uc,
    mark_notification_delivered,
    mark_notification_read,
)
from notification_center.domain.entities import Notification
from notification_center.domain.exceptions import NotFoundError, StorageError
from notification_center.infrastructure.database import get_db
from notification_center.interfaces.api.dependencies import get_current_user_id
from notification_center.interfaces.api.schemas import NotificationRead

router = APIRouter(prefix="/notifications", tags=["notifications"])
logger = logging.getLogger(__name__)


def _notification_to_schema(notification: Notification) -> NotificationRead:
    return NotificationRead.model_validate(notification)


@router.get("", response_model=list[NotificationRead])
def list_notifications(
    unread_only: bool = Query(False, alias="unreadOnly"),
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> list[NotificationRead]:
    """Return the most recent active notifications for the authenticated user."""

    try:
        notifications = list_notifications_uc(db, user_id=user_id, unread_only=unread_only)
    except StorageError as exc:
        logger.exception("Error retrieving notifications")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error retrieving notifications",
        ) from exc
    return [_notification_to_schema(notification) for notification in notifications]


@router.get("/unread/count", response_model=int)
def get_unread_count(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> int:
    """Return how many unread notifications the authenticated user has."""

    try:
        return count_unread_notifications(db, user_id=user_id)
    except StorageError as exc:
        logger.exception("Error getting unread count")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error getting unread count",
        ) from exc


@router.post("/{notification_id}/read", status_code=status.HTTP_204_NO_CONTENT)
def mark_as_read(
    notification_id: str,
    db: Session = Depends(get_db),
    _: str = Depends(get_current_user_id),
) -> Response:
    """Mark a notification as read."""

    try:
        mark_notification_read(db, notification_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except StorageError as exc:
        logger.exception("Error marking notification as read")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error marking notification as read",
        ) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{notification_id}/delivered", status_code=status.HTTP_204_NO_CONTENT)
def mark_as_delivered(
    notification_id: str,
    db: Session = Depends(get_db),
    _: str = Depends(get_current_user_id),
) -> Response:
    """Record that the client received a notification."""

    try:
        mark_notification_delivered(db, notification_id)
    except NotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except StorageError as exc:
        logger.exception("Error marking notification as delivered")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error marking notification as delivered",
        ) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)
