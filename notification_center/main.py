"""FastAPI application factory for the notification center."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from contextlib import asynccontextmanager
from datetime import timedelta

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from notification_center.application.ports import HostCollaborators
from notification_center.application.relevance import UserHistoryAnalyzer
from notification_center.application.use_cases.notifications import (
    MediaAddedHandler,
    SeriesThrottle,
    purge_expired_periodically,
)
from notification_center.config import Settings, get_settings
from notification_center.infrastructure.database import SessionLocal, engine, initialize_database
from notification_center.interfaces.api.routes import register_routes

logger = logging.getLogger(__name__)


def build_media_added_handler(
    collaborators: HostCollaborators, settings: Settings
) -> MediaAddedHandler:
    """Wire the catalog intake to the host services and the notification store."""

    analyzer = UserHistoryAnalyzer(
        collaborators.catalog,
        collaborators.users,
        collaborators.watch_history,
        min_watch_count=settings.favorite_genre_min_watch_count,
    )
    throttle = SeriesThrottle(
        window=timedelta(minutes=settings.deduplication_window_minutes),
        retention=timedelta(minutes=settings.deduplication_retention_minutes),
    )
    return MediaAddedHandler(
        collaborators,
        SessionLocal,
        analyzer=analyzer,
        throttle=throttle,
        delay_seconds=settings.processing_delay_seconds,
        message_template=settings.item_added_template,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Prepare the database and background work at startup and release it on shutdown."""

    settings = get_settings()
    initialize_database()

    handler: MediaAddedHandler | None = getattr(app.state, "media_added_handler", None)
    if handler is not None:
        handler.bind_loop(asyncio.get_running_loop())

    purge_task: asyncio.Task[None] | None = None
    if settings.purge_interval_minutes > 0:
        purge_task = asyncio.create_task(
            purge_expired_periodically(SessionLocal, settings.purge_interval_minutes * 60)
        )

    yield

    if purge_task is not None:
        purge_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await purge_task
    engine.dispose()


def create_app(collaborators: HostCollaborators | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    When ``collaborators`` are given, catalog additions pushed through
    ``app.state.media_added_handler`` generate notifications.
    """

    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper())

    app = FastAPI(title="Notification Center", lifespan=lifespan)
    if settings.cors_allow_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_allow_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.state.media_added_handler = None
    if collaborators is not None:
        app.state.media_added_handler = build_media_added_handler(collaborators, settings)
    else:
        logger.info("No host collaborators configured; catalog intake is disabled")

    register_routes(app)
    return app


app = create_app()
