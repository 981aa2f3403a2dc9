"""Shared fixtures for the notification center test-suite."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
TESTS_DIR = Path(__file__).resolve().parent
for path in (ROOT, TESTS_DIR):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["ACCESS_TOKEN_EXPIRE_MINUTES"] = "30"
os.environ["PURGE_INTERVAL_MINUTES"] = "0"
os.environ["PROCESSING_DELAY_SECONDS"] = "0"

from notification_center.config import get_settings  # noqa: E402

get_settings.cache_clear()

from notification_center.infrastructure.database import (  # noqa: E402
    Base,
    SessionLocal,
    engine,
    initialize_database,
)

from fakes import InMemoryCatalog, InMemoryUserDirectory, InMemoryWatchHistory  # noqa: E402


@pytest.fixture(autouse=True)
def reset_database():
    """Ensure the test database starts from a clean state for each test."""

    Base.metadata.drop_all(bind=engine)
    initialize_database()
    yield
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def session():
    with SessionLocal() as db:
        yield db


@pytest.fixture()
def session_factory():
    return SessionLocal


@pytest.fixture()
def catalog() -> InMemoryCatalog:
    return InMemoryCatalog()


@pytest.fixture()
def users() -> InMemoryUserDirectory:
    return InMemoryUserDirectory()


@pytest.fixture()
def watch_history() -> InMemoryWatchHistory:
    return InMemoryWatchHistory()


@pytest.fixture()
def anyio_backend() -> str:
    return "asyncio"
