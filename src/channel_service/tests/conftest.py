"""
Core pytest configuration for the entire test suite.

This module provides only the essential database setup and core utilities
that are needed across ALL types of tests (repositories, API, logging, ...).

Domain-specific fixtures live in:
- tests/test_fixtures/repository_fixtures.py
- tests/test_fixtures/api_fixtures.py

and are imported at the bottom of this file so every test module can use them.
"""

from __future__ import annotations

# -------------------------------
# Standard library imports
# -------------------------------
import os
import logging
from urllib.parse import urlparse
from typing import AsyncGenerator

# -------------------------------
# Early logging tuning (IMPORTANT)
# -------------------------------
# Set the level for noisy third-party loggers at import time, before importing
# modules that might initialize them.
NOISY_LOGGERS = (
    "sqlalchemy",
    "sqlalchemy.engine",
    "sqlalchemy.engine.Engine",
    "asyncio",
    "aiosqlite",
    "httpx",
    "httpcore",
)
for _name in NOISY_LOGGERS:
    logging.getLogger(_name).setLevel(logging.WARNING)

# -------------------------------
# Third-party / project imports
# -------------------------------
import pytest
from pytest import FixtureRequest
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from channel_service.config.settings import Settings
from channel_service.core.logging.builder import setup_logging
from channel_service.database.base import Base
from channel_service.database.session import build_engine, build_session_maker
from channel_service import models  # noqa: F401 – import to register models with Base.metadata

logger = logging.getLogger(__name__)


# ------------------------------------------------------------------------------------------------
# Test settings
# ------------------------------------------------------------------------------------------------

def make_test_settings(database_url: str) -> Settings:
    """
    Settings for a test run: human-readable logs on the console and the given database.
    `_env_file=None` keeps a developer's local .env out of the test run.
    """
    return Settings(
        _env_file=None,
        ENV="testing",
        TESTING=True,
        LOG_FORMAT="text",
        LOG_LEVEL="INFO",
        LOG_TO_STDOUT=True,
        DATABASE_URL_OVERRIDE=database_url,
    )


# The `autouse=True` part means that this fixture will be automatically used by pytest
# without explicitly including it in your test function parameters.
@pytest.fixture(scope="session", autouse=True)
def configure_logging(request: FixtureRequest):
    """
    Install application logging for the entire test session.

    dictConfig drops pytest's capture handler from the root logger, so it is
    re-attached afterwards (best-effort) for tests that read `caplog.records`.
    """
    setup_logging(make_test_settings("sqlite+aiosqlite://"))

    caplog_plugin = request.config.pluginmanager.getplugin("logging-plugin")
    handler = getattr(caplog_plugin, "caplog_handler", None)
    if handler is not None:
        logging.getLogger().addHandler(handler)

    yield


# ------------------------------------------------------------------------------------------------
# Determining and Logging the Test Database URL for Tests
# ------------------------------------------------------------------------------------------------


def safe_log_db_url(db_url: str) -> str:
    """
    Return the database URL without credentials, for logging.
    """
    parsed = urlparse(db_url)
    return f"{parsed.scheme}://{parsed.hostname or ''}:{parsed.port or ''}/{parsed.path.lstrip('/')}"


@pytest.fixture()
def test_database_url(tmp_path) -> str:
    """
    Determine the test database URL.

    1. `TEST_DATABASE_URL` environment variable (CI, a real PostgreSQL server).
    2. Otherwise a fresh SQLite file per test (aiosqlite), so tests run without
       any database server and never share rows.
    """
    if test_url := os.getenv("TEST_DATABASE_URL"):
        url = test_url
    else:
        url = f"sqlite+aiosqlite:///{tmp_path / 'test_channels.db'}"

    logger.debug("Using test DB: %s", safe_log_db_url(url))
    return url


@pytest.fixture()
def test_settings(test_database_url: str) -> Settings:
    return make_test_settings(test_database_url)


# ------------------------------------------------------------------------------------------------
# DATABASE FIXTURES
# ------------------------------------------------------------------------------------------------


@pytest.fixture()
async def async_engine(test_settings: Settings) -> AsyncGenerator[AsyncEngine, None]:
    """
    Engine with the schema created for one test and dropped afterwards.

    Function-scoped: async drivers bind connections to the event loop that
    opened them, and pytest-asyncio gives each test its own loop.
    """
    engine = build_engine(test_settings)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture()
async def db_session(async_engine: AsyncEngine) -> AsyncGenerator[AsyncSession, None]:
    """
    A session like the one a request gets.

    Repository methods commit after every statement, so isolation comes from
    the per-test schema in `async_engine`, not from an outer transaction.
    """
    maker = build_session_maker(async_engine)
    async with maker() as session:
        yield session


# Domain fixtures, registered globally
from channel_service.tests.test_fixtures.repository_fixtures import (  # noqa: E402
    channel_repository,
    sample_channel_data,
    create_channel,
    created_channel,
)
from channel_service.tests.test_fixtures.api_fixtures import (  # noqa: E402
    app,
    client,
    channel_payload,
)
