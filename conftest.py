"""Root conftest for pytest configuration and shared fixtures.

This conftest is loaded before both testpaths (tests/ and feedsync/domains/),
making its fixtures available to centralized tests AND colocated domain tests.
"""

import os

import pytest
import pytest_asyncio

# Register pytest-asyncio plugin at the root level
pytest_plugins = ("pytest_asyncio",)

# ---------------------------------------------------------------------------
# Environment variables: must be set before any feedsync module import
# Uses setdefault so real env vars (CI) are never overridden.
# ---------------------------------------------------------------------------
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("REMOTE_SOURCE_URL", "https://portal.test")
os.environ.setdefault("DATA_DOMAIN", "contentrecord.hns")
os.environ.setdefault("LOCAL_DEVELOPMENT", "true")
os.environ.setdefault("LOG_LEVEL", "DEBUG")


# ---------------------------------------------------------------------------
# Shared fake fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def fake_remote_source():
    """Fake RemoteSource serving in-memory documents."""
    from feedsync.adapters.remote_source.fake import FakeRemoteSource

    return FakeRemoteSource()


@pytest.fixture
def fake_cursor_store():
    """Fake cursor store."""
    from feedsync.domains.cursors.fakes.cursor_repository import FakeFeedCursorRepository

    return FakeFeedCursorRepository()


@pytest.fixture
def fake_record_store():
    """Fake record store."""
    from feedsync.domains.entries.fakes.entry_repository import FakeFeedEntryRepository

    return FakeFeedEntryRepository()


@pytest.fixture
def fake_event_log():
    """Fake event log."""
    from feedsync.domains.events.fakes.event_repository import FakeSyncEventRepository

    return FakeSyncEventRepository()


@pytest.fixture
def fake_users():
    """Fake tracked user repository (also the entity catalog)."""
    from feedsync.domains.users.fakes.user_repository import FakeTrackedUserRepository

    return FakeTrackedUserRepository()


# ---------------------------------------------------------------------------
# In-memory database
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def session_factory():
    """Session factory bound to a fresh in-memory SQLite database."""
    from feedsync.db.session import build_engine, build_session_factory, init_db

    engine = build_engine("sqlite+aiosqlite:///:memory:")
    await init_db(engine)
    yield build_session_factory(engine)
    await engine.dispose()
