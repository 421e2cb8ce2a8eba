"""
QuickNotes Backend — Test Configuration (conftest.py)
=======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy (all function-scoped):
    ├── note_store:    Real NoteStore on an in-memory SQLite database
    ├── mock_store:    AsyncMock with the NoteStore interface (no database)
    ├── sample_note:   Object shaped like a Note row
    ├── test_client:   HTTPX AsyncClient → app wired to note_store
    └── mock_client:   HTTPX AsyncClient → app wired to mock_store
"""

import os
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

# Override settings for testing BEFORE any quicknotes imports
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["STARTUP_MAX_ATTEMPTS"] = "2"
os.environ["STARTUP_RETRY_INTERVAL"] = "0"

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from quicknotes.database import Base  # noqa: E402
from quicknotes.main import create_app  # noqa: E402
from quicknotes.models.note import Note  # noqa: E402,F401
from quicknotes.store import NoteStore  # noqa: E402


@pytest_asyncio.fixture
async def note_store():
    """
    A NoteStore backed by a fresh in-memory SQLite database.

    StaticPool keeps the single in-memory connection alive across sessions,
    so every store operation sees the same table.
    """
    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    store = NoteStore(engine)
    yield store
    await store.close()


@pytest.fixture
def mock_store():
    """
    A mock store with NoteStore's async interface.

    Usage:
        mock_store.get.return_value = None
        await note_service.get_note(mock_store, 1)   # → NotFoundError
    """
    return AsyncMock(spec=NoteStore)


@pytest.fixture
def sample_note():
    note = MagicMock()
    note.id = 1
    note.title = "Groceries"
    note.content = "eggs, milk"
    note.created_at = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)
    return note


@pytest_asyncio.fixture
async def test_client(note_store):
    """
    HTTPX AsyncClient routed straight into the app (no server).

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/api/health")
            assert response.status_code == 200
    """
    app = create_app(store=note_store)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def mock_client(mock_store):
    """Same as test_client, but the app talks to `mock_store`."""
    app = create_app(store=mock_store)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
