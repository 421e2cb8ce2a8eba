"""
QuickNotes Backend — Database Engine & Base Model
===================================================

What:  Async SQLAlchemy engine construction, session factory and ORM base.
How:   `build_engine()` creates an async engine with a bounded connection
       pool from the settings; `build_session_factory()` wraps it.
Who:   Used by NoteStore (quicknotes.store) and by Alembic (metadata).
When:  The engine is built once when the application starts, never at
       import time, so importing this module performs no I/O.

Connection Pooling Strategy:
    pool_size=DB_POOL_SIZE:  Maximum concurrent connections (default 10)
    max_overflow=0:          No connections beyond pool_size
    pool_timeout:            Seconds a caller waits in the FIFO queue for a
                             free connection before the checkout errors
    pool_pre_ping:           Validates connections before use
"""

from typing import Any, Dict, Optional

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from quicknotes.config import Settings, settings as default_settings


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares a single metadata object so Alembic sees every table.
    """
    pass


def pool_options(app_settings: Settings) -> Dict[str, Any]:
    """
    Pool keyword arguments for `create_async_engine`.

    SQLite (used by the test suite) manages its own pool class and rejects
    QueuePool sizing arguments, so they are only passed for server databases.
    """
    url = make_url(app_settings.database_url)
    if url.get_backend_name() == "sqlite":
        return {}
    return {
        "pool_size": app_settings.db_pool_size,
        "max_overflow": 0,
        "pool_timeout": app_settings.db_pool_timeout,
        "pool_pre_ping": app_settings.db_pool_pre_ping,
        "pool_recycle": 3600,
    }


def build_engine(app_settings: Optional[Settings] = None) -> AsyncEngine:
    """
    Create the async engine for the configured database.

    Echoes SQL only when LOG_LEVEL is DEBUG.
    """
    app_settings = app_settings or default_settings
    return create_async_engine(
        app_settings.database_url,
        echo=app_settings.log_level == "DEBUG",
        **pool_options(app_settings),
    )


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Session factory bound to `engine`.

    expire_on_commit=False keeps attribute values readable on rows returned
    from a store method after its session has closed.
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
