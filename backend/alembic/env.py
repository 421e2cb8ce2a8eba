"""
Alembic Migration Environment
===============================

What:  Applies the notes schema before the service starts.
How:   Resolves the target URL, waits for the database under the same
       RetryPolicy the service uses, then runs migrations through an async
       engine with connection.run_sync().
Who:   `alembic upgrade head` in the container entrypoint; tests drive it
       through alembic.command with an in-process Config.

URL resolution (first match wins):
    1. config.attributes["db_url"]      programmatic callers
    2. alembic -x db_url=...            command line
    3. quicknotes.config.settings       DATABASE_URL or DB_* variables
"""

import asyncio
from logging.config import fileConfig

from sqlalchemy import pool, text
from sqlalchemy.ext.asyncio import AsyncEngine, async_engine_from_config
from alembic import context

from quicknotes.config import settings
from quicknotes.database import Base
from quicknotes.services.readiness import RetryPolicy, await_readiness

# Register models on Base.metadata for --autogenerate
from quicknotes.models.note import Note  # noqa: F401

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata


def resolve_url() -> str:
    return (
        config.attributes.get("db_url")
        or context.get_x_argument(as_dictionary=True).get("db_url")
        or settings.database_url
    )


config.set_main_option("sqlalchemy.url", resolve_url())


def configure_context(**kwargs) -> None:
    url = config.get_main_option("sqlalchemy.url")
    context.configure(
        target_metadata=target_metadata,
        compare_type=True,
        # SQLite cannot ALTER most constraints in place
        render_as_batch=url.startswith("sqlite"),
        **kwargs,
    )


def run_migrations_offline() -> None:
    """Emit SQL to stdout without connecting to the database."""
    configure_context(
        url=config.get_main_option("sqlalchemy.url"),
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection):
    configure_context(connection=connection)

    with context.begin_transaction():
        context.run_migrations()


async def wait_for_database(engine: AsyncEngine) -> None:
    async def ping() -> None:
        async with engine.connect() as connection:
            await connection.execute(text("SELECT 1"))

    await await_readiness(ping, RetryPolicy.from_settings(settings))


async def run_async_migrations() -> None:
    """Wait for the database, then apply pending migrations."""
    connectable = async_engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    try:
        await wait_for_database(connectable)
        async with connectable.connect() as connection:
            await connection.run_sync(do_run_migrations)
    finally:
        await connectable.dispose()


def run_migrations_online() -> None:
    asyncio.run(run_async_migrations())


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
