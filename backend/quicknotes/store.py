"""
QuickNotes Backend — Note Store
=================================

What:  The persistence handle for notes: list, get, insert, update, delete.
How:   Wraps an AsyncEngine and a session factory. Each operation opens its
       own short-lived session, runs one write or read statement, and
       returns ORM rows (detached, attributes loaded).
Who:   Constructed once by the application lifespan (or by a test) and
       placed on `app.state.store`; routes receive it through `get_store`.

Every value reaches the database as a bound parameter; statements are
built with the SQLAlchemy expression language, never by string formatting.

Store errors (SQLAlchemyError, driver errors) propagate unchanged. The
service layer decides how they surface to HTTP callers.
"""

import logging
from typing import List, Optional

from fastapi import Request
from sqlalchemy import delete, desc, select, text, update
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from quicknotes.database import build_session_factory
from quicknotes.models.note import Note

logger = logging.getLogger(__name__)


class NoteStore:
    """
    Async CRUD access to the `notes` table.

    Operations:
        list()                       → all notes, newest first
        get(id)                      → Note or None
        insert(title, content)       → Note with id/created_at assigned
        update(id, title, content)   → updated Note or None
        delete(id)                   → True if a row was removed
        ping()                       → raises if the database is unreachable
    """

    def __init__(
        self,
        engine: AsyncEngine,
        session_factory: Optional[async_sessionmaker[AsyncSession]] = None,
    ):
        self.engine = engine
        self._session_factory = session_factory or build_session_factory(engine)

    async def list(self) -> List[Note]:
        """
        All notes ordered by created_at DESC.

        Rows with equal timestamps are ordered by id DESC so the newest
        insert still comes first.
        """
        async with self._session_factory() as session:
            result = await session.execute(
                select(Note).order_by(desc(Note.created_at), desc(Note.id))
            )
            return list(result.scalars().all())

    async def get(self, note_id: int) -> Optional[Note]:
        async with self._session_factory() as session:
            result = await session.execute(select(Note).where(Note.id == note_id))
            return result.scalar_one_or_none()

    async def insert(self, title: str, content: str) -> Note:
        """
        Insert a note and read back the persisted row.

        The read-back returns the canonical representation, including the
        store-assigned id and created_at.
        """
        async with self._session_factory() as session:
            note = Note(title=title, content=content)
            session.add(note)
            await session.commit()
            await session.refresh(note)
            logger.debug("Inserted note %s", note.id)
            return note

    async def update(self, note_id: int, title: str, content: str) -> Optional[Note]:
        """
        Replace title and content of an existing note.

        Returns None when no row has `note_id`; the table is left untouched
        in that case. created_at is never modified.
        """
        async with self._session_factory() as session:
            result = await session.execute(
                update(Note)
                .where(Note.id == note_id)
                .values(title=title, content=content)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                await session.rollback()
                return None
            await session.commit()

            result = await session.execute(select(Note).where(Note.id == note_id))
            return result.scalar_one_or_none()

    async def delete(self, note_id: int) -> bool:
        async with self._session_factory() as session:
            result = await session.execute(
                delete(Note)
                .where(Note.id == note_id)
                .execution_options(synchronize_session=False)
            )
            await session.commit()
            return result.rowcount > 0

    async def ping(self) -> None:
        """Round-trip a trivial query. Raises whatever the driver raises."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def close(self) -> None:
        """Dispose the engine, closing every pooled connection."""
        await self.engine.dispose()


def get_store(request: Request) -> NoteStore:
    """
    FastAPI dependency returning the store handle attached to the app.

    Example usage in a route:
        @router.get("/notes")
        async def list_notes(store: NoteStore = Depends(get_store)):
            ...
    """
    return request.app.state.store
