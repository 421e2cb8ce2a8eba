"""
QuickNotes Backend — Note SQLAlchemy Model
============================================

What:  ORM model representing the `notes` table.
Who:   Used by NoteStore for CRUD operations and by Alembic for schema management.

Table Design:
    - id: integer surrogate key, assigned by the database on insert
    - title: required text, no length limit
    - content: text, never NULL (empty string when the client omits it)
    - created_at: UTC with timezone, set once on insert, sole sort key

    Index on created_at DESC backs the listing query
    (SELECT ... ORDER BY created_at DESC).
"""

from datetime import datetime, timezone

from sqlalchemy import Index, Integer, Text, DateTime, text
from sqlalchemy.orm import Mapped, mapped_column

from quicknotes.database import Base


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Note(Base):
    """
    A single note.

    Lifecycle:
        1. Inserted with title/content; id and created_at assigned here
        2. Updated only by replacing title AND content together
        3. Hard-deleted by id
    """

    __tablename__ = "notes"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    title: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
        server_default=text("''"),
    )

    # Python-side default keeps microsecond resolution on every backend;
    # the server default covers rows inserted outside the ORM.
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    __table_args__ = (
        Index("idx_notes_created_at", created_at.desc()),
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title='{self.title[:20]}', created_at='{self.created_at}')>"
