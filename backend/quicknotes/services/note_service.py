"""
QuickNotes Backend — Note Service (Business Logic)
====================================================

What:  Validation and error translation between the HTTP routes and the store.
How:   Each method takes the NoteStore handle explicitly, checks its input,
       performs one logical unit of work, and converts store results into
       response schemas.
Who:   Called by the route handlers in quicknotes.routes.notes.

Error Handling Strategy:
    - Title rule violated      → ValidationError (raised before any store call)
    - Store returns None/False → NotFoundError
    - Store raises             → DatabaseError with a fixed message; the
                                 original exception is logged with context
                                 and chained, never returned to the client

NoteService is stateless: the store arrives with every call.
"""

import logging
from typing import List

from quicknotes.exceptions import DatabaseError, NotFoundError, QuickNotesError
from quicknotes.schemas.note import NotePayload, NoteResponse
from quicknotes.store import NoteStore

logger = logging.getLogger(__name__)


class NoteService:
    """
    Business logic layer for note operations.

    Responsibilities:
        - list_notes():  Full collection, newest first
        - get_note():    Single note with not-found handling
        - create_note(): Validate → insert → return persisted row
        - update_note(): Validate → replace title/content → return row
        - delete_note(): Remove by id with not-found handling
    """

    async def list_notes(self, store: NoteStore) -> List[NoteResponse]:
        try:
            notes = await store.list()
        except Exception as e:
            raise self._database_error(e, "Failed to fetch notes", operation="list")
        return [NoteResponse.model_validate(note) for note in notes]

    async def get_note(self, store: NoteStore, note_id: int) -> NoteResponse:
        """
        Retrieve a single note by ID.

        Raises:
            NotFoundError: No note with this id (→ 404)
            DatabaseError: Query execution failed (→ 500)
        """
        try:
            note = await store.get(note_id)
        except Exception as e:
            raise self._database_error(e, "Failed to fetch note", operation="get", note_id=note_id)

        if note is None:
            raise NotFoundError(resource="note", resource_id=note_id)
        return NoteResponse.model_validate(note)

    async def create_note(self, store: NoteStore, payload: NotePayload) -> NoteResponse:
        """
        Create a note from a validated payload.

        Workflow:
            1. Enforce the title rule (ValidationError → 400, no store call)
            2. Insert with content already normalized to "" when absent
            3. Return the read-back row with store-assigned id/created_at
        """
        title = payload.require_title()

        try:
            note = await store.insert(title=title, content=payload.content)
        except Exception as e:
            raise self._database_error(e, "Failed to create note", operation="insert")

        logger.info("Note %s created", note.id)
        return NoteResponse.model_validate(note)

    async def update_note(
        self,
        store: NoteStore,
        note_id: int,
        payload: NotePayload,
    ) -> NoteResponse:
        """
        Replace title and content of an existing note.

        Raises:
            ValidationError: Title missing or blank (→ 400)
            NotFoundError:   No note with this id (→ 404)
            DatabaseError:   Store failure (→ 500)
        """
        title = payload.require_title()

        try:
            note = await store.update(note_id, title=title, content=payload.content)
        except Exception as e:
            raise self._database_error(e, "Failed to update note", operation="update", note_id=note_id)

        if note is None:
            raise NotFoundError(resource="note", resource_id=note_id)

        logger.info("Note %s updated", note_id)
        return NoteResponse.model_validate(note)

    async def delete_note(self, store: NoteStore, note_id: int) -> None:
        try:
            removed = await store.delete(note_id)
        except Exception as e:
            raise self._database_error(e, "Failed to delete note", operation="delete", note_id=note_id)

        if not removed:
            raise NotFoundError(resource="note", resource_id=note_id)
        logger.info("Note %s deleted", note_id)

    @staticmethod
    def _database_error(error: Exception, message: str, **context) -> QuickNotesError:
        """
        Wrap a store exception for the global handler.

        Application errors pass through untouched; anything else is logged
        with its context and replaced by a DatabaseError carrying `message`.
        """
        if isinstance(error, QuickNotesError):
            return error
        context["error_type"] = type(error).__name__
        logger.error("Store error (%s): %s", context.get("operation"), error, exc_info=True)
        wrapped = DatabaseError(message=message, context=context)
        wrapped.__cause__ = error
        return wrapped


note_service = NoteService()
