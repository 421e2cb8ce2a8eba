"""
QuickNotes Backend — Note Service Unit Tests
==============================================

What:  Tests for NoteService business logic against a mocked store.

What we test:
    ✅ Title rule rejects missing/blank titles before any store call
    ✅ Absent/null content is normalized to ""
    ✅ None/False from the store becomes NotFoundError
    ✅ Store exceptions become DatabaseError with a safe message
"""

import pytest
from sqlalchemy.exc import OperationalError

from quicknotes.exceptions import DatabaseError, NotFoundError, ValidationError
from quicknotes.schemas.note import NotePayload
from quicknotes.services.note_service import NoteService


def store_failure() -> OperationalError:
    return OperationalError("SELECT * FROM notes", {}, Exception("connection reset"))


class TestNotePayload:

    def test_missing_content_defaults_to_empty(self):
        assert NotePayload(title="t").content == ""

    def test_null_content_defaults_to_empty(self):
        assert NotePayload(title="t", content=None).content == ""

    @pytest.mark.parametrize("title", [None, "", "   "])
    def test_require_title_rejects_blank(self, title):
        with pytest.raises(ValidationError) as exc_info:
            NotePayload(title=title).require_title()
        assert exc_info.value.field == "title"


class TestNoteServiceCreate:

    def setup_method(self):
        self.service = NoteService()

    @pytest.mark.asyncio
    async def test_create_inserts_and_returns_row(self, mock_store, sample_note):
        mock_store.insert.return_value = sample_note

        result = await self.service.create_note(
            mock_store, NotePayload(title="Groceries", content="eggs, milk")
        )

        mock_store.insert.assert_awaited_once_with(title="Groceries", content="eggs, milk")
        assert result.id == 1
        assert result.title == "Groceries"

    @pytest.mark.asyncio
    async def test_create_without_content_stores_empty_string(self, mock_store, sample_note):
        mock_store.insert.return_value = sample_note

        await self.service.create_note(mock_store, NotePayload(title="Groceries"))

        mock_store.insert.assert_awaited_once_with(title="Groceries", content="")

    @pytest.mark.asyncio
    async def test_blank_title_never_reaches_store(self, mock_store):
        with pytest.raises(ValidationError):
            await self.service.create_note(mock_store, NotePayload(title=" "))

        mock_store.insert.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_store_failure_becomes_database_error(self, mock_store):
        mock_store.insert.side_effect = store_failure()

        with pytest.raises(DatabaseError) as exc_info:
            await self.service.create_note(mock_store, NotePayload(title="x"))

        assert exc_info.value.message == "Failed to create note"
        assert "connection reset" not in exc_info.value.message
        assert exc_info.value.context["error_type"] == "OperationalError"


class TestNoteServiceRead:

    def setup_method(self):
        self.service = NoteService()

    @pytest.mark.asyncio
    async def test_list_returns_all_rows(self, mock_store, sample_note):
        mock_store.list.return_value = [sample_note]

        result = await self.service.list_notes(mock_store)

        assert [n.id for n in result] == [1]

    @pytest.mark.asyncio
    async def test_list_empty(self, mock_store):
        mock_store.list.return_value = []
        assert await self.service.list_notes(mock_store) == []

    @pytest.mark.asyncio
    async def test_list_failure(self, mock_store):
        mock_store.list.side_effect = store_failure()

        with pytest.raises(DatabaseError, match="Failed to fetch notes"):
            await self.service.list_notes(mock_store)

    @pytest.mark.asyncio
    async def test_get_found(self, mock_store, sample_note):
        mock_store.get.return_value = sample_note

        result = await self.service.get_note(mock_store, 1)

        assert result.content == "eggs, milk"

    @pytest.mark.asyncio
    async def test_get_not_found(self, mock_store):
        mock_store.get.return_value = None

        with pytest.raises(NotFoundError):
            await self.service.get_note(mock_store, 5)

    @pytest.mark.asyncio
    async def test_get_failure(self, mock_store):
        mock_store.get.side_effect = store_failure()

        with pytest.raises(DatabaseError, match="Failed to fetch note") as exc_info:
            await self.service.get_note(mock_store, 1)

        assert isinstance(exc_info.value.__cause__, OperationalError)


class TestNoteServiceUpdateDelete:

    def setup_method(self):
        self.service = NoteService()

    @pytest.mark.asyncio
    async def test_update_passes_full_replacement(self, mock_store, sample_note):
        mock_store.update.return_value = sample_note

        await self.service.update_note(mock_store, 1, NotePayload(title="New", content=None))

        mock_store.update.assert_awaited_once_with(1, title="New", content="")

    @pytest.mark.asyncio
    async def test_update_missing_note(self, mock_store):
        mock_store.update.return_value = None

        with pytest.raises(NotFoundError):
            await self.service.update_note(mock_store, 9, NotePayload(title="New"))

    @pytest.mark.asyncio
    async def test_update_blank_title_checked_first(self, mock_store):
        with pytest.raises(ValidationError):
            await self.service.update_note(mock_store, 1, NotePayload())

        mock_store.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_existing(self, mock_store):
        mock_store.delete.return_value = True

        assert await self.service.delete_note(mock_store, 1) is None

    @pytest.mark.asyncio
    async def test_delete_missing(self, mock_store):
        mock_store.delete.return_value = False

        with pytest.raises(NotFoundError):
            await self.service.delete_note(mock_store, 1)

    @pytest.mark.asyncio
    async def test_delete_failure(self, mock_store):
        mock_store.delete.side_effect = store_failure()

        with pytest.raises(DatabaseError, match="Failed to delete note"):
            await self.service.delete_note(mock_store, 1)
