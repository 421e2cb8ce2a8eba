"""
QuickNotes — API Client & Note Board State
============================================

What:  The consumer side of the notes API.
How:   `NotesClient` wraps an httpx.AsyncClient with one method per route.
       `NoteBoard` holds the local mirror of the collection plus transient
       UI state, and reconciles the mirror from server responses.
Who:   Front-ends (terminal, notebook, GUI shell) drive a NoteBoard; tests
       point a NotesClient at the ASGI app through httpx.ASGITransport.

Reconciliation rules (server payload is ground truth, no refetch):
    create → prepend the returned note
    update → replace the note with the same id
    delete → drop the note with that id

Failures are logged and leave the board's state exactly as it was.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

import httpx
from pydantic import ValidationError

from quicknotes.schemas.note import NoteResponse

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


class NotesClientError(Exception):
    """
    Raised for any non-2xx response, transport failure or unreadable
    response body.

    Attributes:
        status_code: HTTP status, or None when no response was received
        message:     Server-provided message when available
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class NotesClient:
    """
    Async client for the QuickNotes API.

    Usage:
        async with NotesClient("http://localhost:5000/api") as client:
            note = await client.create_note("Groceries", "eggs")

    Args:
        base_url:  API root including the prefix (e.g. http://host:5000/api)
        transport: Optional httpx transport (ASGITransport in tests)
        timeout:   Per-request timeout in seconds
    """

    def __init__(
        self,
        base_url: str,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self._http = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            transport=transport,
            timeout=timeout,
        )

    async def __aenter__(self) -> "NotesClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def health(self) -> Dict[str, Any]:
        return await self._request("GET", "/health")

    async def list_notes(self) -> List[NoteResponse]:
        data = await self._request("GET", "/notes")
        if not isinstance(data, list):
            raise NotesClientError("GET /notes: expected a JSON array")
        return [_parse_note(item) for item in data]

    async def get_note(self, note_id: int) -> NoteResponse:
        return _parse_note(await self._request("GET", f"/notes/{note_id}"))

    async def create_note(self, title: str, content: str = "") -> NoteResponse:
        data = await self._request("POST", "/notes", json={"title": title, "content": content})
        return _parse_note(data)

    async def update_note(self, note_id: int, title: str, content: str = "") -> NoteResponse:
        data = await self._request(
            "PUT", f"/notes/{note_id}", json={"title": title, "content": content}
        )
        return _parse_note(data)

    async def delete_note(self, note_id: int) -> str:
        data = await self._request("DELETE", f"/notes/{note_id}")
        return data.get("message", "") if isinstance(data, dict) else ""

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        try:
            response = await self._http.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            raise NotesClientError(f"{method} {path} failed: {e}") from e

        if response.is_error:
            message = response.reason_phrase
            try:
                body = response.json()
            except ValueError:
                body = None
            if isinstance(body, dict):
                message = body.get("message", message)
            raise NotesClientError(message, status_code=response.status_code)
        try:
            return response.json()
        except ValueError as e:
            raise NotesClientError(
                f"{method} {path}: response is not JSON", status_code=response.status_code
            ) from e


def _parse_note(data: Any) -> NoteResponse:
    try:
        return NoteResponse.model_validate(data)
    except ValidationError as e:
        raise NotesClientError(f"Unexpected note payload: {e.error_count()} error(s)") from e


@dataclass
class NoteForm:
    """Edit buffer behind the create/edit modal."""
    title: str = ""
    content: str = ""


@dataclass
class NoteBoard:
    """
    Local mirror of the note collection plus transient UI state.

    State:
        notes:      Mirror of the server collection, newest first
        loading:    True until the initial fetch settles
        editing:    Note being edited, or None when creating
        form:       Title/content buffer
        modal_open: Whether the editor is showing

    Every mutating action awaits the server before touching `notes`; on
    failure it logs and returns without changing anything.
    """

    client: NotesClient
    notes: List[NoteResponse] = field(default_factory=list)
    loading: bool = True
    editing: Optional[NoteResponse] = None
    form: NoteForm = field(default_factory=NoteForm)
    modal_open: bool = False

    async def mount(self) -> None:
        """Fetch the full collection once."""
        try:
            self.notes = await self.client.list_notes()
        except NotesClientError as e:
            logger.error("Error fetching notes: %s", e)
        finally:
            self.loading = False

    def open_editor(self, note: Optional[NoteResponse] = None) -> None:
        """Open the modal for `note`, or for a new note when None."""
        self.editing = note
        self.form = NoteForm(title=note.title, content=note.content) if note else NoteForm()
        self.modal_open = True

    def close_editor(self) -> None:
        self.modal_open = False
        self.editing = None
        self.form = NoteForm()

    async def submit(self) -> Optional[NoteResponse]:
        """
        Create or update from the form buffer.

        A blank title is ignored locally (no request). Returns the server's
        note on success, None otherwise.
        """
        if not self.form.title.strip():
            return None
        if self.editing is not None:
            return await self._update(self.editing.id)
        return await self._create()

    async def delete(self, note_id: int, confirm: Callable[[str], bool]) -> bool:
        """
        Delete after an interactive confirmation.

        Args:
            confirm: Called with the prompt; a falsy answer cancels

        Returns: True when the note was deleted and dropped locally.
        """
        if not confirm("Are you sure you want to delete this note?"):
            return False
        try:
            await self.client.delete_note(note_id)
        except NotesClientError as e:
            logger.error("Error deleting note: %s", e)
            return False
        self.notes = [note for note in self.notes if note.id != note_id]
        return True

    async def _create(self) -> Optional[NoteResponse]:
        try:
            created = await self.client.create_note(self.form.title, self.form.content)
        except NotesClientError as e:
            logger.error("Error creating note: %s", e)
            return None
        self.notes = [created, *self.notes]
        self.close_editor()
        return created

    async def _update(self, note_id: int) -> Optional[NoteResponse]:
        try:
            updated = await self.client.update_note(note_id, self.form.title, self.form.content)
        except NotesClientError as e:
            logger.error("Error updating note: %s", e)
            return None
        self.notes = [updated if note.id == note_id else note for note in self.notes]
        self.close_editor()
        return updated
