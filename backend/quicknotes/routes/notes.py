"""
QuickNotes Backend — Notes Route Handlers
===========================================

What:  The five note resource routes.
How:   Extract path/body, delegate to NoteService with the injected store,
       return JSON. Errors are raised as application exceptions and
       formatted by the global handlers in main.py.

Route Inventory (relative to API_PREFIX, default /api):
    GET    /notes        list all notes, newest first
    GET    /notes/{id}   one note
    POST   /notes        create (201)
    PUT    /notes/{id}   replace title + content
    DELETE /notes/{id}   delete
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, status

from quicknotes.schemas.note import (
    ErrorResponse,
    MessageResponse,
    NotePayload,
    NoteResponse,
)
from quicknotes.services.note_service import note_service
from quicknotes.store import NoteStore, get_store

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Notes"])


@router.get(
    "/notes",
    response_model=List[NoteResponse],
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List all notes",
    description="Returns every note, ordered by creation time (newest first). No pagination.",
)
async def list_notes(store: NoteStore = Depends(get_store)) -> List[NoteResponse]:
    return await note_service.list_notes(store)


@router.get(
    "/notes/{note_id}",
    response_model=NoteResponse,
    responses={
        404: {"description": "Note not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Get a single note by ID",
)
async def get_note(note_id: int, store: NoteStore = Depends(get_store)) -> NoteResponse:
    return await note_service.get_note(store, note_id)


@router.post(
    "/notes",
    status_code=status.HTTP_201_CREATED,
    response_model=NoteResponse,
    responses={
        400: {"description": "Title missing or empty", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create a note",
)
async def create_note(
    payload: NotePayload,
    store: NoteStore = Depends(get_store),
) -> NoteResponse:
    """
    Create a note.

    Body: {"title": "...", "content": "..."}; content is optional.
    Returns the persisted note including its id and created_at.
    """
    return await note_service.create_note(store, payload)


@router.put(
    "/notes/{note_id}",
    response_model=NoteResponse,
    responses={
        400: {"description": "Title missing or empty", "model": ErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Replace a note's title and content",
)
async def update_note(
    note_id: int,
    payload: NotePayload,
    store: NoteStore = Depends(get_store),
) -> NoteResponse:
    """
    Full replacement of title and content; there is no partial update.
    An omitted content clears the note body.
    """
    return await note_service.update_note(store, note_id, payload)


@router.delete(
    "/notes/{note_id}",
    response_model=MessageResponse,
    responses={
        404: {"description": "Note not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Delete a note",
)
async def delete_note(note_id: int, store: NoteStore = Depends(get_store)) -> MessageResponse:
    await note_service.delete_note(store, note_id)
    return MessageResponse(message="Note deleted successfully")
