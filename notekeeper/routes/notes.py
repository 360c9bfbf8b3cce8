"""
Notekeeper Backend - Notes Route Handlers
===========================================

What:  CRUD on the caller's notes.
How:   `get_current_user` verifies the bearer token; each handler then calls
       NoteService with the resolved user's id.

Routes:
    GET    /api/notes        → 200, array of notes (newest first)
    POST   /api/notes        → 201, created note
    PUT    /api/notes/{id}   → 200, updated note
    DELETE /api/notes/{id}   → 204, empty body

A malformed `{id}` fails FastAPI's UUID validation and is answered with
400 by the request-validation handler in main.py.
"""

import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from notekeeper.deps import get_current_user, get_note_service
from notekeeper.models.user import User
from notekeeper.schemas.common import ErrorResponse
from notekeeper.schemas.note import NoteResponse, NoteTextRequest
from notekeeper.services.note_service import NoteService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api",
    tags=["Notes"],
    responses={401: {"description": "Missing or invalid session token", "model": ErrorResponse}},
)


@router.get(
    "/notes",
    response_model=List[NoteResponse],
    summary="List the caller's notes, newest first",
)
async def list_notes(
    response: Response,
    user: User = Depends(get_current_user),
    note_service: NoteService = Depends(get_note_service),
) -> List[NoteResponse]:
    notes = await note_service.list_notes(user.id)
    # Note data is per-user and changes on every edit
    response.headers["Cache-Control"] = "private, no-store"
    return notes


@router.post(
    "/notes",
    response_model=NoteResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Note text is required", "model": ErrorResponse}},
    summary="Create a note",
)
async def create_note(
    body: NoteTextRequest,
    user: User = Depends(get_current_user),
    note_service: NoteService = Depends(get_note_service),
) -> NoteResponse:
    return await note_service.create_note(user.id, body.text)


@router.put(
    "/notes/{note_id}",
    response_model=NoteResponse,
    responses={
        400: {"description": "Note text is required or invalid note id", "model": ErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
    },
    summary="Replace the text of a note",
)
async def update_note(
    note_id: UUID,
    body: NoteTextRequest,
    user: User = Depends(get_current_user),
    note_service: NoteService = Depends(get_note_service),
) -> NoteResponse:
    return await note_service.update_note(user.id, note_id, body.text)


@router.delete(
    "/notes/{note_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={
        400: {"description": "Invalid note id", "model": ErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
    },
    summary="Delete a note",
)
async def delete_note(
    note_id: UUID,
    user: User = Depends(get_current_user),
    note_service: NoteService = Depends(get_note_service),
) -> Response:
    await note_service.delete_note(user.id, note_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
