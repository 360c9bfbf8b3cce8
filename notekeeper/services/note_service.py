"""
Notekeeper Backend - Note Service
===================================

What:  Create/list/update/delete of notes on behalf of an authenticated user.
How:   Validates input, calls NoteStore with the caller's id, and converts the
       ORM rows into NoteResponse models.
Who:   Called by the notes route handlers after `get_current_user` resolved
       the caller.

Ownership:
    Every operation takes the owner's id and passes it to the store, which
    puts it in the WHERE clause. A note owned by another user behaves
    exactly like a missing note: NotFoundError.
"""

import logging
import uuid
from typing import List, Optional

from notekeeper.exceptions import NotFoundError, ValidationError
from notekeeper.schemas.note import NoteResponse
from notekeeper.stores.notes import NoteStore

logger = logging.getLogger(__name__)


class NoteService:
    """
    Business logic layer for note operations.

    Responsibilities:
        - list_notes():  The owner's notes, newest first
        - create_note(): Non-blank text → new note owned by the caller
        - update_note(): Text replacement on an owned note
        - delete_note(): Removal of an owned note (not idempotent)
    """

    def __init__(self, notes: NoteStore):
        self.notes = notes

    async def list_notes(self, owner_id: uuid.UUID) -> List[NoteResponse]:
        """
        Return all notes owned by `owner_id`, newest-created first.

        An owner without notes gets an empty list, not an error.
        """
        notes = await self.notes.find(owner_id)
        return [NoteResponse.model_validate(note) for note in notes]

    async def create_note(self, owner_id: uuid.UUID, text: Optional[str]) -> NoteResponse:
        """
        Create a note owned by `owner_id`.

        Raises:
            ValidationError: `text` is missing, empty or whitespace only
        """
        self._require_text(text)
        note = await self.notes.insert(owner_id=owner_id, text=text)
        logger.info("Note %s created for user %s", note.id, owner_id)
        return NoteResponse.model_validate(note)

    async def update_note(
        self,
        owner_id: uuid.UUID,
        note_id: uuid.UUID,
        text: Optional[str],
    ) -> NoteResponse:
        """
        Replace the text of an owned note and return the updated note.

        Raises:
            ValidationError: `text` is missing, empty or whitespace only
            NotFoundError:   No note `note_id` owned by `owner_id`
        """
        self._require_text(text)
        note = await self.notes.find_one_and_update(note_id=note_id, owner_id=owner_id, text=text)
        if note is None:
            raise NotFoundError(resource="note", resource_id=str(note_id))
        logger.info("Note %s updated by user %s", note_id, owner_id)
        return NoteResponse.model_validate(note)

    async def delete_note(self, owner_id: uuid.UUID, note_id: uuid.UUID) -> None:
        """
        Delete an owned note.

        A second delete of the same id raises NotFoundError again.

        Raises:
            NotFoundError: No note `note_id` owned by `owner_id`
        """
        deleted_id = await self.notes.find_one_and_delete(note_id=note_id, owner_id=owner_id)
        if deleted_id is None:
            raise NotFoundError(resource="note", resource_id=str(note_id))
        logger.info("Note %s deleted by user %s", note_id, owner_id)

    @staticmethod
    def _require_text(text: Optional[str]) -> None:
        if text is None or not text.strip():
            raise ValidationError(message="Note text is required", field="text")
