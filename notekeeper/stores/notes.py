"""
Notekeeper Backend - Note Store
=================================

What:  Owner-scoped queries and mutations on Note records.
Who:   Used only by NoteService.

Query plans:
    find:                 SELECT ... WHERE owner_id = :owner ORDER BY created_at DESC
                          → idx_notes_owner_created_at
    find_one_and_update:  UPDATE notes SET text = :text, updated_at = :now
                          WHERE id = :id AND owner_id = :owner RETURNING *
    find_one_and_delete:  DELETE FROM notes WHERE id = :id AND owner_id = :owner
                          RETURNING id
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from notekeeper.exceptions import DatabaseError
from notekeeper.models.note import Note

logger = logging.getLogger(__name__)


class NoteStore:
    """
    Note store backed by the `notes` table.

    Every method takes the owner's id and puts it in the WHERE clause; there
    is no method that touches a note by id alone.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find(self, owner_id: uuid.UUID) -> List[Note]:
        """All notes owned by `owner_id`, newest first."""
        query = (
            select(Note)
            .where(Note.owner_id == owner_id)
            .order_by(Note.created_at.desc())
        )
        try:
            result = await self.session.execute(query)
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Database error listing notes: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve notes. Please try again.",
                context={"owner_id": str(owner_id), "error_type": type(e).__name__},
            )

    async def insert(self, owner_id: uuid.UUID, text: str) -> Note:
        """Persist a new note and return it with id and created_at populated."""
        note = Note(owner_id=owner_id, text=text)
        self.session.add(note)
        try:
            await self.session.flush()
        except SQLAlchemyError as e:
            logger.error("Database error creating note: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not save the note. Please try again.",
                context={"owner_id": str(owner_id), "error_type": type(e).__name__},
            )
        return note

    async def find_one_and_update(
        self,
        note_id: uuid.UUID,
        owner_id: uuid.UUID,
        text: str,
    ) -> Optional[Note]:
        """
        Replace the text of the note matching (id AND owner).

        Returns:
            The updated Note, or None when nothing matched.
        """
        stmt = (
            update(Note)
            .where(Note.id == note_id, Note.owner_id == owner_id)
            .values(text=text, updated_at=datetime.now(timezone.utc))
            .returning(Note)
            .execution_options(populate_existing=True)
        )
        try:
            result = await self.session.execute(stmt)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error updating note %s: %s", note_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not update the note. Please try again.",
                context={"note_id": str(note_id), "error_type": type(e).__name__},
            )

    async def find_one_and_delete(
        self,
        note_id: uuid.UUID,
        owner_id: uuid.UUID,
    ) -> Optional[uuid.UUID]:
        """
        Remove the note matching (id AND owner).

        Returns:
            The removed note's id, or None when nothing matched.
        """
        stmt = (
            delete(Note)
            .where(Note.id == note_id, Note.owner_id == owner_id)
            .returning(Note.id)
        )
        try:
            result = await self.session.execute(stmt)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error deleting note %s: %s", note_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not delete the note. Please try again.",
                context={"note_id": str(note_id), "error_type": type(e).__name__},
            )
