"""
Notekeeper Backend - Note SQLAlchemy Model
============================================

What:  ORM model representing the `notes` table.
How:   Inherits from the shared DeclarativeBase; Alembic reads this for migrations.
Who:   Used by NoteStore for filtered queries and atomic mutations.

Table Design:
    - UUID primary key: non-sequential, so ids cannot be enumerated
    - text: the note body, non-empty (checked in NoteService)
    - owner_id: the owning user's id; every read and write filters on it
    - created_at: UTC creation time, drives newest-first ordering
    - updated_at: UTC time of the last text replacement, NULL until edited

    Composite index (owner_id, created_at):
        Serves the only listing query, "this owner's notes, newest first",
        read backwards for the DESC ordering.
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import ForeignKey, Index, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from notekeeper.database import Base, UTCDateTime


class Note(Base):
    """
    A short text note belonging to exactly one user.

    Lifecycle:
        1. Created by NoteService.create_note for the authenticated caller
        2. Text replaced only by its owner (NoteService.update_note)
        3. Deleted only by its owner (NoteService.delete_note)
    """

    __tablename__ = "notes"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(),
        primary_key=True,
        default=uuid.uuid4,
        comment="Unique note identifier",
    )

    text: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Note body",
    )

    owner_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        comment="User that owns this note",
    )

    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=func.now(),
        comment="When this note was created (UTC)",
    )

    updated_at: Mapped[Optional[datetime]] = mapped_column(
        UTCDateTime(),
        nullable=True,
        default=None,
        comment="When the text was last replaced (UTC)",
    )

    __table_args__ = (
        Index("idx_notes_owner_created_at", "owner_id", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, owner_id={self.owner_id}, created_at='{self.created_at}')>"
