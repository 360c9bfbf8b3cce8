"""
Notekeeper Backend - Note Request/Response Schemas
====================================================

What:  Pydantic models defining the notes API contract.
How:   FastAPI validates request bodies against these models, serializes the
       responses, and generates the OpenAPI documentation from them.

Request bodies accept a missing `text` so that the service layer, not
FastAPI's 422 machinery, decides what counts as empty and answers 400.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class NoteTextRequest(BaseModel):
    """
    What:  Body of POST /api/notes and PUT /api/notes/{id}.
    Who:   Sent by the client's note editor.
    """
    text: Optional[str] = Field(default=None, description="Note body (must not be blank)")


class NoteResponse(BaseModel):
    """
    What:  Full representation of a note.
    Who:   Returned by list, create and update.
    """
    id: uuid.UUID = Field(description="Unique note identifier (UUID)")
    text: str = Field(description="Note body")
    owner_id: uuid.UUID = Field(description="Identifier of the owning user")
    created_at: datetime = Field(description="When the note was created (UTC ISO 8601)")
    updated_at: Optional[datetime] = Field(
        default=None,
        description="When the text was last replaced (null if never edited)",
    )

    model_config = {"from_attributes": True}
