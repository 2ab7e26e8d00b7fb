"""
Daybook Backend — Note Schemas
================================

Wire format:
    request:  {"note": "call the plumber"}
    record:   {"id": "...", "userId": "...", "note": "...", "createdAt": "..."}
"""

import uuid
from datetime import datetime
from typing import Any

from pydantic import Field

from app.schemas.common import ResourceIn, ResourceOut


class NoteIn(ResourceIn):
    """Body of POST /note and PUT /note/{id}."""
    note: Any = Field(default=None, description="Note text (required on create)")


class NoteOut(ResourceOut):
    id: uuid.UUID
    user_id: str = Field(description="Owner identity")
    note: str
    created_at: datetime = Field(description="Creation time (UTC)")


class NoteWriteResponse(ResourceOut):
    """Returned by create (201) and update (200)."""
    message: str = Field(examples=["Note saved"])
    note: NoteOut
