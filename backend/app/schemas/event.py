"""
Daybook Backend — Event Schemas
=================================

Wire format:
    request:  {"event": "dentist", "dateTime": "2024-01-02T09:30:00Z"}
    record:   {"id": "...", "userId": "...", "event": "dentist",
               "dateTime": "2024-01-02T09:30:00Z"}
"""

import uuid
from datetime import datetime
from typing import Any, Optional

from pydantic import Field

from app.schemas.common import ResourceIn, ResourceOut


class EventIn(ResourceIn):
    """Body of POST /event and PUT /event/{id}."""
    event: Any = Field(default=None, description="Event description")
    date_time: Any = Field(default=None, description="When it happens (required on create)")


class EventOut(ResourceOut):
    id: uuid.UUID
    user_id: str
    event: Optional[str] = None
    date_time: datetime


class EventWriteResponse(ResourceOut):
    message: str = Field(examples=["Event created"])
    event: EventOut
