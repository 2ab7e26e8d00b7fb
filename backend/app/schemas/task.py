"""
Daybook Backend — Task Schemas
================================

Wire format:
    request:  {"task": "buy milk", "status": "pending", "dueDate": "2024-01-05"}
    record:   {"id": "...", "userId": "...", "task": "buy milk",
               "status": "pending", "dueDate": null}
"""

import uuid
from datetime import datetime
from typing import Any, Optional

from pydantic import Field

from app.schemas.common import ResourceIn, ResourceOut


class TaskIn(ResourceIn):
    """Body of POST /task and PUT /task/{id}. Every field is optional."""
    task: Any = Field(default=None, description="Task description")
    status: Any = Field(default=None, description="pending (default) or completed")
    due_date: Any = Field(default=None, description="Optional deadline, ISO 8601")


class TaskOut(ResourceOut):
    id: uuid.UUID
    user_id: str
    task: Optional[str] = None
    status: str
    due_date: Optional[datetime] = None


class TaskWriteResponse(ResourceOut):
    message: str = Field(examples=["Task created"])
    task: TaskOut
