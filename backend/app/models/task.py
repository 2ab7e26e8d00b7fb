"""
Daybook Backend — Task SQLAlchemy Model
=========================================

What:  ORM model representing the `tasks` table.

Table Design:
    - status: 'pending' | 'completed'; no transition rules, either value can
      be written at any time. The allowed values are checked in
      app.validation, not by a database enum, so adding a state needs no
      migration.
    - due_date: optional; tasks without one sort first in the owner's list
"""

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Index, String, Text, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import USER_ID_MAX_LENGTH, Base

TASK_STATUSES = ("pending", "completed")
DEFAULT_TASK_STATUS = "pending"


class Task(Base):
    """A to-do item owned by one user."""

    __tablename__ = "tasks"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    user_id: Mapped[str] = mapped_column(
        String(USER_ID_MAX_LENGTH),
        nullable=False,
        comment="Identity of the owning user (token subject)",
    )

    task: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
        comment="Task description, trimmed",
    )

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=DEFAULT_TASK_STATUS,
        server_default=text("'pending'"),
        comment="pending or completed",
    )

    due_date: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        comment="Optional deadline (UTC)",
    )

    __table_args__ = (
        Index("idx_tasks_user_due_date", "user_id", "due_date"),
    )

    def __repr__(self) -> str:
        return f"<Task(id={self.id}, status='{self.status}', due_date='{self.due_date}')>"
