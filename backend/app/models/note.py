"""
Daybook Backend — Note SQLAlchemy Model
=========================================

What:  ORM model representing the `notes` table.
How:   Inherits from the shared DeclarativeBase; Alembic reads it for migrations.
Who:   Used by NoteService for CRUD operations.

Table Design:
    - UUID primary key assigned in Python at flush time
    - user_id: opaque owner identity from the verified bearer token; the
      users table lives in another service, so there is no foreign key
    - note: the note body, stored trimmed
    - created_at: UTC, set once at insert and never updated

    Index on (user_id, created_at):
        Serves the only list query, "this user's notes in insertion order".
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, Index, String, Text, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from app.database import USER_ID_MAX_LENGTH, Base


class Note(Base):
    """A free-text note owned by one user."""

    __tablename__ = "notes"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid.uuid4,
    )

    # Owner is written once by NoteService.create and never touched again.
    user_id: Mapped[str] = mapped_column(
        String(USER_ID_MAX_LENGTH),
        nullable=False,
        comment="Identity of the owning user (token subject)",
    )

    note: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Note body, trimmed",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
        comment="When this note was created (UTC)",
    )

    __table_args__ = (
        Index("idx_notes_user_created_at", "user_id", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, user_id='{self.user_id}')>"
