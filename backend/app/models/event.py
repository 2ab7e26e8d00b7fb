"""
Daybook Backend — Event SQLAlchemy Model
==========================================

What:  ORM model representing the `events` table.
Why:   date_time is the only required field; it is also the sort key of the
       owner's event list, hence the composite index.
"""

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from app.database import USER_ID_MAX_LENGTH, Base


class Event(Base):
    """A calendar entry owned by one user."""

    __tablename__ = "events"

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

    event: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
        comment="Event description, trimmed",
    )

    date_time: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        comment="When the event happens (UTC)",
    )

    __table_args__ = (
        Index("idx_events_user_date_time", "user_id", "date_time"),
    )

    def __repr__(self) -> str:
        return f"<Event(id={self.id}, date_time='{self.date_time}')>"
