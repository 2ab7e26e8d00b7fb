"""Create notes, tasks and events tables

Revision ID: 001
Revises: None
Create Date: 2024-01-15 00:00:00.000000+00:00

What:  The three user-owned resource tables. user_id is an opaque identity
       from the token issuer; there is no users table here to reference.
Rollback: downgrade() drops all three tables (destructive).
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "notes",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.String(255), nullable=False,
                  comment="Identity of the owning user (token subject)"),
        sa.Column("note", sa.Text(), nullable=False, comment="Note body, trimmed"),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
            comment="When this note was created (UTC)",
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_notes_user_created_at", "notes", ["user_id", "created_at"])

    op.create_table(
        "tasks",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.String(255), nullable=False,
                  comment="Identity of the owning user (token subject)"),
        sa.Column("task", sa.Text(), nullable=True, comment="Task description, trimmed"),
        sa.Column(
            "status",
            sa.String(20),
            server_default=sa.text("'pending'"),
            nullable=False,
            comment="pending or completed",
        ),
        sa.Column("due_date", sa.DateTime(timezone=True), nullable=True,
                  comment="Optional deadline (UTC)"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_tasks_user_due_date", "tasks", ["user_id", "due_date"])

    op.create_table(
        "events",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.String(255), nullable=False,
                  comment="Identity of the owning user (token subject)"),
        sa.Column("event", sa.Text(), nullable=True, comment="Event description, trimmed"),
        sa.Column("date_time", sa.DateTime(timezone=True), nullable=False,
                  comment="When the event happens (UTC)"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_events_user_date_time", "events", ["user_id", "date_time"])


def downgrade() -> None:
    op.drop_index("idx_events_user_date_time", table_name="events")
    op.drop_table("events")
    op.drop_index("idx_tasks_user_due_date", table_name="tasks")
    op.drop_table("tasks")
    op.drop_index("idx_notes_user_created_at", table_name="notes")
    op.drop_table("notes")
