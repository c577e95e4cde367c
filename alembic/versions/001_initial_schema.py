"""Initial schema: users, tasks and the per-user productivity tables.

Revision ID: 001_initial_schema
Revises: None
Create Date: 2026-10-19
"""

from collections.abc import Sequence

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from alembic import op

revision: str = "001_initial_schema"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

_ID = sa.BigInteger().with_variant(sa.Integer(), "sqlite")
_JSON = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")


def _id() -> sa.Column:
    return sa.Column("id", _ID, primary_key=True, autoincrement=True)


def _owner() -> sa.Column:
    return sa.Column("user_id", _ID, sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=True)


def _ts(name: str) -> sa.Column:
    return sa.Column(name, sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True)


def upgrade() -> None:
    """Create all tables."""
    op.create_table(
        "users",
        _id(),
        sa.Column("username", sa.Text(), nullable=False, unique=True),
        sa.Column("password_hash", sa.Text(), nullable=False),
        sa.Column("phone", sa.Text(), nullable=True, unique=True),
        sa.Column("email", sa.Text(), nullable=True),
        sa.Column("full_name", sa.Text(), nullable=True),
        sa.Column("profile_photo", sa.Text(), nullable=True),
        sa.Column("is_verified", sa.Boolean(), server_default=sa.false(), nullable=True),
        _ts("created_at"),
    )

    op.create_table(
        "tasks",
        _id(),
        _owner(),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("status", sa.Text(), server_default="pending", nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("priority", sa.Text(), server_default="medium", nullable=True),
        sa.Column("due_date", sa.Date(), nullable=True),
        sa.Column("due_time", sa.Time(), nullable=True),
        sa.Column("category", sa.Text(), server_default="own", nullable=True),
        sa.Column("type", sa.Text(), server_default="work", nullable=True),
        sa.Column("project_id", sa.Integer(), nullable=True),
        sa.Column("important", sa.Boolean(), server_default=sa.false(), nullable=True),
        sa.Column("assigned_to", sa.Text(), nullable=True),
        _ts("created_at"),
        _ts("updated_at"),
    )
    op.create_index("ix_tasks_user_id", "tasks", ["user_id"])

    op.create_table(
        "learning_progress",
        _id(),
        _owner(),
        sa.Column("subject", sa.Text(), nullable=False),
        sa.Column("topic", sa.Text(), nullable=True),
        sa.Column("skill_level", sa.Text(), server_default="beginner", nullable=True),
        sa.Column("hours_spent", sa.Integer(), server_default="0", nullable=True),
        sa.Column("last_practiced", sa.DateTime(timezone=True), nullable=True),
        sa.Column("progress_percentage", sa.Integer(), server_default="0", nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        _ts("created_at"),
        _ts("updated_at"),
    )
    op.create_index("ix_learning_progress_user_id", "learning_progress", ["user_id"])

    op.create_table(
        "notes",
        _id(),
        _owner(),
        sa.Column("type", sa.Text(), nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("content", sa.Text(), nullable=True),
        sa.Column("tags", _JSON, nullable=True),
        sa.Column("attachments", _JSON, nullable=True),
        _ts("created_at"),
        _ts("updated_at"),
        sa.CheckConstraint("type IN ('learning', 'working')", name="ck_notes_type"),
    )
    op.create_index("ix_notes_user_id", "notes", ["user_id"])

    op.create_table(
        "files",
        _id(),
        sa.Column("note_id", _ID, sa.ForeignKey("notes.id", ondelete="CASCADE"), nullable=False),
        _owner(),
        sa.Column("filename", sa.Text(), nullable=False),
        sa.Column("original_name", sa.Text(), nullable=False),
        sa.Column("data", sa.Text(), nullable=False),
        sa.Column("file_size", sa.Integer(), nullable=True),
        sa.Column("mime_type", sa.Text(), nullable=True),
        _ts("created_at"),
    )
    op.create_index("ix_files_note_id", "files", ["note_id"])
    op.create_index("ix_files_user_id", "files", ["user_id"])

    statuses = "('pending', 'in_progress', 'completed', 'none')"
    op.create_table(
        "prs",
        _id(),
        _owner(),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("frontend_status", sa.String(16), server_default="none", nullable=True),
        sa.Column("backend_status", sa.String(16), server_default="none", nullable=True),
        sa.Column("frontend_link", sa.Text(), nullable=True),
        sa.Column("backend_link", sa.Text(), nullable=True),
        _ts("created_at"),
        _ts("updated_at"),
        sa.CheckConstraint(f"frontend_status IN {statuses}", name="ck_prs_frontend_status"),
        sa.CheckConstraint(f"backend_status IN {statuses}", name="ck_prs_backend_status"),
    )
    op.create_index("ix_prs_user_id", "prs", ["user_id"])

    op.create_table(
        "daily_goals",
        _id(),
        _owner(),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("category", sa.Text(), server_default="personal", nullable=False),
        sa.Column("priority", sa.Text(), server_default="medium", nullable=False),
        sa.Column("status", sa.Text(), server_default="pending", nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        _ts("created_at"),
        _ts("updated_at"),
    )
    op.create_index("ix_daily_goals_user_id", "daily_goals", ["user_id"])

    op.create_table(
        "study_sessions",
        _id(),
        _owner(),
        sa.Column("subject", sa.Text(), nullable=False),
        sa.Column("start_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_time", sa.DateTime(timezone=True), nullable=True),
        sa.Column("duration_minutes", sa.Integer(), nullable=True),
        sa.Column("focus_rating", sa.Integer(), server_default="3", nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        _ts("created_at"),
        _ts("updated_at"),
        sa.CheckConstraint("focus_rating >= 1 AND focus_rating <= 5", name="ck_study_sessions_focus_rating"),
    )
    op.create_index("ix_study_sessions_user_id", "study_sessions", ["user_id"])

    op.create_table(
        "time_logs",
        _id(),
        _owner(),
        sa.Column("day", sa.Date(), nullable=False),
        sa.Column("category", sa.String(50), nullable=False),
        sa.Column("minutes", sa.Integer(), nullable=False),
        _ts("created_at"),
    )
    op.create_index("ix_time_logs_user_id", "time_logs", ["user_id"])

    op.create_table(
        "time_sessions",
        _id(),
        _owner(),
        sa.Column("type", sa.String(50), server_default="work", nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("start_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("duration", sa.Integer(), nullable=False),
        _ts("created_at"),
    )
    op.create_index("ix_time_sessions_user_id", "time_sessions", ["user_id"])


def downgrade() -> None:
    """Drop all tables."""
    for table in (
        "time_sessions",
        "time_logs",
        "study_sessions",
        "daily_goals",
        "prs",
        "files",
        "notes",
        "learning_progress",
        "tasks",
        "users",
    ):
        op.drop_table(table)
