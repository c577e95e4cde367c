"""ORM models for the TaskFlow schema.

Every user-owned table carries ``user_id`` with ``ON DELETE CASCADE``; rows are
only ever read or written filtered by the acting user's id.

Defaults are set on the Python side as well as in DDL so freshly inserted rows
are fully loaded without a refresh round-trip.
"""

from __future__ import annotations

import datetime as dt
from datetime import date, datetime, time, timezone
from typing import Any

from sqlalchemy import (
    JSON,
    BigInteger,
    Boolean,
    CheckConstraint,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    Time,
    false,
    func,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from taskflow.db.base import Base

# JSONB on Postgres, plain JSON elsewhere.
JSONType = JSON().with_variant(JSONB(), "postgresql")

# SQLite only autoincrements INTEGER PRIMARY KEY columns.
IdType = BigInteger().with_variant(Integer(), "sqlite")


def utcnow() -> datetime:
    """Timezone-aware current time used for row timestamps."""
    return datetime.now(timezone.utc)


def _owner_fk() -> Any:  # noqa: ANN401
    return mapped_column(IdType, ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=True)


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------


class User(Base):
    """Maps to the 'users' table."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    phone: Mapped[str | None] = mapped_column(Text, unique=True, nullable=True)
    email: Mapped[str | None] = mapped_column(Text, nullable=True)
    full_name: Mapped[str | None] = mapped_column(Text, nullable=True)
    profile_photo: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_verified: Mapped[bool] = mapped_column(Boolean, default=False, server_default=false())
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now()
    )


# ---------------------------------------------------------------------------
# Tasks
# ---------------------------------------------------------------------------


class Task(Base):
    """A to-do item. ``user_id`` is NULL only for legacy unowned rows."""

    __tablename__ = "tasks"

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
    user_id: Mapped[int | None] = _owner_fk()
    title: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(Text, nullable=False, default="pending", server_default="pending")
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    priority: Mapped[str | None] = mapped_column(Text, default="medium", server_default="medium")
    due_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    due_time: Mapped[time | None] = mapped_column(Time, nullable=True)
    category: Mapped[str | None] = mapped_column(Text, default="own", server_default="own")
    type: Mapped[str | None] = mapped_column(Text, default="work", server_default="work")
    project_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    important: Mapped[bool] = mapped_column(Boolean, default=False, server_default=false())
    assigned_to: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now()
    )


# ---------------------------------------------------------------------------
# Learning
# ---------------------------------------------------------------------------


class LearningProgress(Base):
    """Per-subject learning tracker."""

    __tablename__ = "learning_progress"

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
    user_id: Mapped[int | None] = _owner_fk()
    subject: Mapped[str] = mapped_column(Text, nullable=False)
    topic: Mapped[str | None] = mapped_column(Text, nullable=True)
    skill_level: Mapped[str | None] = mapped_column(Text, default="beginner", server_default="beginner")
    hours_spent: Mapped[int | None] = mapped_column(Integer, default=0, server_default="0")
    last_practiced: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    progress_percentage: Mapped[int | None] = mapped_column(Integer, default=0, server_default="0")
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now()
    )


# ---------------------------------------------------------------------------
# Notes & files
# ---------------------------------------------------------------------------


class Note(Base):
    """Learning or working note with tags and inline attachment metadata."""

    __tablename__ = "notes"
    __table_args__ = (CheckConstraint("type IN ('learning', 'working')", name="ck_notes_type"),)

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
    user_id: Mapped[int | None] = _owner_fk()
    type: Mapped[str] = mapped_column(Text, nullable=False)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[str | None] = mapped_column(Text, nullable=True)
    tags: Mapped[list[str]] = mapped_column(JSONType, default=list)
    attachments: Mapped[list[dict[str, Any]]] = mapped_column(JSONType, default=list)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now()
    )


class NoteFile(Base):
    """File uploaded to a note. The payload is stored inline as sent by the client."""

    __tablename__ = "files"

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
    note_id: Mapped[int] = mapped_column(IdType, ForeignKey("notes.id", ondelete="CASCADE"), index=True)
    user_id: Mapped[int | None] = _owner_fk()
    filename: Mapped[str] = mapped_column(Text, nullable=False)
    original_name: Mapped[str] = mapped_column(Text, nullable=False)
    data: Mapped[str] = mapped_column(Text, nullable=False)
    file_size: Mapped[int | None] = mapped_column(Integer, nullable=True)
    mime_type: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now()
    )


# ---------------------------------------------------------------------------
# Pull requests
# ---------------------------------------------------------------------------

PR_STATUSES = ("pending", "in_progress", "completed", "none")


class PullRequest(Base):
    """Frontend/backend PR pair tracked under one title."""

    __tablename__ = "prs"
    __table_args__ = (
        CheckConstraint(
            "frontend_status IN ('pending', 'in_progress', 'completed', 'none')",
            name="ck_prs_frontend_status",
        ),
        CheckConstraint(
            "backend_status IN ('pending', 'in_progress', 'completed', 'none')",
            name="ck_prs_backend_status",
        ),
    )

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
    user_id: Mapped[int | None] = _owner_fk()
    title: Mapped[str] = mapped_column(Text, nullable=False)
    frontend_status: Mapped[str] = mapped_column(String(16), default="none", server_default="none")
    backend_status: Mapped[str] = mapped_column(String(16), default="none", server_default="none")
    frontend_link: Mapped[str | None] = mapped_column(Text, nullable=True)
    backend_link: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now()
    )


# ---------------------------------------------------------------------------
# Daily goals & study sessions
# ---------------------------------------------------------------------------


class DailyGoal(Base):
    """Goal scoped to a single calendar day."""

    __tablename__ = "daily_goals"

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
    user_id: Mapped[int | None] = _owner_fk()
    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    category: Mapped[str] = mapped_column(Text, nullable=False, default="personal", server_default="personal")
    priority: Mapped[str] = mapped_column(Text, nullable=False, default="medium", server_default="medium")
    status: Mapped[str] = mapped_column(Text, nullable=False, default="pending", server_default="pending")
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now()
    )


class StudySession(Base):
    """Timed study block with a 1-5 focus rating."""

    __tablename__ = "study_sessions"
    __table_args__ = (
        CheckConstraint("focus_rating >= 1 AND focus_rating <= 5", name="ck_study_sessions_focus_rating"),
    )

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
    user_id: Mapped[int | None] = _owner_fk()
    subject: Mapped[str] = mapped_column(Text, nullable=False)
    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_time: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    duration_minutes: Mapped[int | None] = mapped_column(Integer, nullable=True)
    focus_rating: Mapped[int] = mapped_column(Integer, default=3, server_default="3")
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now()
    )


# ---------------------------------------------------------------------------
# Time tracking
# ---------------------------------------------------------------------------


class TimeLog(Base):
    """Minutes spent on a category on a given day."""

    __tablename__ = "time_logs"

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
    user_id: Mapped[int | None] = _owner_fk()
    day: Mapped[date] = mapped_column(Date, nullable=False)
    category: Mapped[str] = mapped_column(String(50), nullable=False)
    minutes: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now()
    )


class TimeSession(Base):
    """Time-tracker session recorded by the client stopwatch."""

    __tablename__ = "time_sessions"

    id: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=True)
    user_id: Mapped[int | None] = _owner_fk()
    type: Mapped[str] = mapped_column(String(50), nullable=False, default="work", server_default="work")
    description: Mapped[str] = mapped_column(Text, nullable=False)
    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    duration: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now()
    )
