"""Study session business logic."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from typing import TYPE_CHECKING, Any

import structlog
from sqlalchemy import delete, select

from taskflow.db.models import StudySession, utcnow
from taskflow.errors import NotFoundError, ValidationError

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

logger = structlog.get_logger()

_NOT_FOUND = "Study session not found"

MIN_FOCUS = 1
MAX_FOCUS = 5
DEFAULT_FOCUS = 3


def as_utc(value: datetime) -> datetime:
    """Normalize to aware UTC; naive input is taken to be UTC already."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def day_bounds(day: date) -> tuple[datetime, datetime]:
    """Half-open UTC range covering ``day``."""
    start = datetime.combine(day, time.min, tzinfo=timezone.utc)
    return start, start + timedelta(days=1)


def minutes_between(start: datetime, end: datetime) -> int:
    return round((as_utc(end) - as_utc(start)).total_seconds() / 60)


def _check_focus(rating: int | None) -> None:
    if rating is not None and not MIN_FOCUS <= rating <= MAX_FOCUS:
        msg = f"focus_rating must be between {MIN_FOCUS} and {MAX_FOCUS}"
        raise ValidationError(msg)


async def list_sessions(db: AsyncSession, user_id: int, day: date | None = None) -> list[StudySession]:
    """Sessions newest first, optionally only those starting on ``day``."""
    query = select(StudySession).where(StudySession.user_id == user_id)
    if day is not None:
        start, end = day_bounds(day)
        query = query.where(StudySession.start_time >= start, StudySession.start_time < end)
    result = await db.execute(query.order_by(StudySession.start_time.desc(), StudySession.id.desc()))
    return list(result.scalars().all())


async def create_session(db: AsyncSession, user_id: int, data: dict[str, Any]) -> StudySession:
    """Record a session. Duration is derived from start/end when not given."""
    if not data.get("subject") or not data.get("start_time"):
        msg = "Subject and start time are required"
        raise ValidationError(msg)
    _check_focus(data.get("focus_rating"))

    start = as_utc(data["start_time"])
    end = as_utc(data["end_time"]) if data.get("end_time") else None
    duration = data.get("duration")
    if not duration and end is not None:
        duration = minutes_between(start, end)

    session = StudySession(
        user_id=user_id,
        subject=data["subject"],
        start_time=start,
        end_time=end,
        duration_minutes=duration or None,
        focus_rating=data.get("focus_rating") or DEFAULT_FOCUS,
        notes=data.get("notes") or "",
    )
    db.add(session)
    await db.flush()
    return session


async def update_session(
    db: AsyncSession, user_id: int, session_id: int, changes: dict[str, Any]
) -> StudySession:
    _check_focus(changes.get("focus_rating"))

    result = await db.execute(
        select(StudySession).where(StudySession.id == session_id, StudySession.user_id == user_id)
    )
    session = result.scalar_one_or_none()
    if session is None:
        raise NotFoundError(_NOT_FOUND)

    for name, value in changes.items():
        if value is None:
            continue
        if isinstance(value, datetime):
            value = as_utc(value)
        setattr(session, name, value)
    session.updated_at = utcnow()
    await db.flush()
    return session


async def delete_session(db: AsyncSession, user_id: int, session_id: int) -> None:
    result = await db.execute(
        delete(StudySession).where(StudySession.id == session_id, StudySession.user_id == user_id)
    )
    if not result.rowcount:
        raise NotFoundError(_NOT_FOUND)
