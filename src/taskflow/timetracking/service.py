"""Time log and time-tracker session business logic."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog
from sqlalchemy import select

from taskflow.db.models import TimeLog, TimeSession
from taskflow.errors import ValidationError
from taskflow.study.service import as_utc

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

logger = structlog.get_logger()


async def create_time_log(db: AsyncSession, user_id: int, data: dict[str, Any]) -> TimeLog:
    if not data.get("day") or not data.get("category") or data.get("minutes") is None:
        msg = "day, category and minutes are required"
        raise ValidationError(msg)

    log = TimeLog(user_id=user_id, day=data["day"], category=data["category"], minutes=data["minutes"])
    db.add(log)
    await db.flush()
    return log


async def list_time_sessions(db: AsyncSession, user_id: int) -> list[TimeSession]:
    result = await db.execute(
        select(TimeSession)
        .where(TimeSession.user_id == user_id)
        .order_by(TimeSession.start_time.desc(), TimeSession.id.desc())
    )
    return list(result.scalars().all())


async def create_time_session(db: AsyncSession, user_id: int, data: dict[str, Any]) -> TimeSession:
    required = ("description", "start_time", "end_time", "duration")
    if not all(data.get(name) for name in required):
        msg = "Missing required fields"
        raise ValidationError(msg)

    session = TimeSession(
        user_id=user_id,
        type=data.get("type") or "work",
        description=data["description"],
        start_time=as_utc(data["start_time"]),
        end_time=as_utc(data["end_time"]),
        duration=data["duration"],
    )
    db.add(session)
    await db.flush()
    logger.info("time_session_recorded", user_id=user_id, session_id=session.id, duration=session.duration)
    return session
