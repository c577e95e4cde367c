"""Daily goal business logic."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import TYPE_CHECKING, Any

import structlog
from sqlalchemy import delete, select

from taskflow.db.models import DailyGoal, utcnow
from taskflow.errors import NotFoundError, ValidationError

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

logger = structlog.get_logger()

_NOT_FOUND = "Daily goal not found"

# Patch fields that are kept when sent as null.
_COALESCED = ("title", "description", "category", "priority", "status")


def today_utc() -> date:
    return datetime.now(timezone.utc).date()


async def list_goals(db: AsyncSession, user_id: int, day: date | None = None) -> list[DailyGoal]:
    """Goals for ``day`` (today in UTC by default), newest first."""
    result = await db.execute(
        select(DailyGoal)
        .where(DailyGoal.user_id == user_id, DailyGoal.date == (day or today_utc()))
        .order_by(DailyGoal.created_at.desc(), DailyGoal.id.desc())
    )
    return list(result.scalars().all())


async def create_goal(db: AsyncSession, user_id: int, data: dict[str, Any]) -> DailyGoal:
    if not data.get("title") or not data.get("date"):
        msg = "Title and date are required"
        raise ValidationError(msg)

    goal = DailyGoal(
        user_id=user_id,
        title=data["title"],
        description=data.get("description") or "",
        category=data.get("category") or "personal",
        priority=data.get("priority") or "medium",
        status="pending",
        date=data["date"],
    )
    db.add(goal)
    await db.flush()
    return goal


async def update_goal(db: AsyncSession, user_id: int, goal_id: int, changes: dict[str, Any]) -> DailyGoal:
    """
    Apply a patch.

    Moving to ``completed`` stamps ``completed_at``; moving back to
    ``pending`` clears it; other statuses leave it as is.
    """
    result = await db.execute(select(DailyGoal).where(DailyGoal.id == goal_id, DailyGoal.user_id == user_id))
    goal = result.scalar_one_or_none()
    if goal is None:
        raise NotFoundError(_NOT_FOUND)

    for name in _COALESCED:
        if changes.get(name) is not None:
            setattr(goal, name, changes[name])

    now = utcnow()
    status = changes.get("status")
    if status == "completed":
        goal.completed_at = now
    elif status == "pending":
        goal.completed_at = None
    goal.updated_at = now
    await db.flush()
    return goal


async def delete_goal(db: AsyncSession, user_id: int, goal_id: int) -> None:
    result = await db.execute(delete(DailyGoal).where(DailyGoal.id == goal_id, DailyGoal.user_id == user_id))
    if not result.rowcount:
        raise NotFoundError(_NOT_FOUND)
