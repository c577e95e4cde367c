"""Dashboard overview aggregation.

All "today" boundaries are UTC calendar days.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

import structlog
from sqlalchemy import func, select

from taskflow.dashboard.schemas import (
    DashboardOverviewResponse,
    ProjectStats,
    TaskLists,
    TaskStats,
    TimeStats,
)
from taskflow.db.models import Task, TimeLog
from taskflow.goals.service import today_utc
from taskflow.study.service import day_bounds
from taskflow.tasks.schemas import TaskResponse

if TYPE_CHECKING:
    from datetime import date

    from sqlalchemy.ext.asyncio import AsyncSession

logger = structlog.get_logger()

CLOSED_STATUSES = ("done", "completed")
LIST_LIMIT = 10


def summarize_statuses(counts: dict[str, int]) -> TaskStats:
    """Fold per-status counts into the dashboard's task stats."""
    stats = TaskStats()
    for status, count in counts.items():
        stats.total += count
        if status in ("learning", "working", "testing", "completed"):
            setattr(stats, status, count)
        if status in ("completed", "done"):
            stats.done += count
        if status in ("learning", "pending"):
            stats.pending += count
    if stats.total:
        stats.goal_percent = math.floor(stats.completed * 100 / stats.total + 0.5)
    return stats


async def _open_tasks_of_type(db: AsyncSession, user_id: int, task_type: str) -> list[TaskResponse]:
    result = await db.execute(
        select(Task)
        .where(Task.user_id == user_id, Task.type == task_type, Task.status.not_in(CLOSED_STATUSES))
        .order_by(Task.created_at.desc(), Task.id.desc())
        .limit(LIST_LIMIT)
    )
    return [TaskResponse.model_validate(t) for t in result.scalars().all()]


async def get_overview(db: AsyncSession, user_id: int, today: date | None = None) -> DashboardOverviewResponse:
    """Build the overview for ``user_id``."""
    today = today or today_utc()
    start, end = day_bounds(today)

    rows = await db.execute(
        select(Task.status, func.count())
        .where(Task.user_id == user_id, Task.created_at >= start, Task.created_at < end)
        .group_by(Task.status)
    )
    tasks_today = summarize_statuses({status: count for status, count in rows.all()})

    rows = await db.execute(
        select(Task.type, func.count())
        .where(Task.user_id == user_id, Task.status.not_in(CLOSED_STATUSES))
        .group_by(Task.type)
    )
    by_type = dict(rows.all())
    projects = ProjectStats(office=by_type.get("work", 0), personal=by_type.get("learning", 0))

    overdue = await db.scalar(
        select(func.count())
        .select_from(Task)
        .where(Task.user_id == user_id, Task.status.not_in(CLOSED_STATUSES), Task.due_date < today)
    )

    rows = await db.execute(
        select(TimeLog.category, func.sum(TimeLog.minutes))
        .where(TimeLog.user_id == user_id, TimeLog.day == today)
        .group_by(TimeLog.category)
    )
    minutes = {category: int(total or 0) for category, total in rows.all()}
    time_stats = TimeStats(work_minutes=minutes.get("work", 0), learning_minutes=minutes.get("learning", 0))

    lists = TaskLists(
        work=await _open_tasks_of_type(db, user_id, "work"),
        learning=await _open_tasks_of_type(db, user_id, "learning"),
    )

    return DashboardOverviewResponse(
        tasks_today=tasks_today,
        projects=projects,
        overdue=overdue or 0,
        time=time_stats,
        lists=lists,
    )
