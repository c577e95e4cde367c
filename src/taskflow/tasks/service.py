"""
Task business logic.

Authenticated callers only ever see and mutate their own rows. Anonymous
callers of the list endpoint see unowned rows (``user_id IS NULL``) and
nothing else.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog
from sqlalchemy import delete, func, or_, select, update

from taskflow.db.models import Task, utcnow
from taskflow.errors import NotFoundError, ValidationError

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from taskflow.tasks.schemas import TaskFilters

logger = structlog.get_logger()

SORTABLE_COLUMNS = frozenset({
    "id",
    "title",
    "status",
    "priority",
    "category",
    "type",
    "due_date",
    "due_time",
    "project_id",
    "created_at",
    "updated_at",
})

_TRUTHY = {"true", "1"}
_FALSY = {"false", "0"}

# Columns that may not be cleared with an explicit null.
_REQUIRED_ON_UPDATE = ("title", "status")


def parse_flag(value: str | None) -> bool | None:
    """Interpret a ``true/1/false/0`` query flag; anything else means no filter."""
    if value is None:
        return None
    lowered = value.lower()
    if lowered in _TRUTHY:
        return True
    if lowered in _FALSY:
        return False
    return None


async def list_tasks(db: AsyncSession, user_id: int | None, filters: TaskFilters) -> list[Task]:
    """List tasks visible to ``user_id`` (or to anonymous callers when None)."""
    query = select(Task)
    if user_id is None:
        query = query.where(Task.user_id.is_(None))
    else:
        query = query.where(Task.user_id == user_id)

    if filters.status:
        query = query.where(Task.status == filters.status)
    if filters.priority:
        query = query.where(Task.priority == filters.priority)
    if filters.category:
        query = query.where(Task.category == filters.category)
    if filters.type:
        query = query.where(Task.type == filters.type)
    if filters.project_id:
        query = query.where(Task.project_id == filters.project_id)

    important = parse_flag(filters.important)
    if important is not None:
        query = query.where(Task.important.is_(important))

    if filters.q:
        pattern = f"%{filters.q}%"
        query = query.where(
            or_(Task.title.ilike(pattern), func.coalesce(Task.description, "").ilike(pattern))
        )

    sort_by = filters.sort if filters.sort in SORTABLE_COLUMNS else "id"
    column = getattr(Task, sort_by)
    query = query.order_by(column.desc() if filters.order.lower() == "desc" else column.asc())

    result = await db.execute(query)
    return list(result.scalars().all())


async def get_task(db: AsyncSession, user_id: int, task_id: int) -> Task:
    result = await db.execute(select(Task).where(Task.id == task_id, Task.user_id == user_id))
    task = result.scalar_one_or_none()
    if task is None:
        msg = "Task not found"
        raise NotFoundError(msg)
    return task


async def create_task(db: AsyncSession, user_id: int, data: dict[str, Any]) -> Task:
    """Insert a task owned by ``user_id``. Unset fields take column defaults."""
    title = (data.get("title") or "").strip()
    if not title:
        msg = "Title is required"
        raise ValidationError(msg)

    task = Task(
        user_id=user_id,
        title=title,
        status=data.get("status") or "pending",
        description=data.get("description"),
        priority=data.get("priority") or "medium",
        due_date=data.get("due_date"),
        due_time=data.get("due_time"),
        category=data.get("category") or "own",
        type=data.get("type") or "work",
        project_id=data.get("project_id"),
        important=bool(data.get("important")),
        assigned_to=data.get("assigned_to"),
    )
    db.add(task)
    await db.flush()
    logger.info("task_created", user_id=user_id, task_id=task.id)
    return task


async def update_task(db: AsyncSession, user_id: int, task_id: int, changes: dict[str, Any]) -> Task:
    """Apply a patch to one of ``user_id``'s tasks."""
    if not changes:
        msg = "Nothing to update"
        raise ValidationError(msg)
    for name in _REQUIRED_ON_UPDATE:
        if name in changes and not changes[name]:
            msg = f"{name.capitalize()} cannot be empty"
            raise ValidationError(msg)

    task = await get_task(db, user_id, task_id)
    for name, value in changes.items():
        if name == "important":
            value = bool(value)
        setattr(task, name, value)
    task.updated_at = utcnow()
    await db.flush()
    return task


async def delete_task(db: AsyncSession, user_id: int, task_id: int) -> None:
    result = await db.execute(delete(Task).where(Task.id == task_id, Task.user_id == user_id))
    if not result.rowcount:
        msg = "Task not found"
        raise NotFoundError(msg)


async def clear_completed(db: AsyncSession, user_id: int) -> int:
    """Delete the user's ``done`` tasks. Returns the number removed."""
    result = await db.execute(delete(Task).where(Task.user_id == user_id, Task.status == "done"))
    return result.rowcount or 0


async def mark_all_done(db: AsyncSession, user_id: int) -> int:
    """Set every open task of the user to ``done``. Returns the number changed."""
    result = await db.execute(
        update(Task)
        .where(Task.user_id == user_id, Task.status != "done")
        .values(status="done", updated_at=utcnow())
    )
    return result.rowcount or 0
