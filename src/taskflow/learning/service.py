"""Learning progress business logic."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog
from sqlalchemy import delete, select

from taskflow.db.models import LearningProgress, utcnow
from taskflow.errors import NotFoundError, ValidationError

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

logger = structlog.get_logger()

_NOT_FOUND = "Learning progress not found"


async def list_progress(db: AsyncSession, user_id: int) -> list[LearningProgress]:
    """Most recently practiced first; never-practiced entries last."""
    result = await db.execute(
        select(LearningProgress)
        .where(LearningProgress.user_id == user_id)
        .order_by(LearningProgress.last_practiced.desc().nulls_last(), LearningProgress.id.desc())
    )
    return list(result.scalars().all())


async def create_progress(db: AsyncSession, user_id: int, data: dict[str, Any]) -> LearningProgress:
    if not data.get("subject"):
        msg = "subject is required"
        raise ValidationError(msg)

    entry = LearningProgress(
        user_id=user_id,
        subject=data["subject"],
        topic=data.get("topic"),
        skill_level=data.get("skill_level") or "beginner",
        hours_spent=data.get("hours_spent") or 0,
        progress_percentage=data.get("progress_percentage") or 0,
        notes=data.get("notes"),
    )
    db.add(entry)
    await db.flush()
    return entry


async def update_progress(
    db: AsyncSession, user_id: int, entry_id: int, changes: dict[str, Any]
) -> LearningProgress:
    """Apply a patch and mark the subject as practiced now."""
    if "subject" in changes and not changes["subject"]:
        msg = "subject is required"
        raise ValidationError(msg)

    result = await db.execute(
        select(LearningProgress).where(LearningProgress.id == entry_id, LearningProgress.user_id == user_id)
    )
    entry = result.scalar_one_or_none()
    if entry is None:
        raise NotFoundError(_NOT_FOUND)

    for name, value in changes.items():
        setattr(entry, name, value)
    now = utcnow()
    entry.last_practiced = now
    entry.updated_at = now
    await db.flush()
    return entry


async def delete_progress(db: AsyncSession, user_id: int, entry_id: int) -> None:
    result = await db.execute(
        delete(LearningProgress).where(LearningProgress.id == entry_id, LearningProgress.user_id == user_id)
    )
    if not result.rowcount:
        raise NotFoundError(_NOT_FOUND)
