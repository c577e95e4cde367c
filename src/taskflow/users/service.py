"""Profile business logic."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog

from taskflow.auth.service import get_user_by_id
from taskflow.errors import NotFoundError

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from taskflow.db.models import User

logger = structlog.get_logger()

PROFILE_FIELDS = ("full_name", "email", "profile_photo")


async def get_profile(db: AsyncSession, user_id: int) -> User:
    user = await get_user_by_id(db, user_id)
    if user is None:
        msg = "User not found"
        raise NotFoundError(msg)
    return user


async def update_profile(db: AsyncSession, user_id: int, changes: dict[str, Any]) -> User:
    """
    Apply a profile patch.

    Only keys present in ``changes`` are written, so an explicit ``None``
    clears a field while an absent key leaves it alone.
    """
    user = await get_profile(db, user_id)
    for name in PROFILE_FIELDS:
        if name in changes:
            setattr(user, name, changes[name])
    await db.flush()
    logger.info("profile_updated", user_id=user_id, fields=sorted(set(changes) & set(PROFILE_FIELDS)))
    return user
