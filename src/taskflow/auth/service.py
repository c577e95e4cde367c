"""
Authentication business logic.

Handles user lookup, registration, credential checks and password changes.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from taskflow.auth.password import (
    check_needs_rehash,
    hash_password,
    validate_password_strength,
    validate_username,
    verify_password,
)
from taskflow.db.models import User
from taskflow.errors import AuthenticationError, ConflictError, NotFoundError, ValidationError

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

logger = structlog.get_logger()


# ---------------------------------------------------------------------------
# User queries
# ---------------------------------------------------------------------------


async def get_user_by_id(db: AsyncSession, user_id: int) -> User | None:
    """Fetch a user by ID."""
    result = await db.execute(select(User).where(User.id == user_id))
    return result.scalar_one_or_none()


async def get_user_by_username(db: AsyncSession, username: str) -> User | None:
    """Fetch a user by exact username."""
    result = await db.execute(select(User).where(User.username == username))
    return result.scalar_one_or_none()


# ---------------------------------------------------------------------------
# Registration & login
# ---------------------------------------------------------------------------


async def register_user(db: AsyncSession, username: str | None, password: str | None) -> User:
    """
    Register a new user and commit.

    Raises:
        ValidationError: Missing fields, username or password too short.
        ConflictError: Username already taken.
    """
    if not username or not password:
        msg = "Username and password are required"
        raise ValidationError(msg)
    validate_username(username)
    validate_password_strength(password)

    if await get_user_by_username(db, username) is not None:
        msg = "Username already exists"
        raise ConflictError(msg)

    user = User(
        username=username,
        password_hash=hash_password(password),
        is_verified=True,
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError as e:
        # Lost a race with a concurrent registration of the same name
        await db.rollback()
        msg = "Username already exists"
        raise ConflictError(msg) from e

    logger.info("user_registered", user_id=user.id, username=username)
    return user


async def authenticate_user(db: AsyncSession, username: str | None, password: str | None) -> User:
    """
    Check username + password.

    Raises:
        ValidationError: Missing fields.
        AuthenticationError: Unknown user or wrong password.
    """
    if not username or not password:
        msg = "username and password are required"
        raise ValidationError(msg)

    user = await get_user_by_username(db, username)
    if user is None or not verify_password(password, user.password_hash):
        logger.info("login_failed", username=username)
        msg = "Invalid credentials"
        raise AuthenticationError(msg)

    if check_needs_rehash(user.password_hash):
        user.password_hash = hash_password(password)
        await db.commit()
        logger.info("password_rehashed", user_id=user.id)

    return user


# ---------------------------------------------------------------------------
# Password changes
# ---------------------------------------------------------------------------


async def change_password(
    db: AsyncSession,
    user_id: int,
    current_password: str | None,
    new_password: str | None,
) -> None:
    """
    Replace the password after checking the current one.

    Previously issued tokens remain valid until they expire.
    """
    if not current_password or not new_password:
        msg = "Current password and new password are required"
        raise ValidationError(msg)
    validate_password_strength(new_password)

    user = await get_user_by_id(db, user_id)
    if user is None:
        msg = "User not found"
        raise NotFoundError(msg)

    if not verify_password(current_password, user.password_hash):
        msg = "Current password is incorrect"
        raise AuthenticationError(msg)

    user.password_hash = hash_password(new_password)
    await db.commit()
    logger.info("password_changed", user_id=user_id)


async def reset_password(db: AsyncSession, username: str | None, new_password: str | None) -> None:
    """Set a new password for ``username`` without the old one."""
    if not username or not new_password:
        msg = "Username and new password are required"
        raise ValidationError(msg)
    validate_password_strength(new_password)

    user = await get_user_by_username(db, username)
    if user is None:
        msg = "User not found"
        raise NotFoundError(msg)

    user.password_hash = hash_password(new_password)
    await db.commit()
    logger.info("password_reset", user_id=user.id)
