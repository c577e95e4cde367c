"""
Password hashing and credential validation.

Hashes are argon2id. Cost parameters come from settings, so they can be raised
in production and lowered in tests; hashes made with older parameters are
upgraded at the next successful login (see ``check_needs_rehash``).
"""

from __future__ import annotations

from functools import lru_cache

import argon2

from taskflow.config import get_settings
from taskflow.errors import ValidationError


@lru_cache
def _build_hasher(time_cost: int, memory_kib: int) -> argon2.PasswordHasher:
    return argon2.PasswordHasher(
        time_cost=time_cost,
        memory_cost=memory_kib,
        parallelism=1,
        hash_len=32,
        salt_len=16,
        type=argon2.Type.ID,
    )


def _hasher() -> argon2.PasswordHasher:
    settings = get_settings()
    return _build_hasher(settings.password_hash_time_cost, settings.password_hash_memory_kib)


def hash_password(password: str) -> str:
    return _hasher().hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """True when ``password`` matches. A mismatch or an unreadable hash is False, never an error."""
    try:
        return _hasher().verify(password_hash, password)
    except (argon2.exceptions.VerifyMismatchError, argon2.exceptions.InvalidHashError):
        return False


def check_needs_rehash(password_hash: str) -> bool:
    """True when the hash was made with different cost parameters than the current ones."""
    return _hasher().check_needs_rehash(password_hash)


def validate_password_strength(password: str) -> None:
    min_length = get_settings().password_min_length
    if len(password) < min_length:
        msg = f"Password must be at least {min_length} characters"
        raise ValidationError(msg)


def validate_username(username: str) -> None:
    min_length = get_settings().username_min_length
    if len(username) < min_length:
        msg = f"Username must be at least {min_length} characters"
        raise ValidationError(msg)
