"""
HS256 JWT identity tokens.

Tokens carry ``userId`` and ``username`` and expire a fixed number of days
after issuance. They are stateless: nothing is persisted and there is no
revocation list, so a token stays valid until ``exp`` even after a password
change.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

from taskflow.config import get_settings


class TokenError(Exception):
    """Base class for token verification failures."""


class TokenExpiredError(TokenError):
    """Signature is valid but the token is past its expiry."""


class TokenMalformedError(TokenError):
    """Signature is invalid or the token/payload is structurally wrong."""


class TokenVerificationError(TokenError):
    """Any other failure while parsing or verifying a token."""


@dataclass(frozen=True)
class TokenIdentity:
    """Identity claims recovered from a verified token."""

    user_id: int
    username: str


def create_access_token(user_id: int, username: str) -> str:
    """
    Create a signed identity token.

    Args:
        user_id: The user's database ID.
        username: The user's login name.

    Returns:
        Encoded JWT string.
    """
    settings = get_settings()
    now = datetime.now(timezone.utc)
    payload: dict[str, Any] = {
        "userId": user_id,
        "username": username,
        "iat": now,
        "exp": now + timedelta(days=settings.jwt_expire_days),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str) -> TokenIdentity:
    """
    Verify and decode an identity token.

    Raises:
        TokenExpiredError: Signature valid, expiry passed.
        TokenMalformedError: Bad signature, bad structure, or missing ``userId``.
        TokenVerificationError: Anything else.
    """
    settings = get_settings()
    try:
        payload: dict[str, Any] = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp"]},
        )
    except jwt.ExpiredSignatureError:
        msg = "Token has expired"
        raise TokenExpiredError(msg) from None
    except jwt.InvalidTokenError as e:
        msg = "Token is malformed"
        raise TokenMalformedError(msg) from e
    except Exception as e:
        raise TokenVerificationError(str(e)) from e

    user_id = payload.get("userId")
    if not isinstance(user_id, int) or isinstance(user_id, bool) or not user_id:
        msg = "Token payload is invalid"
        raise TokenMalformedError(msg)

    return TokenIdentity(user_id=user_id, username=str(payload.get("username", "")))
