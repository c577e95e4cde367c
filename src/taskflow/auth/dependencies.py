"""
FastAPI authentication dependencies.

Two policies share the same bearer extraction:

- ``get_optional_identity`` never rejects; identity is ``None`` when the token
  is missing or fails verification.
- ``get_current_identity`` rejects with ``Unauthorized``, ``TokenExpired`` or
  ``InvalidToken`` so clients can tell "log in" from "refresh" from "re-login".

Handlers that touch user-scoped data must depend on ``get_current_identity``
and filter every query by ``identity.id``.
"""

from __future__ import annotations

from dataclasses import dataclass

import structlog
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from taskflow.auth.jwt import (
    TokenError,
    TokenExpiredError,
    TokenMalformedError,
    verify_token,
)
from taskflow.errors import InvalidToken, TokenExpired, Unauthorized

logger = structlog.get_logger()

_bearer = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class SessionIdentity:
    """Identity attached to a request or realtime connection."""

    id: int
    username: str

    def to_dict(self) -> dict[str, object]:
        return {"id": self.id, "username": self.username}


def resolve_identity(token: str) -> SessionIdentity:
    """Verify ``token`` and return the identity it carries. Raises TokenError."""
    claims = verify_token(token)
    return SessionIdentity(id=claims.user_id, username=claims.username)


async def get_optional_identity(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),  # noqa: B008
) -> SessionIdentity | None:
    """Resolve identity if a valid bearer token is present, else None."""
    if credentials is None:
        return None
    try:
        return resolve_identity(credentials.credentials)
    except TokenError:
        return None


async def get_current_identity(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),  # noqa: B008
) -> SessionIdentity:
    """Require a valid bearer token and return its identity."""
    if credentials is None:
        raise Unauthorized

    try:
        return resolve_identity(credentials.credentials)
    except TokenExpiredError as e:
        raise TokenExpired from e
    except TokenMalformedError as e:
        raise InvalidToken(str(e)) from e
    except TokenError as e:
        logger.warning(
            "token_verification_failed",
            method=request.method,
            path=request.url.path,
            error=str(e),
        )
        raise InvalidToken("Token verification failed") from e
