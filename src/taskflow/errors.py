"""
Error taxonomy for the TaskFlow API.

Services and dependencies raise these; the global handler in
``taskflow.middleware.error_handler`` turns them into JSON responses of the
form ``{"error": ..., "code": ...}`` with the class's status code.
"""

from __future__ import annotations

from typing import Any


class TaskflowError(Exception):
    """
    Base exception for all TaskFlow errors.

    ``label`` is a fixed, client-facing error string. When a class has no
    label, the message itself is reported as the error.
    """

    status_code: int = 500
    label: str | None = None
    default_message: str = "Internal server error"
    headers: dict[str, str] | None = None

    def __init__(self, message: str | None = None, details: dict[str, Any] | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)
        self.code = self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        body: dict[str, Any] = {"error": self.label or self.message, "code": self.code}
        if self.label:
            body["message"] = self.message
        if self.details:
            body["details"] = self.details
        return body


class ValidationError(TaskflowError):
    """Missing or malformed input."""

    status_code = 400
    default_message = "Validation error"


class AuthenticationError(TaskflowError):
    """Credentials were supplied but rejected."""

    status_code = 401
    default_message = "Authentication failed"
    headers = {"WWW-Authenticate": "Bearer"}  # noqa: RUF012


class Unauthorized(AuthenticationError):
    """No credentials supplied."""

    label = "Unauthorized"
    default_message = "No token provided"


class TokenExpired(AuthenticationError):
    """Token signature is valid but its expiry has passed; the client should refresh."""

    label = "Token expired"
    default_message = "Please login again"


class InvalidToken(AuthenticationError):
    """Token is malformed, tampered, or otherwise unverifiable."""

    label = "Invalid token"
    default_message = "Token is malformed"


class NotFoundError(TaskflowError):
    """Resource is absent or not owned by the caller."""

    status_code = 404
    default_message = "Not found"


class ConflictError(TaskflowError):
    """Uniqueness violation."""

    status_code = 409
    default_message = "Conflict"


class InternalError(TaskflowError):
    """Storage or hashing failure."""

    status_code = 500
