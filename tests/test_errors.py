"""Error taxonomy serialization."""

from taskflow.errors import (
    ConflictError,
    InvalidToken,
    NotFoundError,
    TokenExpired,
    Unauthorized,
    ValidationError,
)


def test_unlabelled_error_reports_message() -> None:
    assert NotFoundError("Task not found").to_dict() == {"error": "Task not found", "code": "NotFoundError"}


def test_default_message() -> None:
    exc = ConflictError()
    assert exc.status_code == 409
    assert exc.to_dict()["error"] == "Conflict"


def test_labelled_errors_carry_message() -> None:
    assert Unauthorized().to_dict() == {
        "error": "Unauthorized",
        "code": "Unauthorized",
        "message": "No token provided",
    }
    assert TokenExpired().to_dict()["message"] == "Please login again"
    assert InvalidToken("Token verification failed").to_dict() == {
        "error": "Invalid token",
        "code": "InvalidToken",
        "message": "Token verification failed",
    }


def test_auth_errors_challenge_bearer() -> None:
    assert Unauthorized.status_code == 401
    assert TokenExpired.headers == {"WWW-Authenticate": "Bearer"}


def test_details_included() -> None:
    body = ValidationError("bad", details={"field": "title"}).to_dict()
    assert body["details"] == {"field": "title"}
