"""Global error handlers: consistent JSON error responses."""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from taskflow.config import Settings
from taskflow.errors import TaskflowError

logger = structlog.get_logger()


def _internal_error(exc: Exception, debug: bool) -> JSONResponse:
    content: dict[str, object] = {"error": "Internal server error", "code": "InternalError"}
    if debug:
        content["message"] = str(exc)
    return JSONResponse(status_code=500, content=content)


def setup_error_handlers(app: FastAPI, settings: Settings) -> None:
    """Register global exception handlers."""

    @app.exception_handler(TaskflowError)
    async def taskflow_error_handler(_request: Request, exc: TaskflowError) -> JSONResponse:
        """Render domain errors with their own status code and body."""
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_dict(),
            headers=exc.headers,
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(_request: Request, exc: StarletteHTTPException) -> JSONResponse:
        """Handle HTTP exceptions with consistent JSON format."""
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(_request: Request, exc: RequestValidationError) -> JSONResponse:
        """Missing or malformed input is a plain 400."""
        return JSONResponse(
            status_code=400,
            content={
                "error": "Validation error",
                "code": "ValidationError",
                "details": jsonable_errors(exc),
            },
        )

    @app.exception_handler(SQLAlchemyError)
    async def storage_exception_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        """Storage failures are logged and surfaced as a generic 500."""
        logger.error(
            "storage_error",
            path=request.url.path,
            method=request.method,
            error=str(exc),
            exc_info=exc,
        )
        return _internal_error(exc, settings.debug)

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Catch-all for unhandled exceptions, always rendered as JSON."""
        logger.error(
            "unhandled_exception",
            path=request.url.path,
            method=request.method,
            error=str(exc),
            exc_info=exc,
        )
        return _internal_error(exc, settings.debug)


def jsonable_errors(exc: RequestValidationError) -> list[dict[str, object]]:
    """Strip non-serializable context (e.g. raised exceptions) from pydantic errors."""
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in exc.errors()
    ]
