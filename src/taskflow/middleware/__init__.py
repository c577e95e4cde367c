"""HTTP middleware stack for the TaskFlow API."""

from fastapi import FastAPI

from taskflow.config import Settings
from taskflow.middleware.cors import setup_cors
from taskflow.middleware.error_handler import setup_error_handlers
from taskflow.middleware.logging import setup_logging
from taskflow.middleware.rate_limit import RateLimitMiddleware
from taskflow.middleware.request_id import RequestIdMiddleware


def setup_middleware(app: FastAPI, settings: Settings) -> None:
    """Install logging, error handlers and middleware.

    Starlette runs the last-added middleware outermost, so the effective order
    is CORS, then request id, then rate limit. CORS has to wrap the limiter's
    429 responses, and the request id has to be bound before anything logs.
    """
    setup_logging(settings)
    setup_error_handlers(app, settings)
    app.add_middleware(
        RateLimitMiddleware,
        requests_per_window=settings.rate_limit_requests,
        window_seconds=settings.rate_limit_window_seconds,
    )
    app.add_middleware(RequestIdMiddleware)
    setup_cors(app, settings)
