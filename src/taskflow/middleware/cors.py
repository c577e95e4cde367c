"""CORS for the browser and mobile clients."""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from taskflow.config import Settings

_ALLOWED_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
_ALLOWED_HEADERS = ["Authorization", "Content-Type", "X-Request-Id"]
_EXPOSED_HEADERS = ["X-Request-Id", "X-RateLimit-Limit", "X-RateLimit-Remaining", "Content-Disposition"]


def setup_cors(app: FastAPI, settings: Settings) -> None:
    """Credentials are only allowed with an explicit origin list, never with ``*``."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=_ALLOWED_METHODS,
        allow_headers=_ALLOWED_HEADERS,
        expose_headers=_EXPOSED_HEADERS,
    )
