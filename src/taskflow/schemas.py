"""Schemas shared across routers."""

from __future__ import annotations

from pydantic import BaseModel


class SuccessResponse(BaseModel):
    """Body returned by deletes and bulk actions."""

    success: bool = True


class MessageResponse(BaseModel):
    """Body returned by deletes that confirm with a message."""

    message: str
