"""Authentication router: all /auth/* endpoints."""

from __future__ import annotations

import structlog
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from taskflow.auth.dependencies import SessionIdentity, get_current_identity
from taskflow.auth.jwt import create_access_token
from taskflow.auth.schemas import (
    ChangePasswordRequest,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    RegisterResponse,
    ResetPasswordRequest,
    TokenResponse,
    UserSummary,
    VerifyResponse,
)
from taskflow.auth.service import authenticate_user, change_password, register_user, reset_password
from taskflow.config import get_settings
from taskflow.database import get_session
from taskflow.errors import NotFoundError

logger = structlog.get_logger()

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/register", response_model=RegisterResponse)
async def register(
    body: RegisterRequest,
    db: AsyncSession = Depends(get_session),
) -> RegisterResponse:
    """Create an account and return a token for it."""
    user = await register_user(db, body.username, body.password)
    return RegisterResponse(
        token=create_access_token(user.id, user.username),
        user=UserSummary.model_validate(user),
    )


@router.post("/login", response_model=TokenResponse)
async def login(
    body: LoginRequest,
    db: AsyncSession = Depends(get_session),
) -> TokenResponse:
    """Exchange username + password for a token."""
    user = await authenticate_user(db, body.username, body.password)
    logger.info("user_logged_in", user_id=user.id)
    return TokenResponse(
        token=create_access_token(user.id, user.username),
        user=UserSummary.model_validate(user),
    )


@router.get("/verify", response_model=VerifyResponse)
async def verify(identity: SessionIdentity = Depends(get_current_identity)) -> VerifyResponse:
    """Echo the identity carried by a valid token."""
    return VerifyResponse(user=UserSummary(id=identity.id, username=identity.username))


@router.post("/change-password", response_model=MessageResponse)
async def change_password_endpoint(
    body: ChangePasswordRequest,
    identity: SessionIdentity = Depends(get_current_identity),
    db: AsyncSession = Depends(get_session),
) -> MessageResponse:
    await change_password(db, identity.id, body.current_password, body.new_password)
    return MessageResponse(message="Password changed successfully")


@router.post("/reset-password", response_model=MessageResponse)
async def reset_password_endpoint(
    body: ResetPasswordRequest,
    db: AsyncSession = Depends(get_session),
) -> MessageResponse:
    """Unauthenticated reset by username. Only served when enabled in settings."""
    if not get_settings().password_reset_enabled:
        raise NotFoundError
    await reset_password(db, body.username, body.new_password)
    return MessageResponse(message="Password reset successfully")
