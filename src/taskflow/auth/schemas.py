"""Request/response schemas for authentication and profile endpoints."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Credentials
# ---------------------------------------------------------------------------


class RegisterRequest(BaseModel):
    """Username + password registration.

    Fields are optional at the schema level so missing values get the same
    400 message as too-short ones.
    """

    username: str | None = None
    password: str | None = None


class LoginRequest(BaseModel):
    """Login with username + password."""

    username: str | None = None
    password: str | None = None


class ChangePasswordRequest(BaseModel):
    """Change password (requires current password)."""

    model_config = ConfigDict(populate_by_name=True)

    current_password: str | None = Field(None, alias="currentPassword")
    new_password: str | None = Field(None, alias="newPassword")


class ResetPasswordRequest(BaseModel):
    """Reset a password by username."""

    model_config = ConfigDict(populate_by_name=True)

    username: str | None = None
    new_password: str | None = Field(None, alias="newPassword")


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


class UserSummary(BaseModel):
    """Identity returned alongside a token."""

    id: int
    username: str

    model_config = ConfigDict(from_attributes=True)


class TokenResponse(BaseModel):
    """Token response returned after login."""

    token: str
    user: UserSummary


class RegisterResponse(TokenResponse):
    """Token response returned after registration."""

    success: bool = True
    message: str = "Registration successful"


class VerifyResponse(BaseModel):
    """Echo of the identity resolved from the bearer token."""

    valid: bool = True
    user: UserSummary


class MessageResponse(BaseModel):
    success: bool = True
    message: str


# ---------------------------------------------------------------------------
# Profile
# ---------------------------------------------------------------------------


class ProfileResponse(BaseModel):
    """Full user profile."""

    id: int
    username: str
    phone: str | None = None
    email: str | None = None
    full_name: str | None = None
    profile_photo: str | None = None
    is_verified: bool = False

    model_config = ConfigDict(from_attributes=True)


class ProfileUpdateRequest(BaseModel):
    """Patch of profile fields. Only fields present in the body are applied."""

    full_name: str | None = None
    email: str | None = None
    profile_photo: str | None = None
