"""Pydantic schemas for registration, login and token exchange."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class Credentials(BaseModel):
    """Email and password as sent to login."""

    email: EmailStr = Field(..., description="Account email address")
    password: str = Field(..., description="Account password")


class RegisterRequest(Credentials):
    """New account; passwords shorter than 6 characters are rejected."""

    password: str = Field(..., min_length=6, description="Password (min 6 characters)")


class TokenPair(BaseModel):
    """Access token for API calls plus a refresh token to renew it."""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class RefreshRequest(BaseModel):
    refresh_token: str = Field(..., description="Refresh token from login or a previous refresh")


class UserResponse(BaseModel):
    """Public view of an account; never includes the password hash."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str
    is_active: bool
    created_at: datetime
