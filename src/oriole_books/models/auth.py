"""Auth-related data models."""

from __future__ import annotations

from datetime import datetime, timezone
from uuid import UUID

from pydantic import BaseModel, Field, field_validator


class Credential(BaseModel):
    """A bearer token and the moment it stops being accepted."""
    value: str
    expiration: datetime

    @field_validator("expiration")
    @classmethod
    def _assume_utc(cls, v: datetime) -> datetime:
        return v if v.tzinfo is not None else v.replace(tzinfo=timezone.utc)

    def is_expired(self, now: datetime | None = None) -> bool:
        now = now or datetime.now(timezone.utc)
        return self.expiration <= now


class ErrorResponse(BaseModel):
    """Structured error body returned by the API."""
    error: bool = True
    reason: str


class LoginRequest(BaseModel):
    email: str
    password: str


class RegisterRequest(BaseModel):
    full_name: str
    email: str
    password: str
    birthday: str | None = None
    device_token: str | None = None
    device_type: str | None = None


class RegisterResponse(BaseModel):
    message: str
    user_id: UUID
    barcode: str | None = None


class TokenResponse(BaseModel):
    """Response from /auth/login and /auth/token."""
    access_token: str
    token_type: str | None = "bearer"
    user_id: UUID


class RefreshRequest(BaseModel):
    token: str = ""


class RefreshResponse(BaseModel):
    """Response from the refresh endpoint."""
    access_token: Credential
    refresh_token: Credential | None = None


class TokenStatus(BaseModel):
    """Current state of the stored access token."""
    has_token: bool
    is_expired: bool
    requires_refresh: bool = False
    expires_at: datetime | None = None
    seconds_remaining: int | None = Field(default=None, ge=0)
