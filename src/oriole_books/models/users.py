"""Reader profile models."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel


class UserUpdate(BaseModel):
    """Partial profile update; unset fields are left unchanged."""

    full_name: str | None = None
    birthday: str | None = None
    device_token: str | None = None
    device_type: str | None = None


class User(BaseModel):
    id: UUID
    full_name: str
    email: str
    birthday: str | None = None
    barcode: str | None = None  # library card number
    device_type: str | None = None
    created_at: datetime
    updated_at: datetime
