"""Library event data models."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from uuid import UUID

from pydantic import BaseModel


class EventStatus(str, Enum):
    PLANNED = "planned"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class CreateEventRequest(BaseModel):
    title: str
    description: str | None = None
    date: datetime
    location: str
    total_seats: int


class UpdateEventRequest(BaseModel):
    """Partial event update; unset fields are left unchanged."""

    title: str | None = None
    description: str | None = None
    date: datetime | None = None
    location: str | None = None
    total_seats: int | None = None
    status: EventStatus | None = None


class Event(BaseModel):
    id: UUID
    title: str
    description: str | None = None
    date: datetime
    location: str
    total_seats: int
    available_seats: int
    status: EventStatus
    created_at: datetime
    updated_at: datetime


class EventRegistration(BaseModel):
    id: UUID
    event_id: UUID
    user_id: UUID
    registered_at: datetime
