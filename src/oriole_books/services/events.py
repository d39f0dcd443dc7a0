"""Library events service."""

from __future__ import annotations

from typing import Any
from uuid import UUID

from oriole_books.client import LibraryClient
from oriole_books.models.events import CreateEventRequest, Event, EventRegistration, UpdateEventRequest


def _paging(skip: int | None, limit: int | None) -> dict[str, Any] | None:
    params = {k: v for k, v in {"skip": skip, "limit": limit}.items() if v is not None}
    return params or None


class EventService:
    """Service for browsing events and managing registrations.

    Listing and viewing upcoming events is public. Creating, editing and the
    full admin listing need a staff account.
    """

    def __init__(self, client: LibraryClient) -> None:
        self._client = client

    async def list_upcoming(self, skip: int | None = None, limit: int | None = None) -> list[Event]:
        response = await self._client.get("/events", params=_paging(skip, limit), authenticated=False)
        return [Event(**item) for item in response.json()]

    async def get(self, event_id: UUID) -> Event:
        response = await self._client.get(f"/events/{event_id}", authenticated=False)
        return Event(**response.json())

    async def create(self, request: CreateEventRequest) -> Event:
        response = await self._client.post("/events", json=request.model_dump(mode="json", exclude_none=True))
        return Event(**response.json())

    async def update(self, event_id: UUID, request: UpdateEventRequest) -> Event:
        body = request.model_dump(mode="json", exclude_none=True)
        response = await self._client.put(f"/events/{event_id}", json=body)
        return Event(**response.json())

    async def all_events(self, skip: int | None = None, limit: int | None = None) -> list[Event]:
        """Every event regardless of status or date."""
        response = await self._client.get("/events/admin/all", params=_paging(skip, limit))
        return [Event(**item) for item in response.json()]

    async def register(self, event_id: UUID) -> EventRegistration:
        response = await self._client.post(f"/events/{event_id}/register")
        return EventRegistration(**response.json())

    async def cancel_registration(self, event_id: UUID) -> None:
        await self._client.delete(f"/events/{event_id}/register")

    async def my_registrations(self, include_past: bool | None = None) -> list[EventRegistration]:
        params = None
        if include_past is not None:
            params = {"include_past": str(include_past).lower()}
        response = await self._client.get("/events/my/registrations", params=params)
        return [EventRegistration(**item) for item in response.json()]
