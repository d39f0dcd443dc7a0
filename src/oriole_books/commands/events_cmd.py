"""CLI commands for library events."""

from __future__ import annotations

import asyncio
from datetime import datetime
from typing import Annotated
from uuid import UUID

import httpx
import typer
from rich.console import Console

from oriole_books.auth import AuthManager
from oriole_books.client import LibraryClient
from oriole_books.config import get_config
from oriole_books.credentials import FileCredentialStore
from oriole_books.exceptions import OrioleBooksError
from oriole_books.models.events import CreateEventRequest, EventStatus, UpdateEventRequest
from oriole_books.services.events import EventService
from oriole_books.utils.errors import handle_error
from oriole_books.utils.output import OutputFormat, print_output

console = Console(stderr=True)
app = typer.Typer(name="events", help="Browse and register for library events.")

EVENT_COLUMNS = ["id", "title", "date", "location", "available_seats", "status"]


def _build_client(verbose: bool = False) -> tuple[LibraryClient, EventService]:
    config = get_config()
    auth = AuthManager(config, FileCredentialStore(config.settings.credentials_dir))
    client = LibraryClient(config, auth, verbose=verbose)
    return client, EventService(client)


@app.command("list")
def list_events(
    skip: Annotated[int | None, typer.Option("--skip", help="Number of events to skip")] = None,
    limit: Annotated[int | None, typer.Option("--limit", "-l", help="Maximum number of events")] = None,
    output: Annotated[OutputFormat, typer.Option("--output", "-o", help="Output format")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show request details")] = False,
) -> None:
    """List upcoming events."""
    client, service = _build_client(verbose)

    async def _run() -> None:
        try:
            events = await service.list_upcoming(skip=skip, limit=limit)
            print_output(events, output, columns=EVENT_COLUMNS, title="Upcoming Events")
        finally:
            await client.close()

    try:
        asyncio.run(_run())
    except (OrioleBooksError, httpx.HTTPError) as e:
        handle_error(e)
        raise typer.Exit(1)


@app.command("register")
def register(
    event_id: Annotated[UUID, typer.Argument(help="Event to attend")],
    output: Annotated[OutputFormat, typer.Option("--output", "-o", help="Output format")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show request details")] = False,
) -> None:
    """Register for an event."""
    client, service = _build_client(verbose)

    async def _run() -> None:
        try:
            registration = await service.register(event_id)
            print_output(registration, output, title="Registered")
        finally:
            await client.close()

    try:
        asyncio.run(_run())
    except (OrioleBooksError, httpx.HTTPError) as e:
        handle_error(e)
        raise typer.Exit(1)


@app.command("cancel")
def cancel(
    event_id: Annotated[UUID, typer.Argument(help="Event to withdraw from")],
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show request details")] = False,
) -> None:
    """Cancel an event registration."""
    client, service = _build_client(verbose)

    async def _run() -> None:
        try:
            await service.cancel_registration(event_id)
        finally:
            await client.close()

    try:
        asyncio.run(_run())
    except (OrioleBooksError, httpx.HTTPError) as e:
        handle_error(e)
        raise typer.Exit(1)
    console.print("[green]Registration cancelled.[/green]")


@app.command("all")
def all_events(
    skip: Annotated[int | None, typer.Option("--skip", help="Number of events to skip")] = None,
    limit: Annotated[int | None, typer.Option("--limit", "-l", help="Maximum number of events")] = None,
    output: Annotated[OutputFormat, typer.Option("--output", "-o", help="Output format")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show request details")] = False,
) -> None:
    """List every event, past and cancelled included (staff only)."""
    client, service = _build_client(verbose)

    async def _run() -> None:
        try:
            events = await service.all_events(skip=skip, limit=limit)
            print_output(events, output, columns=EVENT_COLUMNS, title="All Events")
        finally:
            await client.close()

    try:
        asyncio.run(_run())
    except (OrioleBooksError, httpx.HTTPError) as e:
        handle_error(e)
        raise typer.Exit(1)


@app.command("create")
def create(
    title: Annotated[str, typer.Option("--title", help="Event title")],
    date: Annotated[datetime, typer.Option("--date", help="Start time")],
    location: Annotated[str, typer.Option("--location", help="Where it takes place")],
    seats: Annotated[int, typer.Option("--seats", help="Total number of seats")],
    description: Annotated[str | None, typer.Option("--description", help="Event description")] = None,
    output: Annotated[OutputFormat, typer.Option("--output", "-o", help="Output format")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show request details")] = False,
) -> None:
    """Create an event (staff only)."""
    client, service = _build_client(verbose)
    request = CreateEventRequest(
        title=title, description=description, date=date, location=location, total_seats=seats,
    )

    async def _run() -> None:
        try:
            event = await service.create(request)
            print_output(event, output, columns=EVENT_COLUMNS, title="Event Created")
        finally:
            await client.close()

    try:
        asyncio.run(_run())
    except (OrioleBooksError, httpx.HTTPError) as e:
        handle_error(e)
        raise typer.Exit(1)


@app.command("update")
def update(
    event_id: Annotated[UUID, typer.Argument(help="Event to edit")],
    title: Annotated[str | None, typer.Option("--title", help="New title")] = None,
    date: Annotated[datetime | None, typer.Option("--date", help="New start time")] = None,
    location: Annotated[str | None, typer.Option("--location", help="New location")] = None,
    seats: Annotated[int | None, typer.Option("--seats", help="New total number of seats")] = None,
    status: Annotated[EventStatus | None, typer.Option("--status", help="New status")] = None,
    output: Annotated[OutputFormat, typer.Option("--output", "-o", help="Output format")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show request details")] = False,
) -> None:
    """Edit an event (staff only). Omitted fields are left unchanged."""
    client, service = _build_client(verbose)
    request = UpdateEventRequest(title=title, date=date, location=location, total_seats=seats, status=status)

    async def _run() -> None:
        try:
            event = await service.update(event_id, request)
            print_output(event, output, columns=EVENT_COLUMNS, title="Event Updated")
        finally:
            await client.close()

    try:
        asyncio.run(_run())
    except (OrioleBooksError, httpx.HTTPError) as e:
        handle_error(e)
        raise typer.Exit(1)
