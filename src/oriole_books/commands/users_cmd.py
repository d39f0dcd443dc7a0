"""CLI commands for the reader profile."""

from __future__ import annotations

import asyncio
from typing import Annotated

import httpx
import typer
from rich.console import Console

from oriole_books.auth import AuthManager
from oriole_books.client import LibraryClient
from oriole_books.config import get_config
from oriole_books.credentials import FileCredentialStore
from oriole_books.exceptions import OrioleBooksError
from oriole_books.models.users import UserUpdate
from oriole_books.services.users import UserService
from oriole_books.utils.errors import handle_error
from oriole_books.utils.output import OutputFormat, print_output

console = Console(stderr=True)
app = typer.Typer(name="users", help="View and edit your profile and library card.")

USER_COLUMNS = ["id", "full_name", "email", "birthday", "barcode"]


def _build_client(verbose: bool = False) -> tuple[LibraryClient, UserService]:
    config = get_config()
    auth = AuthManager(config, FileCredentialStore(config.settings.credentials_dir))
    client = LibraryClient(config, auth, verbose=verbose)
    return client, UserService(client)


@app.command("me")
def me(
    output: Annotated[OutputFormat, typer.Option("--output", "-o", help="Output format")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show request details")] = False,
) -> None:
    """Show your profile, including the library card barcode."""
    client, service = _build_client(verbose)

    async def _run() -> None:
        try:
            user = await service.me()
            print_output(user, output, columns=USER_COLUMNS, title="Profile")
        finally:
            await client.close()

    try:
        asyncio.run(_run())
    except (OrioleBooksError, httpx.HTTPError) as e:
        handle_error(e)
        raise typer.Exit(1)


@app.command("update")
def update(
    full_name: Annotated[str | None, typer.Option("--full-name", help="New display name")] = None,
    birthday: Annotated[str | None, typer.Option("--birthday", help="Birthday (YYYY-MM-DD)")] = None,
    output: Annotated[OutputFormat, typer.Option("--output", "-o", help="Output format")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show request details")] = False,
) -> None:
    """Update profile fields. Omitted fields are left unchanged."""
    if full_name is None and birthday is None:
        console.print("[yellow]Nothing to update.[/yellow] Pass --full-name or --birthday.")
        raise typer.Exit(1)

    client, service = _build_client(verbose)

    async def _run() -> None:
        try:
            user = await service.update_me(UserUpdate(full_name=full_name, birthday=birthday))
            print_output(user, output, columns=USER_COLUMNS, title="Profile Updated")
        finally:
            await client.close()

    try:
        asyncio.run(_run())
    except (OrioleBooksError, httpx.HTTPError) as e:
        handle_error(e)
        raise typer.Exit(1)
