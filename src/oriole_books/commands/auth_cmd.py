"""CLI commands for authentication management."""

from __future__ import annotations

import asyncio
from typing import Annotated

import httpx
import typer
from rich.console import Console

from oriole_books.auth import AuthManager
from oriole_books.config import get_config
from oriole_books.credentials import FileCredentialStore
from oriole_books.exceptions import OrioleBooksError
from oriole_books.utils.errors import handle_error
from oriole_books.utils.output import OutputFormat, print_output

console = Console(stderr=True)
app = typer.Typer(name="auth", help="Manage the login session.")


def _build_auth() -> AuthManager:
    config = get_config()
    store = FileCredentialStore(config.settings.credentials_dir)
    return AuthManager(config, store)


def _status_row(auth: AuthManager) -> dict[str, object]:
    return auth.get_status().model_dump(mode="json")


@app.command()
def login(
    email: Annotated[str, typer.Option("--email", "-e", prompt=True, help="Account email")],
    password: Annotated[str, typer.Option("--password", "-p", prompt=True, hide_input=True, help="Account password")],
    output: Annotated[OutputFormat, typer.Option("--output", "-o", help="Output format")] = OutputFormat.TABLE,
) -> None:
    """Log in and store the access token."""
    auth = _build_auth()

    async def _run() -> None:
        try:
            console.print(f"Logging in as [bold]{email}[/bold]...", style="yellow")
            token = await auth.login(email, password)
            result = {"status": "authenticated", "user_id": str(token.user_id), **_status_row(auth)}
            print_output(result, output, title="Authentication")
        finally:
            await auth.close()

    try:
        asyncio.run(_run())
    except (OrioleBooksError, httpx.HTTPError) as e:
        handle_error(e)
        raise typer.Exit(1)


@app.command()
def logout() -> None:
    """Forget stored credentials."""
    auth = _build_auth()
    auth.logout()
    asyncio.run(auth.close())
    console.print("[green]Logged out.[/green]")


@app.command()
def status(
    output: Annotated[OutputFormat, typer.Option("--output", "-o", help="Output format")] = OutputFormat.TABLE,
) -> None:
    """Show current token status."""
    auth = _build_auth()
    print_output(_status_row(auth), output, title="Token Status")
    asyncio.run(auth.close())


@app.command()
def refresh(
    output: Annotated[OutputFormat, typer.Option("--output", "-o", help="Output format")] = OutputFormat.TABLE,
) -> None:
    """Force refresh the access token."""
    auth = _build_auth()

    async def _run() -> None:
        try:
            console.print("Refreshing access token...", style="yellow")
            await auth.refresh()
            print_output({"status": "refreshed", **_status_row(auth)}, output, title="Token Refreshed")
        finally:
            await auth.close()

    try:
        asyncio.run(_run())
    except (OrioleBooksError, httpx.HTTPError) as e:
        handle_error(e)
        raise typer.Exit(1)
