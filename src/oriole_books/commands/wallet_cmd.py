"""CLI commands for library membership."""

from __future__ import annotations

import asyncio
from datetime import datetime
from typing import Annotated

import httpx
import typer
from rich.console import Console

from oriole_books.auth import AuthManager
from oriole_books.client import LibraryClient
from oriole_books.config import get_config
from oriole_books.credentials import FileCredentialStore
from oriole_books.exceptions import OrioleBooksError
from oriole_books.models.wallet import WalletMembershipRequest
from oriole_books.services.wallet import WalletService
from oriole_books.utils.errors import handle_error
from oriole_books.utils.output import OutputFormat, print_output

console = Console(stderr=True)
app = typer.Typer(name="wallet", help="Manage your library membership pass.")

MEMBERSHIP_COLUMNS = ["id", "pass_id", "default_url", "wallet_pin", "expires_at", "valid_until"]

MemberName = Annotated[str, typer.Option("--name", help="Name printed on the pass")]
MemberNumber = Annotated[str, typer.Option("--number", help="Membership number")]
BarcodeValue = Annotated[str | None, typer.Option("--barcode", help="Barcode encoded on the pass")]
ExpiresAt = Annotated[datetime | None, typer.Option("--expires", help="Expiry date")]


def _build_client(verbose: bool = False) -> tuple[LibraryClient, WalletService]:
    config = get_config()
    auth = AuthManager(config, FileCredentialStore(config.settings.credentials_dir))
    client = LibraryClient(config, auth, verbose=verbose)
    return client, WalletService(client)


def _run_and_print(client: LibraryClient, call, output: OutputFormat, title: str) -> None:
    async def _run() -> None:
        try:
            membership = await call()
            print_output(membership, output, columns=MEMBERSHIP_COLUMNS, title=title)
        finally:
            await client.close()

    try:
        asyncio.run(_run())
    except (OrioleBooksError, httpx.HTTPError) as e:
        handle_error(e)
        raise typer.Exit(1)


@app.command("show")
def show(
    output: Annotated[OutputFormat, typer.Option("--output", "-o", help="Output format")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show request details")] = False,
) -> None:
    """Show your membership and pass links."""
    client, service = _build_client(verbose)
    _run_and_print(client, service.get_mine, output, "Membership")


@app.command("create")
def create(
    name: MemberName,
    number: MemberNumber,
    barcode: BarcodeValue = None,
    expires: ExpiresAt = None,
    output: Annotated[OutputFormat, typer.Option("--output", "-o", help="Output format")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show request details")] = False,
) -> None:
    """Create a membership pass."""
    client, service = _build_client(verbose)
    request = WalletMembershipRequest(
        member_name=name, member_number=number, barcode_value=barcode, expires_at=expires,
    )
    _run_and_print(client, lambda: service.create(request), output, "Membership Created")


@app.command("update")
def update(
    name: MemberName,
    number: MemberNumber,
    barcode: BarcodeValue = None,
    expires: ExpiresAt = None,
    output: Annotated[OutputFormat, typer.Option("--output", "-o", help="Output format")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show request details")] = False,
) -> None:
    """Replace the details on your membership pass."""
    client, service = _build_client(verbose)
    request = WalletMembershipRequest(
        member_name=name, member_number=number, barcode_value=barcode, expires_at=expires,
    )
    _run_and_print(client, lambda: service.update_mine(request), output, "Membership Updated")


@app.command("delete")
def delete(
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip confirmation")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show request details")] = False,
) -> None:
    """Delete your membership pass."""
    if not yes:
        typer.confirm("Delete your membership pass?", abort=True)

    client, service = _build_client(verbose)

    async def _run() -> None:
        try:
            await service.delete_mine()
        finally:
            await client.close()

    try:
        asyncio.run(_run())
    except (OrioleBooksError, httpx.HTTPError) as e:
        handle_error(e)
        raise typer.Exit(1)
    console.print("[green]Membership deleted.[/green]")
