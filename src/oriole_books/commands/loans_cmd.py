"""CLI commands for loans."""

from __future__ import annotations

import asyncio
from datetime import datetime, timedelta, timezone
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
from oriole_books.services.loans import LoanService
from oriole_books.utils.errors import handle_error
from oriole_books.utils.output import OutputFormat, print_output

console = Console(stderr=True)
app = typer.Typer(name="loans", help="Reserve and return books.")

LOAN_COLUMNS = ["id", "book_title", "inventory_number", "status", "due_date", "returned_at"]


def _build_client(verbose: bool = False) -> tuple[LibraryClient, LoanService]:
    config = get_config()
    auth = AuthManager(config, FileCredentialStore(config.settings.credentials_dir))
    client = LibraryClient(config, auth, verbose=verbose)
    return client, LoanService(client)


@app.command("mine")
def my_loans(
    include_returned: Annotated[bool, typer.Option("--include-returned", help="Also list returned loans")] = False,
    output: Annotated[OutputFormat, typer.Option("--output", "-o", help="Output format")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show request details")] = False,
) -> None:
    """List your loans."""
    client, service = _build_client(verbose)

    async def _run() -> None:
        try:
            loans = await service.my_loans(include_returned=include_returned)
            console.print(f"[dim]Found {len(loans)} loans[/dim]")
            print_output(loans, output, columns=LOAN_COLUMNS, title="My Loans")
        finally:
            await client.close()

    try:
        asyncio.run(_run())
    except (OrioleBooksError, httpx.HTTPError) as e:
        handle_error(e)
        raise typer.Exit(1)


@app.command("reserve")
def reserve(
    book_instance_id: Annotated[UUID, typer.Argument(help="Copy to reserve")],
    days: Annotated[int, typer.Option("--days", "-d", help="Loan length in days")] = 14,
    output: Annotated[OutputFormat, typer.Option("--output", "-o", help="Output format")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show request details")] = False,
) -> None:
    """Reserve a copy of a book."""
    client, service = _build_client(verbose)
    due_date = datetime.now(timezone.utc) + timedelta(days=days)

    async def _run() -> None:
        try:
            loan = await service.reserve(book_instance_id, due_date)
            print_output(loan, output, title="Reserved")
        finally:
            await client.close()

    try:
        asyncio.run(_run())
    except (OrioleBooksError, httpx.HTTPError) as e:
        handle_error(e)
        raise typer.Exit(1)


@app.command("return")
def return_loan(
    loan_id: Annotated[UUID, typer.Argument(help="Loan to close")],
    output: Annotated[OutputFormat, typer.Option("--output", "-o", help="Output format")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show request details")] = False,
) -> None:
    """Mark a loan as returned."""
    client, service = _build_client(verbose)

    async def _run() -> None:
        try:
            loan = await service.return_loan(loan_id)
            print_output(loan, output, title="Returned")
        finally:
            await client.close()

    try:
        asyncio.run(_run())
    except (OrioleBooksError, httpx.HTTPError) as e:
        handle_error(e)
        raise typer.Exit(1)
