"""CLI commands for the book catalog."""

from __future__ import annotations

import asyncio
from typing import Annotated

import httpx
import typer
from rich.console import Console

from oriole_books.auth import AuthManager
from oriole_books.barcode import normalize
from oriole_books.client import LibraryClient
from oriole_books.config import get_config
from oriole_books.credentials import FileCredentialStore
from oriole_books.exceptions import OrioleBooksError
from oriole_books.services.books import BookService
from oriole_books.utils.errors import handle_error
from oriole_books.utils.output import OutputFormat, print_detail, print_output

console = Console(stderr=True)
app = typer.Typer(name="books", help="Browse the book catalog.")

BOOK_COLUMNS = ["id", "title", "author", "isbn", "genre", "instance_count"]
INSTANCE_COLUMNS = ["id", "inventory_number", "storage_location", "status"]


def _build_client(verbose: bool = False) -> tuple[LibraryClient, BookService]:
    config = get_config()
    auth = AuthManager(config, FileCredentialStore(config.settings.credentials_dir))
    client = LibraryClient(config, auth, verbose=verbose)
    return client, BookService(client)


@app.command("list")
def list_books(
    skip: Annotated[int | None, typer.Option("--skip", help="Number of books to skip")] = None,
    limit: Annotated[int | None, typer.Option("--limit", "-l", help="Maximum number of books")] = None,
    output: Annotated[OutputFormat, typer.Option("--output", "-o", help="Output format")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show request details")] = False,
) -> None:
    """List catalog books."""
    client, service = _build_client(verbose)

    async def _run() -> None:
        try:
            books = await service.list(skip=skip, limit=limit)
            console.print(f"[dim]Found {len(books)} books[/dim]")
            print_output(books, output, columns=BOOK_COLUMNS, title="Books")
        finally:
            await client.close()

    try:
        asyncio.run(_run())
    except (OrioleBooksError, httpx.HTTPError) as e:
        handle_error(e)
        raise typer.Exit(1)


@app.command("isbn")
def get_by_isbn(
    isbn: Annotated[str, typer.Argument(help="ISBN-13 to look up")],
    output: Annotated[OutputFormat, typer.Option("--output", "-o", help="Output format")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show request details")] = False,
) -> None:
    """Show a book and its copies by ISBN."""
    client, service = _build_client(verbose)

    async def _run() -> None:
        try:
            book = await service.get_by_isbn(isbn)
            print_detail(book, "instances", output, BOOK_COLUMNS, INSTANCE_COLUMNS, child_title="Copies")
        finally:
            await client.close()

    try:
        asyncio.run(_run())
    except (OrioleBooksError, httpx.HTTPError) as e:
        handle_error(e)
        raise typer.Exit(1)


@app.command("scan")
def scan(
    barcode: Annotated[str, typer.Argument(help="Raw scanner payload (EAN-13, UPC-A, EAN-8)")],
    output: Annotated[OutputFormat, typer.Option("--output", "-o", help="Output format")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show request details")] = False,
) -> None:
    """Look a book up from a scanned barcode."""
    client, service = _build_client(verbose)
    console.print(f"[dim]Looking up {normalize(barcode)}[/dim]")

    async def _run() -> None:
        try:
            book = await service.lookup_scanned(barcode)
            print_detail(book, "instances", output, BOOK_COLUMNS, INSTANCE_COLUMNS, child_title="Copies")
        finally:
            await client.close()

    try:
        asyncio.run(_run())
    except (OrioleBooksError, httpx.HTTPError) as e:
        handle_error(e)
        raise typer.Exit(1)

