"""CLI commands for book recommendations."""

from __future__ import annotations

import asyncio
from typing import Annotated

import httpx
import typer

from oriole_books.auth import AuthManager
from oriole_books.client import LibraryClient
from oriole_books.config import get_config
from oriole_books.credentials import FileCredentialStore
from oriole_books.exceptions import OrioleBooksError
from oriole_books.services.recommendations import RecommendationService
from oriole_books.utils.errors import handle_error
from oriole_books.utils.output import OutputFormat, print_output

app = typer.Typer(name="recommendations", help="Books suggested for you.")

COLUMNS = ["id", "title", "author", "isbn", "genre"]


def _build_client(verbose: bool = False) -> tuple[LibraryClient, RecommendationService]:
    config = get_config()
    auth = AuthManager(config, FileCredentialStore(config.settings.credentials_dir))
    client = LibraryClient(config, auth, verbose=verbose)
    return client, RecommendationService(client)


@app.command("list")
def list_recommendations(
    skip: Annotated[int | None, typer.Option("--skip", help="Number of books to skip")] = None,
    limit: Annotated[int | None, typer.Option("--limit", "-l", help="Maximum number of books")] = None,
    output: Annotated[OutputFormat, typer.Option("--output", "-o", help="Output format")] = OutputFormat.TABLE,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Show request details")] = False,
) -> None:
    """List books recommended for you."""
    client, service = _build_client(verbose)

    async def _run() -> None:
        try:
            books = await service.list(skip=skip, limit=limit)
            print_output(books, output, columns=COLUMNS, title="Recommended")
        finally:
            await client.close()

    try:
        asyncio.run(_run())
    except (OrioleBooksError, httpx.HTTPError) as e:
        handle_error(e)
        raise typer.Exit(1)
