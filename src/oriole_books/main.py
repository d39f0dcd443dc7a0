"""Oriole Books CLI — entry point.

Command-line client for the Oriole Books library service.
"""

from __future__ import annotations

import logging

import typer

from oriole_books.commands.auth_cmd import app as auth_app
from oriole_books.commands.books_cmd import app as books_app
from oriole_books.commands.loans_cmd import app as loans_app
from oriole_books.commands.events_cmd import app as events_app
from oriole_books.commands.barcode_cmd import app as barcode_app
from oriole_books.commands.users_cmd import app as users_app
from oriole_books.commands.wallet_cmd import app as wallet_app
from oriole_books.commands.recommendations_cmd import app as recommendations_app

app = typer.Typer(
    name="oriole-books",
    help="Browse the catalog, manage loans and events of an Oriole Books library.",
    no_args_is_help=True,
)

# Register command groups
app.add_typer(auth_app, name="auth")
app.add_typer(books_app, name="books")
app.add_typer(loans_app, name="loans")
app.add_typer(events_app, name="events")
app.add_typer(barcode_app, name="barcode")
app.add_typer(users_app, name="users")
app.add_typer(wallet_app, name="wallet")
app.add_typer(recommendations_app, name="recommendations")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
) -> None:
    """Oriole Books CLI — catalog, loans, events, membership, and barcode lookup."""
    if verbose:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")


if __name__ == "__main__":
    app()
