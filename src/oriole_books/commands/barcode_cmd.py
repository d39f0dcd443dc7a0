"""CLI commands for barcode handling."""

from __future__ import annotations

from typing import Annotated

import typer

from oriole_books.barcode import is_isbn13, normalize
from oriole_books.utils.output import OutputFormat, print_output

app = typer.Typer(name="barcode", help="Convert scanned barcodes to catalog identifiers.")


@app.command("normalize")
def normalize_cmd(
    barcodes: Annotated[list[str], typer.Argument(help="Raw scanner payloads")],
    output: Annotated[OutputFormat, typer.Option("--output", "-o", help="Output format")] = OutputFormat.TABLE,
) -> None:
    """Show the lookup identifier for each scanned barcode."""
    rows = []
    for raw in barcodes:
        identifier = normalize(raw)
        rows.append({
            "barcode": raw,
            "identifier": identifier,
            "is_isbn": is_isbn13(identifier),
        })
    print_output(rows, output, title="Barcodes")
