"""Rendering of API models and plain rows on the terminal.

JSON and CSV go to stdout for scripts and agents. Tables are drawn on stderr
with rich, so piping a command never mixes decoration into its data.
"""

from __future__ import annotations

import csv
import json
import sys
from enum import Enum
from typing import Any

from pydantic import BaseModel
from rich.console import Console
from rich.table import Table

console = Console(stderr=True)

Row = dict[str, Any]


class OutputFormat(str, Enum):
    TABLE = "table"
    JSON = "json"
    CSV = "csv"


def to_jsonable(data: Any) -> Any:
    """Dump models (and lists of them) to JSON-ready values, keeping the shape."""
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json")
    if isinstance(data, list):
        return [to_jsonable(item) for item in data]
    return data


def to_rows(data: Any, exclude: set[str] | None = None) -> list[Row]:
    """Flatten a model, a dict, or a list of either into table rows."""
    exclude = exclude or set()
    items = data if isinstance(data, list) else [data]
    rows = []
    for item in items:
        if isinstance(item, BaseModel):
            rows.append(item.model_dump(mode="json", exclude=exclude))
        else:
            rows.append({k: v for k, v in item.items() if k not in exclude})
    return rows


def format_cell(value: Any) -> str:
    if value is None:
        return "-"
    if isinstance(value, bool):
        return "yes" if value else "no"
    return str(value)


def print_output(
    data: Any,
    fmt: OutputFormat = OutputFormat.TABLE,
    columns: list[str] | None = None,
    title: str | None = None,
) -> None:
    """Print a model, a row, or a list of either in the requested format.

    Args:
        data: Pydantic models, dicts, or a list of either.
        fmt: Output format (table, json, csv).
        columns: Table/CSV columns in display order. Names no row carries are
            dropped. None shows every field. JSON always carries every field.
        title: Optional title for table output.
    """
    if fmt == OutputFormat.JSON:
        _write_json(to_jsonable(data))
        return

    rows = to_rows(data)
    if fmt == OutputFormat.CSV:
        _write_csv(rows, _pick_columns(rows, columns))
    else:
        _draw_table(rows, _pick_columns(rows, columns), title)


def print_detail(
    record: BaseModel,
    children: str,
    fmt: OutputFormat = OutputFormat.TABLE,
    columns: list[str] | None = None,
    child_columns: list[str] | None = None,
    child_title: str | None = None,
) -> None:
    """Print a record that nests a list, such as a book and its copies.

    JSON keeps the nesting. Table and CSV output print the record without the
    nested field, followed by the nested items as a second section.
    """
    if fmt == OutputFormat.JSON:
        _write_json(to_jsonable(record))
        return

    print_output(to_rows(record, exclude={children}), fmt, columns, title=getattr(record, "title", None))
    print_output(getattr(record, children), fmt, child_columns, title=child_title)


def _pick_columns(rows: list[Row], columns: list[str] | None) -> list[str]:
    if not rows:
        return list(columns or [])
    if columns is None:
        return list(rows[0].keys())
    return [col for col in columns if any(col in row for row in rows)]


def _write_json(data: Any) -> None:
    json.dump(data, sys.stdout, indent=2, default=str)
    sys.stdout.write("\n")


def _draw_table(rows: list[Row], columns: list[str], title: str | None) -> None:
    if not rows:
        console.print("[dim]No results.[/dim]")
        return

    table = Table(title=title, show_lines=False)
    for col in columns:
        table.add_column(col, overflow="fold")
    for row in rows:
        table.add_row(*[format_cell(row.get(col)) for col in columns])
    console.print(table)


def _write_csv(rows: list[Row], columns: list[str]) -> None:
    if not rows:
        return

    writer = csv.writer(sys.stdout)
    writer.writerow(columns)
    for row in rows:
        writer.writerow(["" if row.get(col) is None else row.get(col) for col in columns])
