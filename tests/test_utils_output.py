"""Tests for utils/output.py — model rendering as JSON, CSV and tables."""
import json
from datetime import datetime, timezone

from oriole_books.models.auth import Credential
from oriole_books.models.books import BookDetail, BookInstance
from oriole_books.utils.output import OutputFormat, format_cell, print_detail, print_output, to_jsonable, to_rows

STAMP = datetime(2025, 11, 1, 10, 0, tzinfo=timezone.utc)
BOOK_ID = "7c9e6679-7425-40de-944b-e07fc1f90ae7"


def _book(instances=()):
    return BookDetail(
        id=BOOK_ID, title="Effective Java", author="Joshua Bloch", isbn="9780134685991",
        created_at=STAMP, updated_at=STAMP, instances=list(instances),
    )


def _copy(number):
    return BookInstance(
        id="16fd2706-8baf-433b-82eb-8c7fada847da", book_id=BOOK_ID, inventory_number=number,
        storage_location="Shelf B1", status="available", created_at=STAMP, updated_at=STAMP,
    )


# ── to_rows / to_jsonable ────────────────────────────────────────────

def test_to_rows_wraps_single_model():
    rows = to_rows(Credential(value="t", expiration=datetime(2030, 1, 1, tzinfo=timezone.utc)))
    assert len(rows) == 1
    assert rows[0]["expiration"].startswith("2030-01-01")


def test_to_rows_mixed_list_with_exclude():
    rows = to_rows([{"a": 1, "b": 2}, Credential(value="t", expiration=datetime(2030, 1, 1))], exclude={"b", "expiration"})
    assert rows == [{"a": 1}, {"value": "t"}]


def test_to_jsonable_keeps_nesting():
    data = to_jsonable(_book([_copy("INV-1")]))
    assert data["instances"][0]["inventory_number"] == "INV-1"
    assert data["id"] == BOOK_ID


# ── format_cell ──────────────────────────────────────────────────────

def test_format_cell():
    assert format_cell(None) == "-"
    assert format_cell(True) == "yes"
    assert format_cell(False) == "no"
    assert format_cell(3) == "3"


# ── print_output ─────────────────────────────────────────────────────

def test_json_single_model_stays_object(capsys):
    print_output(Credential(value="t", expiration=datetime(2030, 1, 1)), OutputFormat.JSON)
    assert json.loads(capsys.readouterr().out)["value"] == "t"


def test_json_list(capsys):
    print_output([{"id": "1"}, {"id": "2"}], OutputFormat.JSON, columns=["id"])
    assert json.loads(capsys.readouterr().out) == [{"id": "1"}, {"id": "2"}]


def test_csv_drops_columns_no_row_has(capsys):
    rows = [{"isbn": "9780134685991", "title": "Effective Java", "extra": 1}]
    print_output(rows, OutputFormat.CSV, columns=["isbn", "instance_count", "title"])
    lines = capsys.readouterr().out.strip().splitlines()
    assert lines == ["isbn,title", "9780134685991,Effective Java"]


def test_csv_blank_for_none(capsys):
    print_output([{"isbn": "9780134685991", "genre": None}], OutputFormat.CSV)
    assert capsys.readouterr().out.strip().splitlines()[1] == "9780134685991,"


def test_csv_empty(capsys):
    print_output([], OutputFormat.CSV, columns=["isbn"])
    assert capsys.readouterr().out == ""


def test_table_does_not_touch_stdout(capsys):
    print_output([{"a": 1}], OutputFormat.TABLE)
    assert capsys.readouterr().out == ""


# ── print_detail ─────────────────────────────────────────────────────

def test_detail_json_keeps_children(capsys):
    print_detail(_book([_copy("INV-1"), _copy("INV-2")]), "instances", OutputFormat.JSON)
    data = json.loads(capsys.readouterr().out)
    assert [c["inventory_number"] for c in data["instances"]] == ["INV-1", "INV-2"]


def test_detail_csv_prints_record_then_children(capsys):
    print_detail(
        _book([_copy("INV-1")]), "instances", OutputFormat.CSV,
        columns=["title", "isbn", "instance_count"], child_columns=["inventory_number", "status"],
    )
    lines = capsys.readouterr().out.strip().splitlines()
    assert lines == [
        "title,isbn",
        "Effective Java,9780134685991",
        "inventory_number,status",
        "INV-1,available",
    ]
