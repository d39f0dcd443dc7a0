"""CLI tests for books command group."""
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
from typer.testing import CliRunner

from oriole_books.commands.books_cmd import app
from oriole_books.exceptions import ApiError
from oriole_books.models.books import Book, BookDetail

runner = CliRunner()

STAMP = "2025-11-01T10:00:00Z"
BOOK = {
    "id": "7c9e6679-7425-40de-944b-e07fc1f90ae7", "title": "Effective Java",
    "author": "Joshua Bloch", "isbn": "9780134685991",
    "created_at": STAMP, "updated_at": STAMP,
}


def _mock_build(svc):
    client = MagicMock()
    client.close = AsyncMock()
    return client, svc


# ── list ─────────────────────────────────────────────────────────────

def test_list_books():
    svc = MagicMock()
    svc.list = AsyncMock(return_value=[Book(**BOOK, instance_count=2)])

    with patch("oriole_books.commands.books_cmd._build_client", return_value=_mock_build(svc)):
        result = runner.invoke(app, ["list", "--limit", "5", "--output", "json"])
    assert result.exit_code == 0
    assert "Effective Java" in result.stdout
    svc.list.assert_awaited_once_with(skip=None, limit=5)


# ── isbn ─────────────────────────────────────────────────────────────

def test_isbn_not_found():
    svc = MagicMock()
    svc.get_by_isbn = AsyncMock(side_effect=ApiError(404, "Book not found"))

    with patch("oriole_books.commands.books_cmd._build_client", return_value=_mock_build(svc)):
        result = runner.invoke(app, ["isbn", "9780000000002"])
    assert result.exit_code == 1
    assert "NOT_FOUND" in result.stdout


def test_isbn_connection_error():
    svc = MagicMock()
    svc.get_by_isbn = AsyncMock(side_effect=httpx.ConnectError("refused"))

    with patch("oriole_books.commands.books_cmd._build_client", return_value=_mock_build(svc)):
        result = runner.invoke(app, ["isbn", "9780134685991"])
    assert result.exit_code == 1
    assert "CONNECTION_ERROR" in result.stdout


# ── scan ─────────────────────────────────────────────────────────────

def test_scan_looks_up_book():
    svc = MagicMock()
    svc.lookup_scanned = AsyncMock(return_value=BookDetail(**BOOK, instances=[]))
    client, _ = build = _mock_build(svc)

    with patch("oriole_books.commands.books_cmd._build_client", return_value=build):
        result = runner.invoke(app, ["scan", "978-0-13-468599-0", "--output", "json"])
    assert result.exit_code == 0
    assert '"isbn": "9780134685991"' in result.stdout
    svc.lookup_scanned.assert_awaited_once_with("978-0-13-468599-0")
    client.close.assert_awaited_once()


def test_isbn_csv_prints_book_then_copies():
    svc = MagicMock()
    svc.get_by_isbn = AsyncMock(return_value=BookDetail(**BOOK, instances=[{
        "id": "16fd2706-8baf-433b-82eb-8c7fada847da", "book_id": BOOK["id"],
        "inventory_number": "INV-1", "storage_location": "Shelf B1", "status": "available",
        "created_at": STAMP, "updated_at": STAMP,
    }]))

    with patch("oriole_books.commands.books_cmd._build_client", return_value=_mock_build(svc)):
        result = runner.invoke(app, ["isbn", "9780134685991", "--output", "csv"])
    assert result.exit_code == 0
    assert "id,title,author,isbn,genre\n" in result.stdout.replace("\r\n", "\n")
    assert "id,inventory_number,storage_location,status\n" in result.stdout.replace("\r\n", "\n")
    assert "INV-1,Shelf B1,available" in result.stdout
