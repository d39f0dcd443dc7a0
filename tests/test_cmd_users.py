"""CLI tests for users and recommendations command groups."""
from unittest.mock import AsyncMock, MagicMock, patch

from typer.testing import CliRunner

from oriole_books.commands.recommendations_cmd import app as recommendations_app
from oriole_books.commands.users_cmd import app
from oriole_books.exceptions import SessionExpiredError
from oriole_books.models.books import BookDetail
from oriole_books.models.users import User

runner = CliRunner()

STAMP = "2025-11-01T10:00:00Z"
USER = {
    "id": "0f8fad5b-d9cb-469f-a165-70867728950e", "full_name": "Ann Reader",
    "email": "ann@example.com", "barcode": "A-0001", "created_at": STAMP, "updated_at": STAMP,
}


def _mock_build(svc):
    client = MagicMock()
    client.close = AsyncMock()
    return client, svc


# ── users ────────────────────────────────────────────────────────────

def test_me_shows_library_card():
    svc = MagicMock()
    svc.me = AsyncMock(return_value=User(**USER))

    with patch("oriole_books.commands.users_cmd._build_client", return_value=_mock_build(svc)):
        result = runner.invoke(app, ["me", "--output", "json"])
    assert result.exit_code == 0
    assert '"barcode": "A-0001"' in result.stdout


def test_me_session_expired():
    svc = MagicMock()
    svc.me = AsyncMock(side_effect=SessionExpiredError("Session expired: HTTP 401"))

    with patch("oriole_books.commands.users_cmd._build_client", return_value=_mock_build(svc)):
        result = runner.invoke(app, ["me"])
    assert result.exit_code == 1
    assert "SESSION_EXPIRED" in result.stdout


def test_update_sends_only_given_fields():
    svc = MagicMock()
    svc.update_me = AsyncMock(return_value=User(**{**USER, "full_name": "Ann B. Reader"}))

    with patch("oriole_books.commands.users_cmd._build_client", return_value=_mock_build(svc)):
        result = runner.invoke(app, ["update", "--full-name", "Ann B. Reader", "--output", "json"])
    assert result.exit_code == 0
    update = svc.update_me.call_args[0][0]
    assert update.model_dump(exclude_none=True) == {"full_name": "Ann B. Reader"}


def test_update_without_fields():
    with patch("oriole_books.commands.users_cmd._build_client") as build:
        result = runner.invoke(app, ["update"])
    assert result.exit_code == 1
    build.assert_not_called()


# ── recommendations ──────────────────────────────────────────────────

def test_recommendations_list():
    svc = MagicMock()
    svc.list = AsyncMock(return_value=[BookDetail(
        id="7c9e6679-7425-40de-944b-e07fc1f90ae7", title="Effective Java", author="Joshua Bloch",
        isbn="9780134685991", created_at=STAMP, updated_at=STAMP,
    )])

    with patch("oriole_books.commands.recommendations_cmd._build_client", return_value=_mock_build(svc)):
        result = runner.invoke(recommendations_app, ["--limit", "3", "--output", "json"])
    assert result.exit_code == 0
    assert "Effective Java" in result.stdout
    svc.list.assert_awaited_once_with(skip=None, limit=3)
