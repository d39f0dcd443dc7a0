"""CLI tests for wallet command group."""
from datetime import datetime
from unittest.mock import AsyncMock, MagicMock, patch

from typer.testing import CliRunner

from oriole_books.commands.wallet_cmd import app
from oriole_books.exceptions import ApiError
from oriole_books.models.wallet import WalletMembership

runner = CliRunner()

STAMP = "2025-11-01T10:00:00Z"
MEMBERSHIP = WalletMembership(
    id="16fd2706-8baf-433b-82eb-8c7fada847da", user_id="0f8fad5b-d9cb-469f-a165-70867728950e",
    pass_id="pass-1", pass_type_id="pass.ru.oriole", default_url="https://wallet.test/p/pass-1",
    created_at=STAMP, updated_at=STAMP,
)


def _mock_build(svc):
    client = MagicMock()
    client.close = AsyncMock()
    return client, svc


def test_show_membership():
    svc = MagicMock()
    svc.get_mine = AsyncMock(return_value=MEMBERSHIP)

    with patch("oriole_books.commands.wallet_cmd._build_client", return_value=_mock_build(svc)):
        result = runner.invoke(app, ["show", "--output", "json"])
    assert result.exit_code == 0
    assert "https://wallet.test/p/pass-1" in result.stdout


def test_show_without_membership():
    svc = MagicMock()
    svc.get_mine = AsyncMock(side_effect=ApiError(404, "Membership not found"))

    with patch("oriole_books.commands.wallet_cmd._build_client", return_value=_mock_build(svc)):
        result = runner.invoke(app, ["show"])
    assert result.exit_code == 1
    assert "NOT_FOUND" in result.stdout


def test_create_membership():
    svc = MagicMock()
    svc.create = AsyncMock(return_value=MEMBERSHIP)
    client, _ = build = _mock_build(svc)

    with patch("oriole_books.commands.wallet_cmd._build_client", return_value=build):
        result = runner.invoke(app, [
            "create", "--name", "Ann Reader", "--number", "A-0001",
            "--expires", "2026-12-31", "--output", "json",
        ])
    assert result.exit_code == 0
    request = svc.create.call_args[0][0]
    assert request.member_number == "A-0001"
    assert request.expires_at == datetime(2026, 12, 31)
    assert request.barcode_value is None
    client.close.assert_awaited_once()


def test_update_membership():
    svc = MagicMock()
    svc.update_mine = AsyncMock(return_value=MEMBERSHIP)

    with patch("oriole_books.commands.wallet_cmd._build_client", return_value=_mock_build(svc)):
        result = runner.invoke(app, ["update", "--name", "Ann", "--number", "A-0002", "--barcode", "A0002"])
    assert result.exit_code == 0
    assert svc.update_mine.call_args[0][0].barcode_value == "A0002"


def test_delete_membership():
    svc = MagicMock()
    svc.delete_mine = AsyncMock(return_value=None)

    with patch("oriole_books.commands.wallet_cmd._build_client", return_value=_mock_build(svc)):
        result = runner.invoke(app, ["delete", "--yes"])
    assert result.exit_code == 0
    svc.delete_mine.assert_awaited_once()


def test_delete_aborted_without_confirmation():
    with patch("oriole_books.commands.wallet_cmd._build_client") as build:
        result = runner.invoke(app, ["delete"], input="n\n")
    assert result.exit_code == 1
    build.assert_not_called()
