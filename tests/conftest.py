"""Shared fixtures for the oriole-books test suite."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest

from oriole_books.config import Config, ServerProfile, Settings
from oriole_books.credentials import MemoryCredentialStore
from oriole_books.models.auth import Credential

BASE_URL = "https://library.test/api"


@pytest.fixture
def fake_settings() -> Settings:
    return Settings(
        server="test",
        credentials_dir="./test-credentials",
        refresh_lead_minutes=58,
        timeout=5.0,
    )


@pytest.fixture
def fake_servers() -> dict[str, ServerProfile]:
    return {
        "test": ServerProfile(base_url=BASE_URL, refresh_path="/auth/refresh"),
        "staging": ServerProfile(base_url="https://staging.library.test/api"),
    }


@pytest.fixture
def fake_config(fake_settings, fake_servers) -> Config:
    return Config(settings=fake_settings, servers=fake_servers)


@pytest.fixture
def store() -> MemoryCredentialStore:
    return MemoryCredentialStore()


@pytest.fixture
def make_credential():
    """Build a credential expiring the given number of minutes from now."""
    def _make(value: str, minutes: float = 120) -> Credential:
        return Credential(
            value=value,
            expiration=datetime.now(timezone.utc) + timedelta(minutes=minutes),
        )
    return _make


@pytest.fixture
def mock_client():
    """MagicMock standing in for LibraryClient."""
    client = MagicMock()
    client.get = AsyncMock()
    client.post = AsyncMock()
    client.put = AsyncMock()
    client.delete = AsyncMock()
    client.close = AsyncMock()
    return client
