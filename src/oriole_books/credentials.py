"""Credential storage.

A store holds the current access credential, the refresh credential that
renews it, and a per-device identifier. Stores are passed explicitly to the
client and auth service so tests can substitute an in-memory one.
"""

from __future__ import annotations

import json
import logging
import os
import uuid
from pathlib import Path

from pydantic import ValidationError

from oriole_books.models.auth import Credential

logger = logging.getLogger(__name__)

ACCESS_KEY = "access_jwt"
REFRESH_KEY = "refresh_jwt"
DEVICE_ID_KEY = "device_id"


class CredentialStore:
    """Base store: subclasses implement _read/_write/_remove for raw string values."""

    def _read(self, key: str) -> str | None:
        raise NotImplementedError

    def _write(self, key: str, value: str) -> None:
        raise NotImplementedError

    def _remove(self, key: str) -> None:
        raise NotImplementedError

    def _get_credential(self, key: str) -> Credential | None:
        raw = self._read(key)
        if raw is None:
            return None
        try:
            return Credential.model_validate_json(raw)
        except ValidationError:
            logger.warning(f"Discarding unreadable credential entry '{key}'")
            return None

    def _set_credential(self, key: str, credential: Credential | None) -> None:
        if credential is None:
            self._remove(key)
        else:
            self._write(key, credential.model_dump_json())

    def get_access_credential(self) -> Credential | None:
        return self._get_credential(ACCESS_KEY)

    def set_access_credential(self, credential: Credential | None) -> None:
        self._set_credential(ACCESS_KEY, credential)

    def get_refresh_credential(self) -> Credential | None:
        return self._get_credential(REFRESH_KEY)

    def set_refresh_credential(self, credential: Credential | None) -> None:
        self._set_credential(REFRESH_KEY, credential)

    def get_device_id(self) -> str:
        """Return the device identifier, generating and saving one on first use."""
        device_id = self._read(DEVICE_ID_KEY)
        if not device_id:
            device_id = str(uuid.uuid4()).upper()
            self._write(DEVICE_ID_KEY, device_id)
        return device_id

    def clear(self) -> None:
        """Forget the session. The device identifier survives."""
        self._remove(ACCESS_KEY)
        self._remove(REFRESH_KEY)


class MemoryCredentialStore(CredentialStore):
    """Process-local store."""

    def __init__(self) -> None:
        self._values: dict[str, str] = {}

    def _read(self, key: str) -> str | None:
        return self._values.get(key)

    def _write(self, key: str, value: str) -> None:
        self._values[key] = value

    def _remove(self, key: str) -> None:
        self._values.pop(key, None)


class FileCredentialStore(CredentialStore):
    """Stores each entry as a small JSON file readable only by the owner."""

    def __init__(self, directory: str | Path) -> None:
        self._dir = Path(directory).expanduser()

    def _path(self, key: str) -> Path:
        return self._dir / f"{key}.json"

    def _read(self, key: str) -> str | None:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            with open(path) as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Could not read {path}: {e}")
            return None
        value = data.get("value") if isinstance(data, dict) else None
        return value if isinstance(value, str) else None

    def _write(self, key: str, value: str) -> None:
        self._dir.mkdir(parents=True, exist_ok=True)
        path = self._path(key)
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w") as f:
            json.dump({"value": value}, f)

    def _remove(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)
