"""JWT authentication for the Oriole Books API.

Handles login, logout, token refresh, and session state notifications.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Callable

import httpx
from pydantic import ValidationError

from oriole_books.config import Config
from oriole_books.credentials import CredentialStore
from oriole_books.exceptions import ApiError, RefreshFailureError
from oriole_books.models.auth import (
    Credential,
    LoginRequest,
    RefreshRequest,
    RefreshResponse,
    RegisterRequest,
    RegisterResponse,
    TokenResponse,
    TokenStatus,
)
from oriole_books.refresh import RefreshCoordinator

logger = logging.getLogger(__name__)

# Login responses carry no expiry; treat the token as long-lived
LOGIN_TOKEN_LIFETIME = timedelta(days=365)

DEVICE_ID_HEADER = "Device-Id"


def error_detail(response: httpx.Response) -> str:
    """Best human-readable reason from an error response."""
    detail = response.text
    try:
        body = response.json()
    except ValueError:
        return detail
    if isinstance(body, dict):
        detail = body.get("reason") or body.get("detail") or body.get("message") or detail
    return str(detail)


class AuthManager:
    """Manages the JWT session for the Oriole Books API."""

    def __init__(
        self,
        config: Config,
        store: CredentialStore,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self._store = store
        self._server = config.get_server()
        self._refresh_lead = timedelta(minutes=config.settings.refresh_lead_minutes)
        self._http = httpx.AsyncClient(timeout=config.settings.timeout, transport=transport)
        self._listeners: list[Callable[[bool], None]] = []
        self.coordinator = RefreshCoordinator()

    @property
    def store(self) -> CredentialStore:
        return self._store

    @property
    def refresh_lead(self) -> timedelta:
        return self._refresh_lead

    # ── Session listeners ────────────────────────────────────────────

    def subscribe(self, listener: Callable[[bool], None]) -> None:
        """Register a callback receiving True on login and False on logout or expiry."""
        self._listeners.append(listener)

    def _notify(self, logged_in: bool) -> None:
        for listener in list(self._listeners):
            listener(logged_in)

    # ── Login / logout ───────────────────────────────────────────────

    async def login(self, email: str, password: str) -> TokenResponse:
        """Log in with email and password and store the access token."""
        body = LoginRequest(email=email, password=password).model_dump()
        response = await self._post("/auth/login", json=body)
        token = TokenResponse(**response.json())
        self._save_login_token(token)
        return token

    async def login_token(
        self,
        username: str,
        password: str,
        scope: str = "",
        client_id: str = "",
        client_secret: str = "",
    ) -> TokenResponse:
        """Log in through the OAuth2 password grant form endpoint."""
        response = await self._post(
            "/auth/token",
            data={
                "grant_type": "password",
                "username": username,
                "password": password,
                "scope": scope,
                "client_id": client_id,
                "client_secret": client_secret,
            },
        )
        token = TokenResponse(**response.json())
        self._save_login_token(token)
        return token

    async def register(self, request: RegisterRequest) -> RegisterResponse:
        response = await self._post("/auth/register", json=request.model_dump(exclude_none=True))
        return RegisterResponse(**response.json())

    def logout(self) -> None:
        """Forget stored credentials and notify listeners."""
        self._store.clear()
        self._notify(False)

    def expire_session(self) -> None:
        """Terminal refresh failure: clear credentials so the user must log in again."""
        logger.error("Session expired, clearing stored credentials")
        self._store.clear()
        self._notify(False)

    def _save_login_token(self, token: TokenResponse) -> None:
        expiration = datetime.now(timezone.utc) + LOGIN_TOKEN_LIFETIME
        self._store.set_access_credential(Credential(value=token.access_token, expiration=expiration))
        self._store.set_refresh_credential(None)
        self._notify(True)

    # ── Refresh ──────────────────────────────────────────────────────

    def requires_refresh(self, credential: Credential | None, now: datetime | None = None) -> bool:
        """True when the credential expires within the refresh lead time."""
        if credential is None or not credential.value:
            return False
        now = now or datetime.now(timezone.utc)
        return credential.expiration <= now + self._refresh_lead

    async def refresh(self) -> Credential:
        """Exchange the stored refresh token for a new access token.

        Stores the new credentials on success.

        Raises:
            RefreshFailureError: No refresh token is stored, the endpoint
                rejected it, or the endpoint could not be reached.
        """
        refresh_token = self._store.get_refresh_credential()
        if refresh_token is None:
            raise RefreshFailureError("No refresh token found")

        access = self._store.get_access_credential()
        headers = {
            "Authorization": f"Bearer {refresh_token.value}",
            DEVICE_ID_HEADER: self._store.get_device_id(),
        }
        body = RefreshRequest(token=access.value if access else "").model_dump()

        try:
            response = await self._http.post(
                self._server.base_url + self._server.refresh_path,
                json=body,
                headers=headers,
            )
        except httpx.HTTPError as e:
            raise RefreshFailureError(f"Token refresh failed: {e}") from e

        if not 200 <= response.status_code < 300:
            raise RefreshFailureError(
                f"Token refresh failed (HTTP {response.status_code}): {error_detail(response)}"
            )

        try:
            result = RefreshResponse(**response.json())
        except (ValueError, TypeError, ValidationError) as e:
            raise RefreshFailureError(f"Token refresh returned an unreadable body: {e}") from e

        self._store.set_access_credential(result.access_token)
        if result.refresh_token is not None:
            self._store.set_refresh_credential(result.refresh_token)
        logger.info("Access token refreshed")
        return result.access_token

    # ── Status ───────────────────────────────────────────────────────

    def get_status(self) -> TokenStatus:
        """Get the current token status."""
        credential = self._store.get_access_credential()
        if credential is None:
            return TokenStatus(has_token=False, is_expired=True)

        now = datetime.now(timezone.utc)
        is_expired = credential.is_expired(now)
        seconds_remaining = None
        if not is_expired:
            seconds_remaining = int((credential.expiration - now).total_seconds())

        return TokenStatus(
            has_token=True,
            is_expired=is_expired,
            requires_refresh=self.requires_refresh(credential, now),
            expires_at=credential.expiration,
            seconds_remaining=seconds_remaining,
        )

    async def _post(self, path: str, **kwargs: Any) -> httpx.Response:
        headers = {DEVICE_ID_HEADER: self._store.get_device_id()}
        response = await self._http.post(self._server.base_url + path, headers=headers, **kwargs)
        if response.status_code >= 400:
            raise ApiError(response.status_code, error_detail(response))
        return response

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        await self._http.aclose()
