"""Base API client for the Oriole Books API.

Handles bearer token injection, proactive renewal, and the single
refresh-and-replay on authentication failure.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

import httpx
from pydantic import ValidationError

from oriole_books.auth import DEVICE_ID_HEADER, AuthManager, error_detail
from oriole_books.config import Config
from oriole_books.exceptions import ApiError, AuthFailureError, RefreshFailureError, SessionExpiredError
from oriole_books.models.auth import Credential, ErrorResponse

logger = logging.getLogger(__name__)

UNAUTHORIZED_REASON = "Unauthorized"


class LibraryClient:
    """HTTP client for the Oriole Books API with JWT auth handling."""

    def __init__(
        self,
        config: Config,
        auth: AuthManager,
        verbose: bool = False,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self._auth = auth
        self._store = auth.store
        self._coordinator = auth.coordinator
        self._server = config.get_server()
        self._verbose = verbose
        self._http = httpx.AsyncClient(timeout=config.settings.timeout, transport=transport)

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: dict[str, Any] | None = None,
        authenticated: bool = True,
    ) -> httpx.Response:
        """Make an API request, renewing the session if the server rejects it.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE).
            path: API path (e.g. "/books/isbn/9780134685991").
            json: JSON request body.
            params: Query parameters.
            authenticated: Attach the bearer token and handle auth failures.

        Returns:
            The httpx.Response object.

        Raises:
            AuthFailureError: Still rejected after one refresh and replay.
            SessionExpiredError: The session could not be renewed; credentials
                have been cleared.
            ApiError: Any other non-success status.
        """
        url = self._server.base_url + path

        if authenticated:
            credential = self._store.get_access_credential()
            if credential is not None and self.should_preemptively_refresh(credential):
                logger.info("Access token expires soon, refreshing before request")
                await self._refresh()

        response = await self._send(method, url, json, params, authenticated)

        if self.is_auth_failure(response):
            if not authenticated:
                raise AuthFailureError(response.status_code, error_detail(response))

            current = self._store.get_access_credential()
            if current is not None and not self.is_request_authenticated_with(response.request, current):
                # Rejected token was already replaced by a refresh that finished meanwhile
                logger.info(f"Got {response.status_code} for {method} {path} with a replaced token, retrying...")
            else:
                logger.warning(f"Got {response.status_code} for {method} {path}, refreshing token and retrying...")
                await self._refresh()
            response = await self._send(method, url, json, params, authenticated)

            if self.is_auth_failure(response):
                raise AuthFailureError(response.status_code, error_detail(response))

        if response.status_code >= 400:
            raise ApiError(response.status_code, error_detail(response))

        return response

    async def get(self, path: str, **kwargs: Any) -> httpx.Response:
        """Convenience method for GET requests."""
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs: Any) -> httpx.Response:
        """Convenience method for POST requests."""
        return await self.request("POST", path, **kwargs)

    async def put(self, path: str, **kwargs: Any) -> httpx.Response:
        """Convenience method for PUT requests."""
        return await self.request("PUT", path, **kwargs)

    async def delete(self, path: str, **kwargs: Any) -> httpx.Response:
        """Convenience method for DELETE requests."""
        return await self.request("DELETE", path, **kwargs)

    def decorate(self, headers: dict[str, str]) -> dict[str, str]:
        """Attach the device id and, when a token is stored, the bearer header."""
        headers[DEVICE_ID_HEADER] = self._store.get_device_id()
        credential = self._store.get_access_credential()
        if credential is not None and credential.value:
            headers["Authorization"] = f"Bearer {credential.value}"
        return headers

    @staticmethod
    def is_auth_failure(response: httpx.Response) -> bool:
        """401, or an error body whose reason marks an authorization rejection."""
        if response.status_code == 401:
            return True
        if response.status_code < 400:
            return False
        try:
            body = ErrorResponse.model_validate(response.json())
        except (ValueError, ValidationError):
            return False
        return body.reason == UNAUTHORIZED_REASON

    @staticmethod
    def is_request_authenticated_with(request: httpx.Request, credential: Credential) -> bool:
        """Whether ``request`` went out carrying ``credential`` as its bearer token."""
        return request.headers.get("Authorization") == f"Bearer {credential.value}"

    def should_preemptively_refresh(self, credential: Credential, now: datetime | None = None) -> bool:
        return self._auth.requires_refresh(credential, now)

    async def _send(
        self,
        method: str,
        url: str,
        json: Any,
        params: dict[str, Any] | None,
        authenticated: bool,
    ) -> httpx.Response:
        headers = {"Content-Type": "application/json"}
        if authenticated:
            self.decorate(headers)
        else:
            headers[DEVICE_ID_HEADER] = self._store.get_device_id()

        if self._verbose:
            logger.info(f"{method} {url}")
            if json is not None:
                logger.info(f"Body: {json}")

        response = await self._http.request(method, url, headers=headers, json=json, params=params)

        if self._verbose:
            logger.info(f"Response: {response.status_code}")
        return response

    async def _refresh(self) -> Credential:
        return await self._coordinator.request_refresh(self._perform_refresh)

    async def _perform_refresh(self) -> Credential:
        """Run once per refresh cycle by whichever request arrived first."""
        try:
            return await self._auth.refresh()
        except RefreshFailureError as e:
            self._auth.expire_session()
            raise SessionExpiredError(f"Session expired: {e}") from e

    async def close(self) -> None:
        """Close the underlying HTTP clients."""
        await self._http.aclose()
        await self._auth.close()

    async def __aenter__(self) -> LibraryClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()
