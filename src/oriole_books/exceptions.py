"""Exception types raised by the Oriole Books client."""

from __future__ import annotations


class OrioleBooksError(RuntimeError):
    """Base class for client errors."""


class ApiError(OrioleBooksError):
    """The server answered with a non-success status."""

    def __init__(self, status_code: int, reason: str) -> None:
        super().__init__(f"API error (HTTP {status_code}): {reason}")
        self.status_code = status_code
        self.reason = reason


class AuthFailureError(ApiError):
    """A request was still rejected for authentication reasons after refresh-and-retry."""


class RefreshFailureError(OrioleBooksError):
    """The refresh endpoint rejected the refresh credential or could not be reached."""


class SessionExpiredError(RefreshFailureError):
    """Credentials were cleared; the user must log in again."""
