"""Structured error handling for agent-friendly output."""

from __future__ import annotations

import json
import sys

import httpx
from rich.console import Console

from oriole_books.exceptions import (
    ApiError,
    AuthFailureError,
    RefreshFailureError,
    SessionExpiredError,
)

console = Console(stderr=True)

# Actionable hints keyed by error substring
_ERROR_HINTS: list[tuple[str, str]] = [
    ("session expired", "Log in again with `oriole-books auth login`"),
    ("no refresh token", "Log in again with `oriole-books auth login`"),
    ("401", "Credentials were rejected. Run `oriole-books auth login`"),
    ("unauthorized", "Credentials were rejected. Run `oriole-books auth login`"),
    ("404", "Nothing found. Check the identifier, or the ISBN printed under the barcode"),
    ("not found", "Nothing found. Check the identifier, or the ISBN printed under the barcode"),
    ("unknown server", "Check config/servers.yaml or ORIOLE_BOOKS_SERVER"),
    ("timeout", "Request timed out. Try again or check network connectivity"),
    ("timed out", "Request timed out. Try again or check network connectivity"),
    ("connection", "Connection error. Check network connectivity"),
]


def _get_hint(error_message: str) -> str | None:
    """Match an error message to an actionable hint."""
    lower = error_message.lower()
    for pattern, hint in _ERROR_HINTS:
        if pattern.lower() in lower:
            return hint
    return None


def _error_code(error: Exception) -> str:
    if isinstance(error, SessionExpiredError):
        return "SESSION_EXPIRED"
    if isinstance(error, RefreshFailureError):
        return "REFRESH_FAILED"
    if isinstance(error, AuthFailureError):
        return "AUTH_ERROR"
    if isinstance(error, ApiError):
        if error.status_code == 404:
            return "NOT_FOUND"
        return "API_ERROR"
    if isinstance(error, httpx.TimeoutException):
        return "TIMEOUT"
    if isinstance(error, httpx.HTTPError):
        return "CONNECTION_ERROR"
    return "RUNTIME_ERROR"


def handle_error(error: Exception) -> None:
    """Handle an error with structured output to stdout and human-readable output to stderr.

    Outputs a JSON error object to stdout for agent consumption:
    {"error": true, "code": "SESSION_EXPIRED", "message": "...", "hint": "..."}

    Also prints a human-readable error to stderr.
    """
    message = str(error) or error.__class__.__name__
    hint = _get_hint(message)

    error_obj: dict[str, object] = {
        "error": True,
        "code": _error_code(error),
        "message": message,
    }
    if isinstance(error, ApiError):
        error_obj["status_code"] = error.status_code
    if hint:
        error_obj["hint"] = hint

    json.dump(error_obj, sys.stdout)
    sys.stdout.write("\n")

    # Human-readable to stderr
    console.print(f"[red]Error:[/red] {message}")
    if hint:
        console.print(f"[dim]Hint: {hint}[/dim]")
