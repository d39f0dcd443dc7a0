"""Single-flight coordination of access token refresh.

Concurrent requests that find their token rejected all need a new one, but
the refresh endpoint must only be called once: refresh tokens may rotate, so a
second call with the old one would fail. The first caller becomes the driver
and starts the refresh; everyone who arrives while it runs waits on the same
outcome.

State is confined to the event loop. ``add_waiter`` and ``complete_refresh``
contain no ``await``, so each runs to completion without another coroutine
observing a half-updated state.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Union

from oriole_books.exceptions import RefreshFailureError
from oriole_books.models.auth import Credential

logger = logging.getLogger(__name__)

RefreshResult = Union[Credential, BaseException]


@dataclass
class RefreshState:
    in_progress: bool = False
    waiters: list[asyncio.Future] = field(default_factory=list)


class RefreshCoordinator:
    """Collapses concurrent refresh demands into one underlying refresh."""

    def __init__(self) -> None:
        self._state = RefreshState()
        self._task: asyncio.Task | None = None

    @property
    def is_refreshing(self) -> bool:
        return self._state.in_progress

    @property
    def waiter_count(self) -> int:
        return len(self._state.waiters)

    def add_waiter(self) -> tuple[asyncio.Future, bool]:
        """Enqueue a waiter and report whether a refresh was already running.

        Returns the caller's future and ``already_refreshing``. A ``False``
        flag makes the caller the driver: it must perform the refresh and call
        ``complete_refresh`` when done.
        """
        waiter = asyncio.get_running_loop().create_future()
        self._state.waiters.append(waiter)

        if self._state.in_progress:
            return waiter, True

        self._state.in_progress = True
        return waiter, False

    def complete_refresh(self, result: RefreshResult) -> None:
        """Reset to idle and resolve every pending waiter with ``result``."""
        waiters = self._state.waiters
        self._state = RefreshState()

        for waiter in waiters:
            # Cancelled callers have stopped listening
            if waiter.done():
                continue
            if isinstance(result, BaseException):
                waiter.set_exception(result)
            else:
                waiter.set_result(result)

    async def request_refresh(self, refresh: Callable[[], Awaitable[Credential]]) -> Credential:
        """Wait for a fresh credential, starting ``refresh`` only if none is running.

        The refresh runs in its own task, so cancelling any caller (the driver
        included) abandons only that caller's wait.
        """
        waiter, already_refreshing = self.add_waiter()

        if already_refreshing:
            logger.debug("Refresh already in flight, waiting for its result")
        else:
            logger.info("Starting token refresh")
            self._task = asyncio.ensure_future(self._drive(refresh))

        return await waiter

    async def _drive(self, refresh: Callable[[], Awaitable[Credential]]) -> None:
        try:
            credential = await refresh()
        except asyncio.CancelledError:
            self.complete_refresh(RefreshFailureError("Token refresh was cancelled"))
            raise
        except Exception as e:
            logger.warning(f"Token refresh failed: {e}")
            self.complete_refresh(e)
        else:
            self.complete_refresh(credential)
        finally:
            self._task = None
