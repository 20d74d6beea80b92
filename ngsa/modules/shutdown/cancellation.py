"""Cooperative cancellation shared between the signal handler and long-running loops."""

import asyncio
from asyncio import AbstractEventLoop
import threading
from typing import Optional


def _running_loop() -> Optional[AbstractEventLoop]:
    try:
        return asyncio.get_running_loop()
    except RuntimeError:
        return None


class CancellationToken:
    """A one-way flag that can be cancelled once and observed many times.

    cancel() may be called from any thread; waiters are woken on the loop they wait on.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._cancelled = False
        self._event = asyncio.Event()
        self._loop: Optional[AbstractEventLoop] = _running_loop()

    @property
    def is_cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> bool:
        """
        Request cancellation.

        Returns:
            True if this call cancelled the token, False if it was already cancelled
        """
        with self._lock:
            if self._cancelled:
                return False
            self._cancelled = True
            loop = self._loop

        if loop is None or _running_loop() is loop:
            self._event.set()
        elif not loop.is_closed():
            # asyncio.Event is not thread-safe
            loop.call_soon_threadsafe(self._event.set)
        return True

    async def wait(self) -> None:
        """Wait until cancellation is requested."""
        with self._lock:
            if self._cancelled:
                return
            self._loop = asyncio.get_running_loop()
        await self._event.wait()
