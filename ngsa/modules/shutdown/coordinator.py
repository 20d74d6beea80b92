"""Shutdown coordinator that stops the web host and exits the process on SIGINT/SIGTERM."""

import asyncio
from asyncio import AbstractEventLoop, Task
import os
import signal
import sys
import threading
from enum import Enum
from typing import Any, Callable, Dict, Optional, Protocol, Union
import types

from ..logging import BaseLogger
from .cancellation import CancellationToken

# Type for signal handlers
SignalHandlerType = Union[Callable[[int, Optional[types.FrameType]], Any], int, None]

SHUTDOWN_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class StoppableHost(Protocol):
    async def stop(self) -> None:
        ...


class ShutdownState(str, Enum):
    ARMED = "armed"
    CANCELLING = "cancelling"
    STOPPED = "stopped"


def exit_process(status: int) -> None:
    """Flush output and terminate immediately, regardless of lingering threads or tasks."""
    for stream in (sys.stdout, sys.stderr):
        try:
            stream.flush()
        except Exception:
            pass
    os._exit(status)


class ShutdownCoordinator:
    """Coordinates graceful shutdown of the web host."""

    def __init__(
        self,
        host: StoppableHost,
        logger: BaseLogger,
        cancellation: Optional[CancellationToken] = None,
        exit_process: Callable[[int], None] = exit_process
    ):
        """
        Initialize the shutdown coordinator.

        Args:
            host: Running host; its stop() is expected to enforce its own timeout
            logger: Logger instance for logging shutdown events
            cancellation: Token to cancel on shutdown; a new one is created if omitted
            exit_process: Called with the exit status once the host has stopped
        """
        self.host = host
        self.logger = logger
        self.cancellation = cancellation or CancellationToken()
        self._exit_process = exit_process
        self._state = ShutdownState.ARMED
        self._state_lock = threading.Lock()
        self._shutdown_task: Optional[Task[None]] = None
        self._active_loop: Optional[AbstractEventLoop] = None
        self._loop_handlers = False
        self._original_handlers: Dict[int, SignalHandlerType] = {}

    @property
    def state(self) -> ShutdownState:
        return self._state

    @property
    def is_shutting_down(self) -> bool:
        """Check if shutdown is in progress."""
        return self._state != ShutdownState.ARMED

    def setup_signal_handlers(self, loop: Optional[AbstractEventLoop] = None) -> CancellationToken:
        """
        Install SIGINT/SIGTERM handlers on the running event loop.
        This should be called from the main thread before the host starts serving.

        Returns:
            The cancellation token cancelled when shutdown begins
        """
        self._active_loop = loop or asyncio.get_running_loop()

        try:
            for sig in SHUTDOWN_SIGNALS:
                self._active_loop.add_signal_handler(sig, self.request_shutdown, sig)
            self._loop_handlers = True
        except NotImplementedError:
            # Event loops without add_signal_handler (Windows)
            for sig in SHUTDOWN_SIGNALS:
                self._original_handlers[sig] = signal.getsignal(sig)
                signal.signal(sig, self._handle_signal)

        return self.cancellation

    def restore_signal_handlers(self) -> None:
        """Restore original signal handlers."""
        if self._loop_handlers and self._active_loop and not self._active_loop.is_closed():
            for sig in SHUTDOWN_SIGNALS:
                self._active_loop.remove_signal_handler(sig)
            self._loop_handlers = False

        for sig, handler in self._original_handlers.items():
            if handler is not None:
                signal.signal(sig, handler)
        self._original_handlers.clear()

    def _handle_signal(self, sig_num: int, frame: Optional[types.FrameType]) -> None:
        """Plain signal handler; hands the request over to the event loop."""
        if self._active_loop:
            self._active_loop.call_soon_threadsafe(self.request_shutdown, sig_num)

    def request_shutdown(self, sig_num: Optional[int] = None) -> bool:
        """
        Begin the shutdown sequence. Must be called on the event loop.

        Args:
            sig_num: The signal that triggered shutdown, if any

        Returns:
            True if this call started the shutdown, False if one is already running
        """
        with self._state_lock:
            if self._state != ShutdownState.ARMED:
                return False
            self._state = ShutdownState.CANCELLING

        loop = self._active_loop or asyncio.get_running_loop()
        self._shutdown_task = loop.create_task(self._shutdown(sig_num))
        return True

    async def _shutdown(self, sig_num: Optional[int]) -> None:
        try:
            try:
                reason = f" ({signal.Signals(sig_num).name})" if sig_num is not None else ""
                self.logger.log_info(f"Shutting Down ...{reason}")
            except Exception:
                pass

            self.cancellation.cancel()

            try:
                await self.host.stop()
            except Exception as e:
                try:
                    self.logger.log_error(f"Error stopping host: {str(e)}")
                except Exception:
                    pass
        finally:
            self._state = ShutdownState.STOPPED
            self._exit_process(0)

    async def wait_for_shutdown(self) -> None:
        """Wait until shutdown has been requested."""
        await self.cancellation.wait()

    async def join(self) -> None:
        """Wait for a running shutdown sequence to finish; returns at once if none was requested."""
        if self._shutdown_task is not None:
            await asyncio.wait({self._shutdown_task})
