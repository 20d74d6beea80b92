"""uvicorn-backed web host with a time-bounded graceful stop."""

import asyncio
from asyncio import Task
import contextlib
from typing import Any, Generator, Optional

import uvicorn

from ..logging import BaseLogger

SHUTDOWN_TIMEOUT = 10.0
STARTUP_POLL_INTERVAL = 0.01


class HostStartupError(Exception):
    """Raised when the server stops before it starts accepting connections."""


class _Server(uvicorn.Server):
    """uvicorn server that leaves signal handling to the ShutdownCoordinator."""

    @contextlib.contextmanager
    def capture_signals(self) -> Generator[None, None, None]:
        yield


class WebHost:
    """Runs an ASGI app and stops it on request within a bounded window."""

    def __init__(
        self,
        app: Any,
        port: int,
        logger: BaseLogger,
        log_level: str = "info",
        shutdown_timeout: float = SHUTDOWN_TIMEOUT,
        server: Optional[uvicorn.Server] = None
    ):
        """
        Initialize the web host.

        Args:
            app: ASGI application to serve
            port: Port to listen on (all interfaces)
            logger: Logger instance
            log_level: uvicorn log level
            shutdown_timeout: Seconds to wait for in-flight requests before forcing the stop
            server: Pre-built server, mainly for tests
        """
        self.logger = logger
        self.port = port
        self.shutdown_timeout = shutdown_timeout
        if server is None:
            config = uvicorn.Config(
                app,
                host="0.0.0.0",
                port=port,
                log_level=log_level.lower(),
                timeout_graceful_shutdown=int(shutdown_timeout),
            )
            server = _Server(config)
        self.server = server
        self._serve_task: Optional[Task[None]] = None

    @property
    def is_running(self) -> bool:
        return self._serve_task is not None and not self._serve_task.done()

    async def start(self) -> None:
        """
        Start serving in the background and wait until the server is accepting connections.

        Raises:
            HostStartupError: If the server exits before it has started, e.g. the port is in use
        """
        if self._serve_task is not None:
            raise RuntimeError("Host already started")
        self._serve_task = asyncio.create_task(self._serve())

        while not self.server.started and not self._serve_task.done():
            await asyncio.sleep(STARTUP_POLL_INTERVAL)

        if self._serve_task.done():
            if self._serve_task.cancelled():
                raise HostStartupError(f"Server on port {self.port} was cancelled before it started")
            error = self._serve_task.exception()
            if error is not None:
                raise HostStartupError(f"Server failed to start on port {self.port}: {str(error)}") from error
            raise HostStartupError(f"Server on port {self.port} stopped before it started")

    async def _serve(self) -> None:
        try:
            await self.server.serve()
        except SystemExit as e:
            # uvicorn calls sys.exit() when it cannot bind
            raise HostStartupError(f"server exited with status {e.code}") from e

    async def stop(self) -> None:
        """Ask the server to finish in-flight work; force it down after shutdown_timeout."""
        if self._serve_task is None or self._serve_task.done():
            return

        self.server.should_exit = True
        try:
            await asyncio.wait_for(asyncio.shield(self._serve_task), timeout=self.shutdown_timeout)
        except asyncio.TimeoutError:
            self.logger.log_warning(
                f"Host did not stop within {self.shutdown_timeout} seconds, forcing shutdown"
            )
            self.server.force_exit = True
            self._serve_task.cancel()

    async def wait_closed(self) -> None:
        """Wait until the server task has finished, however it ended."""
        if self._serve_task is not None:
            await asyncio.wait({self._serve_task})
