"""Web host construction and lifecycle."""

from .app import create_app
from .web_host import HostStartupError, WebHost, SHUTDOWN_TIMEOUT

__all__ = ['create_app', 'HostStartupError', 'WebHost', 'SHUTDOWN_TIMEOUT']
