"""Shutdown coordination for the web host."""

from .cancellation import CancellationToken
from .coordinator import ShutdownCoordinator, ShutdownState, StoppableHost

__all__ = ['CancellationToken', 'ShutdownCoordinator', 'ShutdownState', 'StoppableHost']
