"""Application entry command."""

from .commands import create_app_command

__all__ = ['create_app_command']
