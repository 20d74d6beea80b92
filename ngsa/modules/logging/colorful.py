import click
from typing import Any, Dict
from .base import BaseLogger
import sys


class ColorfulLogger(BaseLogger):
    """Logger that outputs colorful text for interactive use."""

    def __init__(self, log_level: str = "INFO"):
        super().__init__(log_level)
        # Configure loguru for colored output
        self.logger.configure(
            handlers=[{
                "sink": sys.stdout,
                "colorize": True,
                "format": "<cyan>{time:YYYY-MM-DD HH:mm:ss.SSS}</cyan> | "
                         "<level>{level: <8}</level> | "
                         "<white>{message}</white>",
                "level": log_level
            }]
        )

    def log_startup(self, version: str, database_name: str, port: int):
        self.logger.info(click.style(f"NGSA started (version {version})", fg="green", bold=True))
        self.logger.info(click.style(f"Database: {database_name}", fg="white"))
        self.logger.info(click.style(f"Listening on port {port}", fg="white"))

    def log_config(self, settings: Dict[str, Any]):
        self.logger.info(click.style("Configuration:", fg="blue", bold=True))
        for key, value in settings.items():
            self.logger.info(click.style(f"  {key}: {value}", fg="white"))

    def log_error(self, message: str):
        self.logger.error(click.style(message, fg="red", bold=True))

    def log_warning(self, message: str):
        self.logger.warning(click.style(message, fg="yellow", bold=True))

    def log_info(self, message: str):
        self.logger.info(click.style(message, fg="white"))

    def log_debug(self, message: str):
        self.logger.debug(click.style(message, fg="blue"))
