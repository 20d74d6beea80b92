import sys
from typing import Any, Dict
from .base import BaseLogger


class PlainLogger(BaseLogger):
    """Logger that outputs plain text, suitable for container log collectors."""

    def __init__(self, log_level: str = "INFO"):
        super().__init__(log_level)
        # Configure loguru for plain output
        self.logger.configure(
            handlers=[{
                "sink": sys.stdout,
                "format": "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {message}",
                "colorize": False,
                "level": log_level
            }]
        )

    def log_startup(self, version: str, database_name: str, port: int):
        self.logger.info(f"NGSA started (version {version})")
        self.logger.info(f"Database: {database_name}")
        self.logger.info(f"Listening on port {port}")

    def log_config(self, settings: Dict[str, Any]):
        self.logger.info("Configuration:")
        for key, value in settings.items():
            self.logger.info(f"  {key}: {value}")

    def log_error(self, message: str):
        self.logger.error(message)

    def log_warning(self, message: str):
        self.logger.warning(message)

    def log_info(self, message: str):
        self.logger.info(message)

    def log_debug(self, message: str):
        self.logger.debug(message)
