import sys
from typing import Any, Dict
from .base import BaseLogger


class JsonLogger(BaseLogger):
    """Logger that outputs JSON for machine parsing."""

    def __init__(self, log_level: str = "INFO"):
        super().__init__(log_level)
        # Configure loguru for JSON output
        self.logger.configure(
            handlers=[{
                "sink": sys.stdout,
                "serialize": True,  # JSON output
                "format": "{time} | {level} | {message}",
                "level": log_level
            }]
        )

    def log_startup(self, version: str, database_name: str, port: int):
        self.logger.bind(
            type="startup",
            version=version,
            database=database_name,
            port=port
        ).info("NGSA started")

    def log_config(self, settings: Dict[str, Any]):
        self.logger.bind(type="config", **settings).info("Configuration")

    def log_error(self, message: str):
        self.logger.bind(type="error").error(message)

    def log_warning(self, message: str):
        self.logger.bind(type="warning").warning(message)

    def log_info(self, message: str):
        self.logger.bind(type="info").info(message)

    def log_debug(self, message: str):
        self.logger.bind(type="debug").debug(message)
