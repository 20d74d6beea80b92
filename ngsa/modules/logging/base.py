from abc import ABC, abstractmethod
from typing import Any, Dict
from loguru import logger


class BaseLogger(ABC):
    """Abstract base class for loggers."""

    def __init__(self, log_level: str = "INFO"):
        self.logger = logger
        self.log_level = log_level

    @abstractmethod
    def log_startup(self, version: str, database_name: str, port: int):
        """Log that the host started serving."""
        pass

    @abstractmethod
    def log_config(self, settings: Dict[str, Any]):
        """Log the resolved configuration (dry run)."""
        pass

    @abstractmethod
    def log_error(self, message: str):
        """Log an error message."""
        pass

    @abstractmethod
    def log_warning(self, message: str):
        """Log a warning message."""
        pass

    @abstractmethod
    def log_info(self, message: str):
        """Log an info message."""
        pass

    @abstractmethod
    def log_debug(self, message: str):
        """Log a debug message."""
        pass
