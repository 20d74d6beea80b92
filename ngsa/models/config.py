from enum import Enum
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
from pydantic_core import ErrorDetails

from ..modules.secrets.errors import ConfigurationError


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class OutputFormat(str, Enum):
    COLORFUL = "colorful"
    PLAIN = "plain"
    JSON = "json"


class AppConfig(BaseModel):
    """Resolved startup configuration, built once by the entry point."""
    model_config = ConfigDict(frozen=True)

    in_memory: bool = False
    secrets_volume: str = "secrets"
    port: int = Field(default=8080, ge=1, le=65535)
    log_level: LogLevel = LogLevel.INFO
    output: OutputFormat = OutputFormat.COLORFUL
    dry_run: bool = False

    @model_validator(mode='after')
    def validate_secrets_source(self) -> 'AppConfig':
        """A secrets volume is required unless running in-memory."""
        if not self.in_memory and not self.secrets_volume.strip():
            raise ValueError("secrets_volume is required when not running in-memory")
        return self

    @classmethod
    def from_options(cls, **options: Any) -> 'AppConfig':
        """
        Build a config from CLI options.

        Raises:
            ConfigurationError: If any option is invalid
        """
        try:
            return cls.model_validate(options)
        except ValidationError as e:
            raise ConfigurationError(_build_validation_error_message(e.errors()))

    def to_display_dict(self) -> Dict[str, Any]:
        return {
            "in_memory": self.in_memory,
            "secrets_volume": "" if self.in_memory else self.secrets_volume,
            "port": self.port,
            "log_level": self.log_level.value,
            "output": self.output.value,
        }


def _build_validation_error_message(errors: List[ErrorDetails]) -> str:
    messages = []
    for error in errors:
        field_path = " -> ".join(str(loc) for loc in error['loc']) or "config"
        messages.append(f"Error in field '{field_path}': {error['msg']}")

    return "\n".join(messages)
