from typing import Optional


class SecretsError(Exception):
    """Base class for startup secret/configuration failures."""


class ConfigurationError(SecretsError):
    """Raised when the secrets volume or application configuration is unusable."""

    def __init__(self, message: str, filename: Optional[str] = None):
        self.filename = filename
        super().__init__(message)


class ValidationError(SecretsError):
    """Raised when a required secret is empty or fails its shape check."""

    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(message)
