"""Loading and validation of the database secrets mounted into the container."""

from .errors import SecretsError, ConfigurationError, ValidationError
from .loader import load_secrets, validate_secrets, get_database_display_name, in_memory_secrets

__all__ = [
    'SecretsError',
    'ConfigurationError',
    'ValidationError',
    'load_secrets',
    'validate_secrets',
    'get_database_display_name',
    'in_memory_secrets',
]
