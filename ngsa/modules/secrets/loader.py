import os
from typing import Dict, Optional

from ...models.secrets import Secrets
from .errors import ConfigurationError, ValidationError

COSMOS_COLLECTION = "CosmosCollection"
COSMOS_DATABASE = "CosmosDatabase"
COSMOS_KEY = "CosmosKey"
COSMOS_URL = "CosmosUrl"

# secret file name -> Secrets field
SECRET_FILES: Dict[str, str] = {
    COSMOS_COLLECTION: "collection_name",
    COSMOS_DATABASE: "database_name",
    COSMOS_KEY: "database_access_key",
    COSMOS_URL: "database_server_url",
}

DATABASE_DOMAIN_SUFFIX = ".documents.azure.com"
MIN_KEY_LENGTH = 64
IN_MEMORY = "in-memory"


def in_memory_secrets() -> Secrets:
    """Fixture used when running without a secrets volume."""
    return Secrets(
        source_volume="",
        database_server_url=IN_MEMORY,
        database_access_key=IN_MEMORY,
        database_name="imdb",
        collection_name="movies",
    )


def load_secrets(volume: Optional[str], in_memory: bool = False) -> Secrets:
    """
    Load secrets from a key-per-file volume, or return the in-memory fixture.

    Args:
        volume: Directory holding one file per secret
        in_memory: Skip the volume and use the fixture

    Returns:
        Secrets: The validated secrets

    Raises:
        ConfigurationError: If the volume is missing or a secret file cannot be read
        ValidationError: If a secret is empty or malformed
    """
    if in_memory:
        return in_memory_secrets()

    return get_secrets_from_volume(volume)


def get_secrets_from_volume(volume: Optional[str]) -> Secrets:
    if volume is None or not volume.strip():
        raise ConfigurationError("Secrets volume cannot be empty")

    if not os.path.isdir(volume):
        raise ConfigurationError(f"Volume '{volume}' does not exist")

    values = {
        field: read_secret_file(volume, name)
        for name, field in SECRET_FILES.items()
    }
    validate_secrets(values)

    return Secrets(source_volume=volume, **values)


def read_secret_file(volume: str, name: str) -> str:
    """Read and trim a single secret; a missing file reads as an empty string."""
    path = os.path.join(volume, name)
    if not os.path.isfile(path):
        return ""

    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read().strip()
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"Unable to read secret '{name}' from volume '{volume}': {str(e)}", filename=name) from e


def validate_secrets(values: Dict[str, str]) -> None:
    """
    Validate raw secret values keyed by Secrets field name.

    Raises:
        ValidationError: Naming the first secret that fails
    """
    for name in (COSMOS_COLLECTION, COSMOS_DATABASE, COSMOS_KEY, COSMOS_URL):
        value = values.get(SECRET_FILES[name], "")
        if not value or not value.strip():
            raise ValidationError(name, f"{name} cannot be empty")

    server_url = values[SECRET_FILES[COSMOS_URL]]
    if not server_url.lower().startswith("https://") or DATABASE_DOMAIN_SUFFIX not in server_url.lower():
        raise ValidationError(COSMOS_URL, f"Invalid value for {COSMOS_URL}: {server_url}")

    if len(values[SECRET_FILES[COSMOS_KEY]]) < MIN_KEY_LENGTH:
        raise ValidationError(COSMOS_KEY, f"Invalid value for {COSMOS_KEY}: must be at least {MIN_KEY_LENGTH} characters")


def get_database_display_name(server_url: str) -> str:
    """Short server name for logging, e.g. https://foo.documents.azure.com:443/ -> foo."""
    name = server_url
    for scheme in ("https://", "http://"):
        if name.lower().startswith(scheme):
            name = name[len(scheme):]
            break

    ndx = name.find(".")
    if ndx > 0:
        name = name[:ndx]

    return name
