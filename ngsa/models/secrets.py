from pydantic import BaseModel, ConfigDict, SecretStr


class Secrets(BaseModel):
    """Database credentials read from the secrets volume.

    Instances are frozen; the loader only hands out values that passed validation.
    """
    model_config = ConfigDict(frozen=True)

    source_volume: str = ""
    database_server_url: str
    database_access_key: SecretStr
    database_name: str
    collection_name: str
