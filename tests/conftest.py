import pytest
from typing import Callable, Dict, Optional

from tests.utils.test_logger import create_test_logger

VALID_URL = "https://foo.documents.azure.com:443/"
VALID_KEY = "k" * 64


@pytest.fixture
def test_logger():
    """Create a test logger instance."""
    return create_test_logger()


@pytest.fixture
def valid_secrets() -> Dict[str, str]:
    """Contents of a valid secrets volume, keyed by file name."""
    return {
        "CosmosUrl": VALID_URL,
        "CosmosKey": VALID_KEY,
        "CosmosDatabase": "imdb",
        "CosmosCollection": "movies",
    }


@pytest.fixture
def write_volume(tmp_path) -> Callable[..., str]:
    """Write a secrets volume; entries set to None are left out."""
    def _write(files: Dict[str, Optional[str]]) -> str:
        volume = tmp_path / "secrets"
        volume.mkdir(exist_ok=True)
        for name, content in files.items():
            if content is not None:
                (volume / name).write_text(content, encoding="utf-8")
        return str(volume)
    return _write
