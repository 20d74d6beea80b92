import os
import pytest
from unittest.mock import patch
from pydantic import ValidationError as PydanticValidationError

from ngsa.modules.secrets import (
    ConfigurationError,
    ValidationError,
    get_database_display_name,
    load_secrets,
)
from ngsa.modules.secrets.loader import SECRET_FILES, read_secret_file


def test_load_valid_volume(write_volume, valid_secrets):
    """Test loading a fully populated volume."""
    volume = write_volume(valid_secrets)

    secrets = load_secrets(volume)

    assert secrets.source_volume == volume
    assert secrets.database_server_url == "https://foo.documents.azure.com:443/"
    assert secrets.database_access_key.get_secret_value() == "k" * 64
    assert secrets.database_name == "imdb"
    assert secrets.collection_name == "movies"
    assert get_database_display_name(secrets.database_server_url) == "foo"


def test_values_are_trimmed(write_volume, valid_secrets):
    """Test that surrounding whitespace and newlines are stripped."""
    valid_secrets["CosmosDatabase"] = "  imdb\n"
    valid_secrets["CosmosUrl"] = "\nhttps://foo.documents.azure.com:443/ \n"
    volume = write_volume(valid_secrets)

    secrets = load_secrets(volume)

    assert secrets.database_name == "imdb"
    assert secrets.database_server_url == "https://foo.documents.azure.com:443/"


@pytest.mark.parametrize("missing", list(SECRET_FILES))
def test_missing_file_names_field(write_volume, valid_secrets, missing):
    """Test that a missing secret file fails validation naming that secret."""
    valid_secrets[missing] = None
    volume = write_volume(valid_secrets)

    with pytest.raises(ValidationError, match=missing) as exc_info:
        load_secrets(volume)

    assert exc_info.value.field == missing


@pytest.mark.parametrize("missing", list(SECRET_FILES))
def test_whitespace_only_file_is_empty(write_volume, valid_secrets, missing):
    """Test that an empty or whitespace file is treated like a missing one."""
    valid_secrets[missing] = "   \n"
    volume = write_volume(valid_secrets)

    with pytest.raises(ValidationError) as exc_info:
        load_secrets(volume)

    assert exc_info.value.field == missing
    assert str(exc_info.value) == f"{missing} cannot be empty"


@pytest.mark.parametrize("url", [
    "http://foo.documents.azure.com/",
    "ftp://foo.documents.azure.com/",
    "foo.documents.azure.com",
    "https//foo.documents.azure.com",
])
def test_url_requires_https(write_volume, valid_secrets, url):
    """Test that the server URL must use https even with the right domain."""
    valid_secrets["CosmosUrl"] = url
    volume = write_volume(valid_secrets)

    with pytest.raises(ValidationError, match="CosmosUrl") as exc_info:
        load_secrets(volume)

    assert exc_info.value.field == "CosmosUrl"


@pytest.mark.parametrize("url", [
    "https://foo.example.com/",
    "https://foo.documents.azure.net/",
    "https://documents.azure.com.example.com/",
])
def test_url_requires_domain_suffix(write_volume, valid_secrets, url):
    """Test that the server URL must target the managed database domain."""
    valid_secrets["CosmosUrl"] = url
    volume = write_volume(valid_secrets)

    with pytest.raises(ValidationError) as exc_info:
        load_secrets(volume)

    assert exc_info.value.field == "CosmosUrl"


def test_url_checks_are_case_insensitive(write_volume, valid_secrets):
    """Test that scheme and domain are matched case-insensitively."""
    valid_secrets["CosmosUrl"] = "HTTPS://Foo.Documents.Azure.COM:443/"
    volume = write_volume(valid_secrets)

    secrets = load_secrets(volume)

    assert secrets.database_server_url == "HTTPS://Foo.Documents.Azure.COM:443/"
    assert get_database_display_name(secrets.database_server_url) == "Foo"


@pytest.mark.parametrize("length", [1, 32, 63])
def test_short_key_fails(write_volume, valid_secrets, length):
    """Test that keys shorter than 64 characters are rejected without echoing the key."""
    key = "x" * length
    valid_secrets["CosmosKey"] = key
    volume = write_volume(valid_secrets)

    with pytest.raises(ValidationError) as exc_info:
        load_secrets(volume)

    assert exc_info.value.field == "CosmosKey"
    assert key not in str(exc_info.value)


@pytest.mark.parametrize("length", [64, 65, 88])
def test_key_length_boundary(write_volume, valid_secrets, length):
    """Test that keys of 64 characters or more are accepted."""
    valid_secrets["CosmosKey"] = "x" * length
    volume = write_volume(valid_secrets)

    secrets = load_secrets(volume)

    assert len(secrets.database_access_key.get_secret_value()) == length


def test_empty_checks_run_before_shape_checks(write_volume, valid_secrets):
    """Test that an empty collection is reported before a bad URL."""
    valid_secrets["CosmosCollection"] = None
    valid_secrets["CosmosUrl"] = "http://bad"
    volume = write_volume(valid_secrets)

    with pytest.raises(ValidationError) as exc_info:
        load_secrets(volume)

    assert exc_info.value.field == "CosmosCollection"


@pytest.mark.parametrize("volume", [None, "", "   "])
def test_empty_volume_path(volume):
    """Test that an empty volume path is a configuration error."""
    with pytest.raises(ConfigurationError, match="cannot be empty"):
        load_secrets(volume)


def test_volume_does_not_exist(tmp_path):
    """Test that a non-existent volume is a configuration error."""
    volume = str(tmp_path / "missing")

    with pytest.raises(ConfigurationError, match="does not exist"):
        load_secrets(volume)


def test_volume_is_a_file(tmp_path):
    """Test that a regular file is not accepted as a volume."""
    path = tmp_path / "secrets"
    path.write_text("not a directory")

    with pytest.raises(ConfigurationError, match="does not exist"):
        load_secrets(str(path))


def test_undecodable_secret_file(write_volume, valid_secrets):
    """Test that an unreadable secret file is a configuration error naming the file."""
    volume = write_volume(valid_secrets)
    with open(os.path.join(volume, "CosmosKey"), "wb") as f:
        f.write(b"\xff\xfe\xfa" * 30)

    with pytest.raises(ConfigurationError) as exc_info:
        load_secrets(volume)

    assert exc_info.value.filename == "CosmosKey"
    assert "CosmosKey" in str(exc_info.value)


def test_os_error_while_reading(write_volume, valid_secrets):
    """Test that I/O failures are reported as configuration errors."""
    volume = write_volume(valid_secrets)

    with patch("builtins.open", side_effect=PermissionError("Permission denied")):
        with pytest.raises(ConfigurationError, match="Permission denied") as exc_info:
            read_secret_file(volume, "CosmosUrl")

    assert exc_info.value.filename == "CosmosUrl"


def test_in_memory_does_not_touch_filesystem():
    """Test that in-memory mode returns the fixture without any filesystem access."""
    with patch("os.path.isdir") as isdir, patch("os.path.isfile") as isfile, patch("builtins.open") as open_:
        secrets = load_secrets("/does/not/exist", in_memory=True)

    isdir.assert_not_called()
    isfile.assert_not_called()
    open_.assert_not_called()
    assert secrets.database_name == "imdb"
    assert secrets.collection_name == "movies"
    assert secrets.source_volume == ""
    assert secrets.database_server_url == "in-memory"
    assert secrets.database_access_key.get_secret_value() == "in-memory"


def test_in_memory_ignores_empty_volume():
    """Test that in-memory mode does not require a volume."""
    secrets = load_secrets(None, in_memory=True)

    assert secrets.database_name == "imdb"
    assert get_database_display_name(secrets.database_server_url) == "in-memory"


def test_secrets_are_immutable(write_volume, valid_secrets):
    """Test that loaded secrets cannot be modified."""
    secrets = load_secrets(write_volume(valid_secrets))

    with pytest.raises(PydanticValidationError):
        secrets.database_name = "other"

    assert secrets.database_name == "imdb"


def test_key_is_masked_in_repr(write_volume, valid_secrets):
    """Test that the access key does not leak through repr."""
    secrets = load_secrets(write_volume(valid_secrets))

    assert "k" * 64 not in repr(secrets)
    assert "k" * 64 not in str(secrets)


@pytest.mark.parametrize("url,expected", [
    ("https://foo.documents.azure.com:443/", "foo"),
    ("HTTPS://bar.documents.azure.com/", "bar"),
    ("http://baz.documents.azure.com/", "baz"),
    ("https://nodots", "nodots"),
    ("in-memory", "in-memory"),
    (".leading.dot", ".leading.dot"),
])
def test_get_database_display_name(url, expected):
    """Test deriving the short server name used in logs."""
    assert get_database_display_name(url) == expected
