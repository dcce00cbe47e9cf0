"""Tests for session configuration schemas."""

import pytest
from pydantic import ValidationError

from s3_menu.objectstorage import S3ClientConfig
from s3_menu.schemas import CommandKind, SessionConfig


@pytest.fixture
def client():
    return S3ClientConfig(access_key_id="key", secret_access_key="secret")


class TestSessionConfig:
    """Test the per-run session configuration."""

    def test_defaults(self, client):
        config = SessionConfig(bucket="bucket", client=client)

        assert config.display_unit == "bytes"
        assert config.on_empty == "continue"
        assert config.commands == frozenset(CommandKind) - {CommandKind.INVALID}

    def test_list_and_exit_always_enabled(self, client):
        config = SessionConfig(
            bucket="bucket", client=client, commands=frozenset({CommandKind.UPLOAD})
        )

        assert config.commands == {
            CommandKind.UPLOAD,
            CommandKind.LIST,
            CommandKind.EXIT,
        }

    def test_commands_from_strings(self, client):
        config = SessionConfig(bucket="bucket", client=client, commands=["download"])

        assert CommandKind.DOWNLOAD in config.commands
        assert CommandKind.DELETE not in config.commands

    def test_invalid_is_not_a_command(self, client):
        with pytest.raises(ValidationError):
            SessionConfig(bucket="bucket", client=client, commands=["invalid"])

    def test_empty_bucket_name_rejected(self, client):
        with pytest.raises(ValidationError):
            SessionConfig(bucket="", client=client)

    def test_invalid_display_unit(self, client):
        with pytest.raises(ValidationError):
            SessionConfig(bucket="bucket", client=client, display_unit="gigabytes")

    def test_bucket_is_immutable(self, client):
        config = SessionConfig(bucket="bucket", client=client)

        with pytest.raises(ValidationError):
            config.bucket = "other"  # type: ignore[misc]

    def test_extra_fields_forbidden(self, client):
        with pytest.raises(ValidationError):
            SessionConfig(bucket="bucket", client=client, region="us-east-1")
