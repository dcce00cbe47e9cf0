"""Tests for credential loading and S3 client construction."""

import pytest

from s3_menu.core.exceptions import ConfigurationError
from s3_menu.objectstorage.clients import (
    DEFAULT_REGION,
    S3ClientConfig,
    S3ClientManager,
    load_client_config,
)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every AWS variable the loader looks at."""
    for name in (
        "AWS_ACCESS_KEY_ID",
        "AWS_SECRET_ACCESS_KEY",
        "AWS_SESSION_TOKEN",
        "AWS_REGION",
        "AWS_DEFAULT_REGION",
        "AWS_ENDPOINT_URL",
    ):
        monkeypatch.delenv(name, raising=False)


class TestLoadClientConfig:
    """Test resolving credentials from the environment and .env files."""

    def test_reads_process_environment(self, clean_env, monkeypatch, tmp_path):
        monkeypatch.setenv("AWS_ACCESS_KEY_ID", "AKIAENV")
        monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "secret-env")

        config = load_client_config(env_file=tmp_path / "missing.env")

        assert config.access_key_id == "AKIAENV"
        assert config.secret_access_key == "secret-env"
        assert config.region_name == DEFAULT_REGION == "eu-west-1"
        assert config.endpoint_url is None

    def test_reads_env_file(self, clean_env, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text(
            "AWS_ACCESS_KEY_ID=AKIAFILE\n"
            "AWS_SECRET_ACCESS_KEY=secret-file\n"
            "AWS_SESSION_TOKEN=token-file\n"
        )

        config = load_client_config(env_file=env_file)

        assert config.access_key_id == "AKIAFILE"
        assert config.secret_access_key == "secret-file"
        assert config.session_token == "token-file"

    def test_environment_wins_over_env_file(self, clean_env, monkeypatch, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text(
            "AWS_ACCESS_KEY_ID=AKIAFILE\nAWS_SECRET_ACCESS_KEY=secret-file\n"
        )
        monkeypatch.setenv("AWS_ACCESS_KEY_ID", "AKIAENV")

        config = load_client_config(env_file=env_file)

        assert config.access_key_id == "AKIAENV"
        assert config.secret_access_key == "secret-file"

    def test_region_from_environment(self, clean_env, monkeypatch):
        monkeypatch.setenv("AWS_ACCESS_KEY_ID", "AKIAENV")
        monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "secret-env")
        monkeypatch.setenv("AWS_REGION", "ap-southeast-2")

        config = load_client_config(env_file=None)

        assert config.region_name == "ap-southeast-2"

    def test_explicit_arguments_override_environment(self, clean_env, monkeypatch):
        monkeypatch.setenv("AWS_ACCESS_KEY_ID", "AKIAENV")
        monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "secret-env")
        monkeypatch.setenv("AWS_REGION", "ap-southeast-2")
        monkeypatch.setenv("AWS_ENDPOINT_URL", "http://env:9000")

        config = load_client_config(
            env_file=None, region_name="us-west-2", endpoint_url="http://minio:9000"
        )

        assert config.region_name == "us-west-2"
        assert config.endpoint_url == "http://minio:9000"

    def test_missing_credentials_raise(self, clean_env, tmp_path):
        with pytest.raises(ConfigurationError) as exc_info:
            load_client_config(env_file=tmp_path / "missing.env")

        assert "AWS_ACCESS_KEY_ID" in str(exc_info.value)
        assert "AWS_SECRET_ACCESS_KEY" in str(exc_info.value)

    def test_missing_secret_only(self, clean_env, monkeypatch):
        monkeypatch.setenv("AWS_ACCESS_KEY_ID", "AKIAENV")

        with pytest.raises(ConfigurationError, match="AWS_SECRET_ACCESS_KEY"):
            load_client_config(env_file=None)

    def test_profile_does_not_require_keys(self, clean_env):
        config = load_client_config(env_file=None, aws_profile="research")

        assert config.aws_profile == "research"
        assert config.access_key_id is None


class TestS3ClientManager:
    """Test lazy client construction."""

    def test_client_is_created_once(self, aws_credentials):
        manager = S3ClientManager(
            S3ClientConfig(access_key_id="testing", secret_access_key="testing")
        )

        assert manager.client is manager.client
        assert manager.client.meta.region_name == "eu-west-1"

    def test_custom_endpoint(self, aws_credentials):
        manager = S3ClientManager(
            S3ClientConfig(
                access_key_id="testing",
                secret_access_key="testing",
                endpoint_url="http://localhost:9000",
            )
        )

        assert manager.client.meta.endpoint_url == "http://localhost:9000"

    def test_unknown_profile_raises_configuration_error(
        self, aws_credentials, monkeypatch, tmp_path
    ):
        monkeypatch.setenv("AWS_CONFIG_FILE", str(tmp_path / "config"))
        monkeypatch.setenv("AWS_SHARED_CREDENTIALS_FILE", str(tmp_path / "credentials"))
        manager = S3ClientManager(S3ClientConfig(aws_profile="does-not-exist"))

        with pytest.raises(ConfigurationError, match="Failed to create S3 client"):
            manager.client

    def test_config_is_immutable(self):
        config = S3ClientConfig(access_key_id="a", secret_access_key="b")

        with pytest.raises(Exception):
            config.region_name = "us-east-1"  # type: ignore[misc]
