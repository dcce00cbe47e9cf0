"""Test configuration and fixtures for s3-menu."""

from typing import Optional

import boto3
import pytest
from moto import mock_aws

from s3_menu.objectstorage import S3ClientConfig, S3ClientManager
from s3_menu.schemas import SessionConfig

REGION = "eu-west-1"
BUCKET = "test-bucket"


class ScriptedLineReader:
    """Line reader that replays a fixed list of input lines."""

    def __init__(self, lines):
        self.lines = list(lines)
        self.reads = 0

    def read_line(self) -> Optional[str]:
        if not self.lines:
            return None
        self.reads += 1
        return self.lines.pop(0).strip()


@pytest.fixture
def aws_credentials(monkeypatch):
    """Fake AWS credentials so nothing can reach a real account."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", REGION)
    monkeypatch.delenv("AWS_SESSION_TOKEN", raising=False)
    monkeypatch.delenv("AWS_PROFILE", raising=False)
    monkeypatch.delenv("AWS_REGION", raising=False)
    monkeypatch.delenv("AWS_ENDPOINT_URL", raising=False)


@pytest.fixture
def s3(aws_credentials):
    """Mocked S3 client with an empty test bucket."""
    with mock_aws():
        client = boto3.client("s3", region_name=REGION)
        client.create_bucket(
            Bucket=BUCKET, CreateBucketConfiguration={"LocationConstraint": REGION}
        )
        yield client


@pytest.fixture
def client_config():
    return S3ClientConfig(
        access_key_id="testing", secret_access_key="testing", region_name=REGION
    )


@pytest.fixture
def manager(s3, client_config):
    """S3 client manager talking to the mocked store."""
    return S3ClientManager(client_config)


@pytest.fixture
def make_session_config(client_config):
    """Build a SessionConfig for the test bucket with optional overrides."""

    def _make(**overrides):
        values = {"bucket": BUCKET, "client": client_config}
        values.update(overrides)
        return SessionConfig(**values)

    return _make


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Run the test from an empty temporary working directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path
