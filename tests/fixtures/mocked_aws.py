"""AWS fixtures: a moto-backed S3 with the test bucket already created."""
import boto3
import pytest
from botocore.config import Config
from moto import mock_aws

from directory_api.config.settings import get_settings
from tests.consts import DIRECTORY_ENV_VARS, TEST_BUCKET_NAME, TEST_REGION


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Isolate every test from the shell's settings and from cached Settings."""
    for var in DIRECTORY_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", TEST_REGION)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def mocked_aws():
    with mock_aws():
        s3_client = boto3.client("s3", region_name=TEST_REGION)
        s3_client.create_bucket(Bucket=TEST_BUCKET_NAME)
        yield


@pytest.fixture
def s3_client(mocked_aws):
    # Same signer as the app's client, so presigned URLs carry X-Amz-* parameters
    return boto3.client("s3", region_name=TEST_REGION, config=Config(signature_version="s3v4"))
