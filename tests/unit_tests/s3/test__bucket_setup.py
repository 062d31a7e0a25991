import boto3
import pytest
from moto import mock_aws

from directory_api.s3.bucket_setup import (
    BROWSER_UPLOAD_CORS_RULES,
    apply_browser_cors,
    bucket_exists,
    ensure_bucket,
)
from tests.consts import TEST_BUCKET_NAME


def test_bucket_exists(s3_client):
    assert bucket_exists(TEST_BUCKET_NAME, s3_client=s3_client) is True
    assert bucket_exists("no-such-bucket", s3_client=s3_client) is False


def test_ensure_bucket_is_idempotent(s3_client):
    assert ensure_bucket("fresh-bucket", "us-east-1", s3_client=s3_client) is True
    assert ensure_bucket("fresh-bucket", "us-east-1", s3_client=s3_client) is False
    assert ensure_bucket(TEST_BUCKET_NAME, "us-east-1", s3_client=s3_client) is False


@pytest.mark.parametrize("region", ["eu-west-1", "us-east-2"])
def test_ensure_bucket_outside_us_east_1(region):
    with mock_aws():
        s3_client = boto3.client("s3", region_name=region)
        assert ensure_bucket("regional-bucket", region, s3_client=s3_client) is True

        location = s3_client.get_bucket_location(Bucket="regional-bucket")["LocationConstraint"]
        assert location == region


def test_apply_browser_cors(s3_client):
    apply_browser_cors(TEST_BUCKET_NAME, s3_client=s3_client)

    rules = s3_client.get_bucket_cors(Bucket=TEST_BUCKET_NAME)["CORSRules"]
    assert len(rules) == 1
    rule = rules[0]
    assert rule["AllowedOrigins"] == ["*"]
    assert sorted(rule["AllowedMethods"]) == sorted(BROWSER_UPLOAD_CORS_RULES[0]["AllowedMethods"])
    assert rule["ExposeHeaders"] == ["ETag"]
    assert rule["MaxAgeSeconds"] == 3000
