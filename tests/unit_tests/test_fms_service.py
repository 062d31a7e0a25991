"""Unit tests for FmsService validation, presigning and URL rewriting."""
from unittest.mock import MagicMock
from urllib.parse import parse_qs, urlparse

import pytest

from directory_api.config.settings import Settings
from directory_api.errors import FmsValidationError
from directory_api.services import ALLOWED_MIME_TYPES, MAX_FILE_SIZE_BYTES, FmsService
from tests.consts import (
    LOCALSTACK_INTERNAL_ENDPOINT,
    LOCALSTACK_PUBLIC_ENDPOINT,
    ONE_MB,
    TEST_BUCKET_NAME,
)


@pytest.fixture
def mock_s3_client() -> MagicMock:
    mock_client = MagicMock()
    mock_client.generate_presigned_url.return_value = "https://s3.example.com/signed"
    return mock_client


@pytest.fixture
def fms(mock_s3_client) -> FmsService:
    return FmsService(Settings(s3_bucket_name=TEST_BUCKET_NAME), s3_client=mock_s3_client)


def test_allow_list_is_exactly_four_image_types():
    assert ALLOWED_MIME_TYPES == ("image/jpeg", "image/jpg", "image/png", "image/webp")
    assert MAX_FILE_SIZE_BYTES == 5 * ONE_MB


@pytest.mark.parametrize("content_type", ALLOWED_MIME_TYPES)
def test_validate_content_type_accepts_allowed(fms, content_type):
    fms.validate_content_type(content_type)


@pytest.mark.parametrize("content_type", ["image/gif", "application/pdf", "IMAGE/JPEG", ""])
def test_validate_content_type_rejects_others(fms, content_type):
    with pytest.raises(FmsValidationError) as exc_info:
        fms.validate_content_type(content_type)
    assert exc_info.value.message == (
        f"Invalid file type: {content_type}. Allowed types: image/jpeg, image/jpg, image/png, image/webp"
    )


@pytest.mark.parametrize("file_size", [0, -1, None])
def test_validate_file_size_rejects_non_positive(fms, file_size):
    with pytest.raises(FmsValidationError, match="File size must be a positive number"):
        fms.validate_file_size(file_size)


def test_validate_file_size_accepts_ceiling_exactly(fms):
    fms.validate_file_size(MAX_FILE_SIZE_BYTES)
    fms.validate_file_size(1)


def test_validate_file_size_rejects_over_ceiling(fms):
    with pytest.raises(FmsValidationError) as exc_info:
        fms.validate_file_size(6 * ONE_MB)
    assert exc_info.value.message == "File size (6.00MB) exceeds maximum allowed size (5MB)"


def test_upload_url_binds_type_and_length(fms, mock_s3_client):
    url = fms.get_presigned_upload_url("profile/john123.jpg", "image/jpeg", 102400)

    assert url == "https://s3.example.com/signed"
    mock_s3_client.generate_presigned_url.assert_called_once_with(
        "put_object",
        Params={
            "Bucket": TEST_BUCKET_NAME,
            "Key": "profile/john123.jpg",
            "ContentType": "image/jpeg",
            "ContentLength": 102400,
        },
        ExpiresIn=1800,
    )


def test_upload_url_not_signed_when_invalid(fms, mock_s3_client):
    with pytest.raises(FmsValidationError):
        fms.get_presigned_upload_url("profile/a.gif", "image/gif", 100)
    with pytest.raises(FmsValidationError):
        fms.get_presigned_upload_url("profile/a.png", "image/png", MAX_FILE_SIZE_BYTES + 1)
    mock_s3_client.generate_presigned_url.assert_not_called()


def test_content_type_checked_before_size(fms):
    with pytest.raises(FmsValidationError, match="Invalid file type"):
        fms.get_presigned_upload_url("profile/a.gif", "image/gif", 0)


def test_view_url_uses_short_expiry(fms, mock_s3_client):
    url = fms.get_presigned_view_url("profile/john123.jpg")

    assert url == "https://s3.example.com/signed"
    mock_s3_client.generate_presigned_url.assert_called_once_with(
        "get_object",
        Params={"Bucket": TEST_BUCKET_NAME, "Key": "profile/john123.jpg"},
        ExpiresIn=300,
    )


def test_delete_object(fms, mock_s3_client):
    fms.delete_object("profile/john123.jpg")
    mock_s3_client.delete_object.assert_called_once_with(Bucket=TEST_BUCKET_NAME, Key="profile/john123.jpg")


def test_upload_constraints(fms):
    assert fms.get_upload_constraints() == {
        "allowed_mime_types": list(ALLOWED_MIME_TYPES),
        "max_file_size_bytes": 5242880,
        "max_file_size_mb": 5,
    }


def test_configured_ceiling_is_used(mock_s3_client):
    fms = FmsService(Settings(max_file_size_bytes=ONE_MB), s3_client=mock_s3_client)
    with pytest.raises(FmsValidationError) as exc_info:
        fms.validate_file_size(ONE_MB + ONE_MB // 2)
    assert exc_info.value.message == "File size (1.50MB) exceeds maximum allowed size (1MB)"


class TestPublicUrlRewrite:
    def test_no_endpoint_leaves_url_alone(self, fms):
        url = "https://test-bucket.s3.amazonaws.com/profile/a.jpg?X-Amz-Signature=abc"
        assert fms.to_public_url(url) == url

    def test_internal_endpoint_replaced_with_public(self, mock_s3_client):
        fms = FmsService(
            Settings(s3_endpoint=LOCALSTACK_INTERNAL_ENDPOINT, s3_public_endpoint=LOCALSTACK_PUBLIC_ENDPOINT),
            s3_client=mock_s3_client,
        )
        url = f"{LOCALSTACK_INTERNAL_ENDPOINT}/demo-bucket/profile/a.jpg?X-Amz-Signature=abc"
        assert fms.to_public_url(url) == f"{LOCALSTACK_PUBLIC_ENDPOINT}/demo-bucket/profile/a.jpg?X-Amz-Signature=abc"

    def test_public_endpoint_defaults_to_internal(self, mock_s3_client):
        fms = FmsService(Settings(s3_endpoint=LOCALSTACK_INTERNAL_ENDPOINT), s3_client=mock_s3_client)
        url = f"{LOCALSTACK_INTERNAL_ENDPOINT}/demo-bucket/profile/a.jpg"
        assert fms.to_public_url(url) == url

    def test_signed_localstack_url_points_at_public_host(self):
        """A real boto3 client signs against the internal host with path-style addressing."""
        fms = FmsService(
            Settings(
                s3_bucket_name="demo-bucket",
                s3_endpoint=LOCALSTACK_INTERNAL_ENDPOINT,
                s3_public_endpoint=LOCALSTACK_PUBLIC_ENDPOINT,
            )
        )

        url = fms.get_presigned_upload_url("profile/john123.jpg", "image/png", 2048)

        parsed = urlparse(url)
        assert f"{parsed.scheme}://{parsed.netloc}" == LOCALSTACK_PUBLIC_ENDPOINT
        assert parsed.path == "/demo-bucket/profile/john123.jpg"
        query = parse_qs(parsed.query)
        assert query["X-Amz-Expires"] == ["1800"]
        assert "X-Amz-Signature" in query
