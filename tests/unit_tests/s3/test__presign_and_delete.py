from urllib.parse import parse_qs, urlparse

import pytest
from botocore.exceptions import ClientError

from directory_api.s3.delete_objects import delete_s3_object
from directory_api.s3.presign import generate_presigned_get_url, generate_presigned_put_url
from tests.consts import TEST_BUCKET_NAME


def test_generate_presigned_put_url(s3_client):
    url = generate_presigned_put_url(
        bucket_name=TEST_BUCKET_NAME,
        object_key="profile/ada.png",
        content_type="image/png",
        content_length=4096,
        expires_in=1800,
        s3_client=s3_client,
    )

    parsed = urlparse(url)
    query = parse_qs(parsed.query)
    assert parsed.path.endswith("/profile/ada.png")
    assert query["X-Amz-Expires"] == ["1800"]
    assert query["X-Amz-Algorithm"] == ["AWS4-HMAC-SHA256"]
    signed_headers = query["X-Amz-SignedHeaders"][0].split(";")
    assert "content-type" in signed_headers
    assert "content-length" in signed_headers


def test_generate_presigned_get_url(s3_client):
    url = generate_presigned_get_url(
        bucket_name=TEST_BUCKET_NAME,
        object_key="profile/ada.png",
        expires_in=300,
        s3_client=s3_client,
    )

    query = parse_qs(urlparse(url).query)
    assert query["X-Amz-Expires"] == ["300"]


def test_delete_s3_object(s3_client):
    s3_client.put_object(Bucket=TEST_BUCKET_NAME, Key="profile/gone.jpg", Body=b"x")

    delete_s3_object(TEST_BUCKET_NAME, "profile/gone.jpg", s3_client=s3_client)

    with pytest.raises(ClientError):
        s3_client.head_object(Bucket=TEST_BUCKET_NAME, Key="profile/gone.jpg")
