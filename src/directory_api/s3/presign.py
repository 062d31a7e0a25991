"""Functions for issuing presigned URLs against an S3 bucket."""

from typing import Optional, TYPE_CHECKING

from directory_api.aws.clients import get_s3_client
from directory_api.utils.decorators import log_execution_time

if TYPE_CHECKING:
    from mypy_boto3_s3 import S3Client


@log_execution_time
def generate_presigned_put_url(
    bucket_name: str,
    object_key: str,
    content_type: str,
    content_length: int,
    expires_in: int,
    s3_client: Optional["S3Client"] = None,
) -> str:
    """
    Generate a presigned URL that lets the holder PUT one object.

    :param bucket_name: The name of the S3 bucket.
    :param object_key: path to the object in the S3 bucket.
    :param content_type: The MIME type the uploader must send.
    :param content_length: The exact size in bytes the uploader must send.
    :param expires_in: Seconds until the URL stops working.
    :param s3_client: An optional boto3 S3 client. If not provided, one will be created.
    """
    s3_client = s3_client or get_s3_client()
    return s3_client.generate_presigned_url(
        "put_object",
        Params={
            "Bucket": bucket_name,
            "Key": object_key,
            "ContentType": content_type,
            "ContentLength": content_length,
        },
        ExpiresIn=expires_in,
    )


@log_execution_time
def generate_presigned_get_url(
    bucket_name: str,
    object_key: str,
    expires_in: int,
    s3_client: Optional["S3Client"] = None,
) -> str:
    """
    Generate a presigned URL that lets the holder GET one object.

    No existence check is made; a URL for a missing key fails when used.

    :param bucket_name: The name of the S3 bucket.
    :param object_key: path to the object in the S3 bucket.
    :param expires_in: Seconds until the URL stops working.
    :param s3_client: An optional boto3 S3 client. If not provided, one will be created.
    """
    s3_client = s3_client or get_s3_client()
    return s3_client.generate_presigned_url(
        "get_object",
        Params={"Bucket": bucket_name, "Key": object_key},
        ExpiresIn=expires_in,
    )
