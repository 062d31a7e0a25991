"""Functions for deleting objects from an S3 bucket--the "D" in CRUD."""

from typing import Optional, TYPE_CHECKING

from directory_api.aws.clients import get_s3_client

if TYPE_CHECKING:
    from mypy_boto3_s3 import S3Client


def delete_s3_object(bucket_name: str, object_key: str, s3_client: Optional["S3Client"] = None) -> None:
    """
    Delete a file from an S3 bucket.

    S3 reports success for keys that do not exist, so this is idempotent.

    :param bucket_name: The name of the S3 bucket.
    :param object_key: The key of the object to delete.
    :param s3_client: An optional boto3 S3 client. If not provided, one will be created.
    """
    s3_client = s3_client or get_s3_client()
    s3_client.delete_object(Bucket=bucket_name, Key=object_key)
