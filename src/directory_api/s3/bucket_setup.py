"""Bucket bootstrap: create the photo bucket and open it to browser uploads."""
import logging
from typing import Optional, TYPE_CHECKING

from botocore.exceptions import ClientError

from directory_api.aws.clients import get_s3_client

if TYPE_CHECKING:
    from mypy_boto3_s3 import S3Client

logger = logging.getLogger(__name__)

BROWSER_UPLOAD_CORS_RULES = [
    {
        "AllowedOrigins": ["*"],
        "AllowedMethods": ["GET", "PUT", "POST", "DELETE", "HEAD"],
        "AllowedHeaders": ["*"],
        "ExposeHeaders": ["ETag"],
        "MaxAgeSeconds": 3000,
    }
]


def bucket_exists(bucket_name: str, s3_client: Optional["S3Client"] = None) -> bool:
    """
    Check if a bucket exists and is reachable with the current credentials.

    :param bucket_name: The name of the S3 bucket.
    :param s3_client: An optional boto3 S3 client. If not provided, one will be created.
    """
    s3_client = s3_client or get_s3_client()
    try:
        s3_client.head_bucket(Bucket=bucket_name)
    except ClientError as err:
        error_code = err.response["Error"]["Code"]
        if error_code in ("404", "NoSuchBucket"):
            return False
        raise
    return True


def ensure_bucket(bucket_name: str, region: str, s3_client: Optional["S3Client"] = None) -> bool:
    """
    Create the bucket unless it is already there.

    Returns True when the bucket was created, False when it already existed
    (e.g. restored from a persisted LocalStack volume).
    """
    s3_client = s3_client or get_s3_client()
    if bucket_exists(bucket_name, s3_client=s3_client):
        logger.info(f"Bucket '{bucket_name}' already exists")
        return False

    # us-east-1 rejects an explicit LocationConstraint
    if region == "us-east-1":
        s3_client.create_bucket(Bucket=bucket_name)
    else:
        s3_client.create_bucket(
            Bucket=bucket_name,
            CreateBucketConfiguration={"LocationConstraint": region},
        )
    logger.info(f"Bucket '{bucket_name}' created in {region}")
    return True


def apply_browser_cors(bucket_name: str, s3_client: Optional["S3Client"] = None) -> None:
    """Allow browsers to PUT and GET objects directly through presigned URLs."""
    s3_client = s3_client or get_s3_client()
    s3_client.put_bucket_cors(
        Bucket=bucket_name,
        CORSConfiguration={"CORSRules": BROWSER_UPLOAD_CORS_RULES},
    )
    logger.info(f"CORS configuration applied to '{bucket_name}'")
