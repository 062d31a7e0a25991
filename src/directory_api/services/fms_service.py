"""
File Management Service (FMS).

Hands out presigned URLs so the browser can upload and view profile photos
directly against S3 without ever holding AWS credentials.

Upload flow:
1. Frontend asks for an upload URL with the object key, content type and size
2. The type and size are checked against the allow-list and ceiling
3. A PUT URL valid for 30 minutes is signed with the type and size bound to it
4. Frontend PUTs the file straight to S3

View flow:
1. Frontend asks for a view URL with the object key
2. A GET URL valid for 5 minutes is signed and used as the image src

When running in Docker against LocalStack two endpoints are involved:
S3_ENDPOINT is what this server can reach (http://localstack:4566) and
S3_PUBLIC_ENDPOINT is what the browser can reach (http://localhost:4566).
URLs are signed against the former and rewritten to the latter.
"""

import logging
from typing import Any, Dict, Optional, TYPE_CHECKING

from directory_api.aws.clients import AWSClientManager
from directory_api.config.settings import Settings, get_settings
from directory_api.errors import FmsValidationError
from directory_api.s3.delete_objects import delete_s3_object
from directory_api.s3.presign import generate_presigned_get_url, generate_presigned_put_url

if TYPE_CHECKING:
    from mypy_boto3_s3 import S3Client

logger = logging.getLogger(__name__)

ALLOWED_MIME_TYPES = (
    "image/jpeg",
    "image/jpg",
    "image/png",
    "image/webp",
)

BYTES_PER_MB = 1024 * 1024

# 5MB, the default for Settings.max_file_size_bytes
MAX_FILE_SIZE_BYTES = 5 * BYTES_PER_MB


class FmsService:
    """Service for presigned photo URLs and photo deletion."""

    def __init__(self, settings: Optional[Settings] = None, s3_client: Optional["S3Client"] = None):
        self.settings = settings or get_settings()
        self.bucket_name = self.settings.s3_bucket_name
        self.internal_endpoint = self.settings.s3_endpoint
        self.public_endpoint = self.settings.s3_public_endpoint
        self.max_file_size_bytes = self.settings.max_file_size_bytes
        self.s3_client = s3_client or AWSClientManager(self.settings).get_client("s3")

    def to_public_url(self, url: str) -> str:
        """Swap the Docker-internal endpoint for the browser-reachable one."""
        if self.internal_endpoint and self.public_endpoint:
            return url.replace(self.internal_endpoint, self.public_endpoint, 1)
        return url

    def validate_content_type(self, content_type: str) -> None:
        """
        Validate that the content type is an allowed image MIME type.

        Raises:
            FmsValidationError: if the content type is not allowed
        """
        if content_type not in ALLOWED_MIME_TYPES:
            raise FmsValidationError(
                f"Invalid file type: {content_type}. Allowed types: {', '.join(ALLOWED_MIME_TYPES)}"
            )

    def validate_file_size(self, file_size: Optional[int]) -> None:
        """
        Validate that the file size is positive and within the allowed limit.

        Raises:
            FmsValidationError: if the size is missing, non-positive or too large
        """
        if not file_size or file_size <= 0:
            raise FmsValidationError("File size must be a positive number")
        if file_size > self.max_file_size_bytes:
            max_size_mb = self.max_file_size_bytes / BYTES_PER_MB
            file_size_mb = file_size / BYTES_PER_MB
            raise FmsValidationError(
                f"File size ({file_size_mb:.2f}MB) exceeds maximum allowed size ({max_size_mb:g}MB)"
            )

    def get_upload_constraints(self) -> Dict[str, Any]:
        return {
            "allowed_mime_types": list(ALLOWED_MIME_TYPES),
            "max_file_size_bytes": self.max_file_size_bytes,
            "max_file_size_mb": self.max_file_size_bytes / BYTES_PER_MB,
        }

    def get_presigned_upload_url(self, key: str, content_type: str, file_size: int) -> str:
        """
        Generate a presigned URL for uploading one photo.

        The content type and exact length are part of the signature, so S3
        rejects an upload that does not match what was validated here.
        """
        self.validate_content_type(content_type)
        self.validate_file_size(file_size)

        url = generate_presigned_put_url(
            bucket_name=self.bucket_name,
            object_key=key,
            content_type=content_type,
            content_length=file_size,
            expires_in=self.settings.upload_url_expires_in,
            s3_client=self.s3_client,
        )
        logger.info(f"Issued upload URL for s3://{self.bucket_name}/{key} ({content_type}, {file_size} bytes)")
        return self.to_public_url(url)

    def get_presigned_view_url(self, key: str) -> str:
        """Generate a short-lived presigned URL for reading one photo."""
        url = generate_presigned_get_url(
            bucket_name=self.bucket_name,
            object_key=key,
            expires_in=self.settings.view_url_expires_in,
            s3_client=self.s3_client,
        )
        logger.debug(f"Issued view URL for s3://{self.bucket_name}/{key}")
        return self.to_public_url(url)

    def delete_object(self, key: str) -> None:
        delete_s3_object(self.bucket_name, key, s3_client=self.s3_client)
        logger.info(f"Deleted s3://{self.bucket_name}/{key}")
