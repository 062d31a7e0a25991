"""AWS client management."""
import logging
from typing import Any, Dict, Optional, TYPE_CHECKING

import boto3
from botocore.config import Config

from directory_api.config.settings import Settings, get_settings

if TYPE_CHECKING:
    from mypy_boto3_s3 import S3Client

logger = logging.getLogger(__name__)


class AWSClientManager:
    """Builds and caches AWS service clients for one set of settings."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self._clients: Dict[str, Any] = {}

        # Cache commonly used values
        self.region = self.settings.aws_region
        self.endpoint_url = self.settings.s3_endpoint

        if self.settings.is_localstack:
            logger.info(
                f"Using LocalStack S3 (internal: {self.endpoint_url}, "
                f"public: {self.settings.s3_public_endpoint})"
            )
        else:
            logger.info("Using AWS S3")

    def get_client(self, service_name: str) -> Any:
        """Get or create an AWS service client."""
        if service_name in self._clients:
            return self._clients[service_name]

        client_kwargs = {
            'region_name': self.region,
            'aws_access_key_id': self.settings.aws_access_key_id,
            'aws_secret_access_key': self.settings.aws_secret_access_key,
        }

        # LocalStack serves buckets under the path, not as subdomains
        if self.endpoint_url:
            client_kwargs['endpoint_url'] = self.endpoint_url
            client_kwargs['config'] = Config(
                signature_version='s3v4',
                s3={'addressing_style': 'path'},
            )
        else:
            client_kwargs['config'] = Config(signature_version='s3v4')

        try:
            client = boto3.client(service_name, **client_kwargs)
        except Exception as e:
            logger.error(f"Error creating {service_name} client: {str(e)}")
            raise

        self._clients[service_name] = client
        logger.debug(f"Created {service_name} client")
        return client

    def clear_clients(self) -> None:
        """Clear all cached clients."""
        self._clients.clear()
        logger.debug("Cleared all AWS clients")


def get_s3_client(settings: Optional[Settings] = None) -> "S3Client":
    """Get an S3 client configured from settings."""
    return AWSClientManager(settings).get_client('s3')
