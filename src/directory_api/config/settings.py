# src/directory_api/config/settings.py
from typing import List, Optional
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from typing_extensions import Self


class Settings(BaseSettings):
    """
    Single source of truth for all application settings.

    Configuration precedence:
    1. Environment variables (highest priority)
    2. .env file (if exists)
    3. Default values in this class (lowest priority)

    Usage:
        from directory_api.config.settings import get_settings
        settings = get_settings()
        bucket_name = settings.s3_bucket_name
    """

    # Application Settings
    app_name: str = Field(
        default="directory-api",
        description="Application name"
    )

    # AWS Core Settings
    aws_region: str = Field(
        default="us-east-1",
        alias="AWS_BUCKET_REGION"
    )

    aws_access_key_id: str = Field(
        default="test",
        alias="AWS_ACCESS_KEY"
    )

    aws_secret_access_key: str = Field(
        default="test",
        alias="AWS_SECRET_KEY"
    )

    # S3 Configuration
    s3_bucket_name: str = Field(
        default="demo-bucket",
        alias="AWS_BUCKET_NAME",
        description="S3 bucket for profile photos"
    )

    s3_endpoint: Optional[str] = Field(
        default=None,
        alias="S3_ENDPOINT",
        description="Internal S3 endpoint (e.g. http://localstack:4566). Unset means real AWS."
    )

    s3_public_endpoint: Optional[str] = Field(
        default=None,
        alias="S3_PUBLIC_ENDPOINT",
        description="Browser-reachable S3 endpoint used in presigned URLs (e.g. http://localhost:4566)"
    )

    # Presigned URL Configuration
    upload_url_expires_in: int = Field(
        default=1800,
        gt=0,
        alias="UPLOAD_URL_EXPIRES_IN",
        description="Lifetime of presigned upload URLs in seconds"
    )

    view_url_expires_in: int = Field(
        default=300,
        gt=0,
        alias="VIEW_URL_EXPIRES_IN",
        description="Lifetime of presigned view URLs in seconds"
    )

    max_file_size_bytes: int = Field(
        default=5 * 1024 * 1024,
        gt=0,
        alias="MAX_FILE_SIZE_BYTES",
        description="Largest photo accepted for upload"
    )

    # Database Configuration
    database_path: str = Field(
        default="directory.db",
        alias="DATABASE_PATH",
        description="SQLite file holding the user directory"
    )

    # Frontend
    frontend_origins: str = Field(
        default="http://localhost:3000",
        alias="FRONTEND_ORIGINS",
        description="Comma-separated list of origins allowed by CORS"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        alias="LOG_LEVEL",
        description="Logging level"
    )

    @field_validator('s3_endpoint', 's3_public_endpoint', mode='before')
    @classmethod
    def blank_endpoint_is_unset(cls, v):
        """Treat empty strings from docker-compose env files as unset."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator('log_level')
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()

    @model_validator(mode="after")
    def default_public_endpoint_to_internal(self) -> Self:
        """The public endpoint falls back to the internal one when not given."""
        if self.s3_public_endpoint is None:
            self.s3_public_endpoint = self.s3_endpoint
        return self

    @property
    def is_localstack(self) -> bool:
        """True when an explicit S3 endpoint is configured."""
        return bool(self.s3_endpoint)

    @property
    def cors_origins(self) -> List[str]:
        origins: List[str] = []
        for origin in self.frontend_origins.split(","):
            origin = origin.strip()
            if origin and origin not in origins:
                origins.append(origin)
        return origins

    def get_environment_dict(self) -> dict:
        """Get configuration as a dictionary suitable for docker-compose or subprocess.

        Returns:
            Dictionary of environment variables
        """
        return {
            'AWS_BUCKET_NAME': self.s3_bucket_name,
            'AWS_BUCKET_REGION': self.aws_region,
            'S3_ENDPOINT': self.s3_endpoint or '',
            'S3_PUBLIC_ENDPOINT': self.s3_public_endpoint or '',
            'UPLOAD_URL_EXPIRES_IN': str(self.upload_url_expires_in),
            'VIEW_URL_EXPIRES_IN': str(self.view_url_expires_in),
            'MAX_FILE_SIZE_BYTES': str(self.max_file_size_bytes),
            'DATABASE_PATH': self.database_path,
            'LOG_LEVEL': self.log_level,
        }

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    This ensures we only create one Settings instance per process.
    """
    return Settings()
