"""
S3 Documents bucket configuration.

Settings for the raw document bucket: where uploads live, how download URLs
are signed, and how large an upload may be.

Dependencies: pydantic_settings
System role: Object storage configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class S3DocumentsSettings(BaseSettings):
    """Settings for S3 documents bucket operations."""

    model_config = SettingsConfigDict(
        env_prefix="S3_DOCUMENTS_",
        case_sensitive=False,
        extra="ignore",
    )

    bucket: str = Field(
        default="knowledge-dev-documents",
        description="S3 bucket for raw document storage",
    )
    region: str = Field(
        default="us-east-1",
        description="AWS region for S3 bucket",
    )
    access_key_id: str | None = Field(
        default=None,
        description="Explicit access key id (falls back to the default boto3 credential chain)",
    )
    secret_access_key: str | None = Field(
        default=None,
        description="Explicit secret access key",
    )
    download_url_expiry: int = Field(
        default=300,
        description="Presigned download URL expiry in seconds",
    )
    download_timeout: float = Field(
        default=60.0,
        description="HTTP timeout in seconds for fetching document bytes",
    )
    max_upload_bytes: int = Field(
        default=10 * 1024 * 1024,
        description="Largest document accepted for registration (10 MiB)",
    )
