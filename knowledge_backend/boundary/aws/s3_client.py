"""
S3 client for document bucket operations.

Resolves a storage key to a short-lived download URL plus the stored
content type. The bytes themselves are fetched over HTTP by the pipeline.

Dependencies: boto3, botocore, pydantic
System role: Object storage adapter
"""

import logging
from datetime import datetime, timedelta, timezone

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from pydantic import BaseModel, Field

from knowledge_backend.core.exceptions import DownloadError

logger = logging.getLogger(__name__)

_NOT_FOUND_CODES = {"404", "NoSuchKey", "NotFound"}


class StorageObjectMetadata(BaseModel):
    """Metadata for a stored object plus a presigned GET URL."""

    storage_key: str
    download_url: str
    content_type: str | None = None
    content_length: int | None = None
    expires_at: datetime


class S3DocumentClient:
    """S3 client for the raw document bucket."""

    def __init__(
        self,
        bucket: str,
        region: str = "us-east-1",
        access_key_id: str | None = None,
        secret_access_key: str | None = None,
        session: boto3.session.Session | None = None,
    ) -> None:
        """
        Initialize S3 client for document bucket.

        Explicit keys take precedence over the default boto3 credential chain.

        Args:
            bucket: S3 bucket name for document storage
            region: AWS region for S3 bucket
            access_key_id: Optional explicit access key id
            secret_access_key: Optional explicit secret access key
            session: Optional preconfigured boto3 session
        """
        self._bucket = bucket
        self._region = region
        self._session = session or boto3.session.Session(
            aws_access_key_id=access_key_id,
            aws_secret_access_key=secret_access_key,
            region_name=region,
        )
        self._s3_client = self._session.client("s3", region_name=region)

    @property
    def bucket(self) -> str:
        return self._bucket

    def has_credentials(self) -> bool:
        """Return True when the session resolves any credentials."""
        return self._session.get_credentials() is not None

    def generate_presigned_download_url(
        self,
        storage_key: str,
        expires_in: int = 300,
    ) -> tuple[str, datetime]:
        """
        Generate presigned URL for downloading an object.

        Args:
            storage_key: S3 object key
            expires_in: URL expiry in seconds

        Returns:
            tuple[str, datetime]: (presigned_url, expires_at)

        Raises:
            ClientError: If presigned URL generation fails
        """
        presigned_url = self._s3_client.generate_presigned_url(
            ClientMethod="get_object",
            Params={"Bucket": self._bucket, "Key": storage_key},
            ExpiresIn=expires_in,
        )
        expires_at = datetime.now(timezone.utc) + timedelta(seconds=expires_in)
        return presigned_url, expires_at

    def head_metadata(self, storage_key: str, expires_in: int = 300) -> StorageObjectMetadata:
        """
        Look up an object and sign a download URL for it.

        Args:
            storage_key: S3 object key
            expires_in: Download URL expiry in seconds

        Returns:
            StorageObjectMetadata: Download URL and stored content type

        Raises:
            DownloadError: Missing credentials, missing object, or S3 failure
        """
        if not storage_key:
            raise DownloadError("Storage key is required", storage_key)

        if not self.has_credentials():
            raise DownloadError(
                "Missing storage access credentials; cannot download document",
                storage_key,
            )

        try:
            head = self._s3_client.head_object(Bucket=self._bucket, Key=storage_key)
            download_url, expires_at = self.generate_presigned_download_url(
                storage_key, expires_in
            )
        except ClientError as e:
            error_code = str(e.response.get("Error", {}).get("Code", "Unknown"))
            if error_code in _NOT_FOUND_CODES:
                raise DownloadError(
                    f"Failed to download file (404 Not Found): {storage_key}",
                    storage_key,
                    status_code=404,
                ) from e
            status = e.response.get("ResponseMetadata", {}).get("HTTPStatusCode")
            raise DownloadError(
                f"Failed to read document metadata ({error_code}): {storage_key}",
                storage_key,
                status_code=status,
            ) from e
        except BotoCoreError as e:
            raise DownloadError(
                f"Storage request failed: {e}", storage_key
            ) from e

        logger.info(
            f"{__name__}:head_metadata - Signed download URL",
            extra={"storage_key": storage_key, "content_type": head.get("ContentType")},
        )
        return StorageObjectMetadata(
            storage_key=storage_key,
            download_url=download_url,
            content_type=head.get("ContentType"),
            content_length=head.get("ContentLength"),
            expires_at=expires_at,
        )
