"""
Document download task.

Resolves the storage key to a presigned URL through S3DocumentClient and
fetches the bytes with httpx. The whole file is buffered in memory.

Dependencies: httpx, boto3 (via S3DocumentClient)
System role: First stage of document ingestion pipeline
"""

import asyncio
import logging

import httpx
from pydantic import BaseModel

from knowledge_backend.boundary.aws.s3_client import S3DocumentClient
from knowledge_backend.core.exceptions import DownloadError

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "application/octet-stream"


class DownloadedDocument(BaseModel):
    """Raw document bytes and the MIME type used for extraction."""

    storage_key: str
    content: bytes
    mime_type: str

    @property
    def size(self) -> int:
        return len(self.content)


class S3DownloadTask:
    """Download documents from the document bucket into memory."""

    def __init__(
        self,
        storage_client: S3DocumentClient,
        timeout: float = 60.0,
        url_expiry: int = 300,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Initialize download task.

        Args:
            storage_client: Client used to sign download URLs
            timeout: HTTP timeout in seconds
            url_expiry: Presigned URL lifetime in seconds
            http_client: Optional shared client (a per-call client is used otherwise)
        """
        self._storage = storage_client
        self._timeout = timeout
        self._url_expiry = url_expiry
        self._http_client = http_client

    async def download(
        self,
        storage_key: str,
        declared_mime_type: str | None = None,
    ) -> DownloadedDocument:
        """
        Download a document by storage key.

        The effective MIME type is the stored content type, else the declared
        one, else application/octet-stream.

        Args:
            storage_key: Object key in the document bucket
            declared_mime_type: MIME type supplied with the trigger

        Returns:
            DownloadedDocument: Bytes plus effective MIME type

        Raises:
            DownloadError: Missing credentials, missing object, non-2xx
                response or transport failure
        """
        metadata = await asyncio.to_thread(
            self._storage.head_metadata, storage_key, self._url_expiry
        )

        try:
            if self._http_client is not None:
                response = await self._http_client.get(metadata.download_url)
            else:
                async with httpx.AsyncClient(timeout=self._timeout) as client:
                    response = await client.get(metadata.download_url)
        except httpx.HTTPError as e:
            raise DownloadError(
                f"Failed to download file: {type(e).__name__}: {e}",
                storage_key,
            ) from e

        if not response.is_success:
            raise DownloadError(
                f"Failed to download file ({response.status_code} {response.reason_phrase})",
                storage_key,
                status_code=response.status_code,
            )

        mime_type = metadata.content_type or declared_mime_type or DEFAULT_MIME_TYPE
        logger.info(
            f"{__name__}:download - Downloaded document",
            extra={
                "storage_key": storage_key,
                "size_bytes": len(response.content),
                "mime_type": mime_type,
            },
        )
        return DownloadedDocument(
            storage_key=storage_key,
            content=response.content,
            mime_type=mime_type,
        )
