"""
Dependency injection container.

Factory functions for FastAPI dependencies.

Dependencies: knowledge_backend.configs, knowledge_backend.application, knowledge_backend.boundary
System role: DI container for service injection
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from knowledge_backend.application.services import DocumentService, RetrievalService
from knowledge_backend.boundary.aws.s3_client import S3DocumentClient
from knowledge_backend.boundary.db import get_async_db, get_async_session_factory
from knowledge_backend.configs import Settings, get_settings
from knowledge_backend.core.document_processing import DocumentPipeline
from knowledge_backend.core.document_processing.tasks import S3DownloadTask


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self) -> None:
        self._s3_client = None
        self._session_factory = None
        self._document_pipeline = None

    @property
    def s3_client(self) -> S3DocumentClient:
        """Get cached S3 document client."""
        if self._s3_client is None:
            s3_settings = get_settings().s3_documents
            self._s3_client = S3DocumentClient(
                bucket=s3_settings.bucket,
                region=s3_settings.region,
                access_key_id=s3_settings.access_key_id,
                secret_access_key=s3_settings.secret_access_key,
            )
        return self._s3_client

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        """Get cached async session factory."""
        if self._session_factory is None:
            self._session_factory = get_async_session_factory()
        return self._session_factory

    @property
    def document_pipeline(self) -> DocumentPipeline:
        """Get cached document pipeline."""
        if self._document_pipeline is None:
            s3_settings = get_settings().s3_documents
            download_task = S3DownloadTask(
                self.s3_client,
                timeout=s3_settings.download_timeout,
                url_expiry=s3_settings.download_url_expiry,
            )
            self._document_pipeline = DocumentPipeline(self.session_factory, download_task)
        return self._document_pipeline

    def clear(self) -> None:
        """Clear all cached instances."""
        self._s3_client = None
        self._session_factory = None
        self._document_pipeline = None


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_document_service(
    db: AsyncSession = Depends(get_async_db),
    settings: Settings = Depends(get_settings_dependency),
) -> DocumentService:
    """
    Get document service instance.

    Args:
        db: Async database session (injected via Depends)
        settings: Application settings

    Returns:
        DocumentService: Service bound to the request session
    """
    return DocumentService(db=db, settings=settings.s3_documents)


def get_retrieval_service(
    db: AsyncSession = Depends(get_async_db),
    settings: Settings = Depends(get_settings_dependency),
) -> RetrievalService:
    """
    Get retrieval service instance.

    Args:
        db: Async database session (injected via Depends)
        settings: Application settings

    Returns:
        RetrievalService: Service bound to the request session
    """
    return RetrievalService(db=db, settings=settings.retrieval)


def get_document_pipeline() -> DocumentPipeline:
    """Get the cached ingestion pipeline."""
    return get_service_cache().document_pipeline
