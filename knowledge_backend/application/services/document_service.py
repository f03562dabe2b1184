"""
Document service.

Registers uploads, lists and fetches documents, and deletes a document with
its chunks. Ingestion itself runs in DocumentPipeline.

Dependencies: knowledge_backend.boundary.db, knowledge_backend.core
System role: Document management orchestration
"""

import logging
from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from knowledge_backend.boundary.db.CRUD.chunk_crud import chunk_crud
from knowledge_backend.boundary.db.CRUD.document_crud import document_crud
from knowledge_backend.boundary.db.models.document_model import DocumentModel, DocumentStatus
from knowledge_backend.configs.s3_documents import S3DocumentsSettings
from knowledge_backend.core.exceptions import DocumentNotFoundError, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_LIST_LIMIT = 200


class DocumentService:
    """Document metadata lifecycle: register, list, get, delete."""

    def __init__(self, db: AsyncSession, settings: S3DocumentsSettings | None = None) -> None:
        """
        Initialize document service.

        Args:
            db: AsyncSession for document metadata
            settings: Upload limits (defaults if None)
        """
        self.db = db
        self._settings = settings or S3DocumentsSettings()

    async def register_document(
        self,
        project_id: str,
        storage_key: str,
        filename: str,
        mime_type: str,
        size: int,
        checksum: str | None = None,
    ) -> DocumentModel:
        """
        Create a PENDING document for an upload already in storage.

        The caller commits.

        Returns:
            DocumentModel: Created document

        Raises:
            ValidationError: Missing fields or size outside [0, max_upload_bytes]
        """
        if not project_id or not project_id.strip():
            raise ValidationError("project_id is required", field="project_id")
        if not storage_key or not storage_key.strip():
            raise ValidationError("storage_key is required", field="storage_key")
        if not filename or not filename.strip():
            raise ValidationError("filename is required", field="filename")
        if size < 0:
            raise ValidationError("size must not be negative", field="size")
        if size > self._settings.max_upload_bytes:
            raise ValidationError(
                f"File exceeds the maximum upload size of {self._settings.max_upload_bytes} bytes",
                field="size",
            )

        document = await document_crud.create(
            self.db,
            project_id=project_id,
            storage_key=storage_key,
            filename=filename.strip(),
            mime_type=mime_type or "application/octet-stream",
            size=size,
            checksum=checksum,
            status=DocumentStatus.PENDING,
        )
        logger.info(
            f"{__name__}:register_document - Document registered",
            extra={"document_id": document.id, "project_id": project_id, "storage_key": storage_key},
        )
        return document

    async def list_documents(
        self,
        project_id: str,
        limit: int = DEFAULT_LIST_LIMIT,
    ) -> Sequence[DocumentModel]:
        """Return a project's documents, newest first."""
        return await document_crud.get_by_project(self.db, project_id, limit=limit)

    async def get_document(self, document_id: str) -> DocumentModel:
        """
        Fetch one document.

        Raises:
            DocumentNotFoundError: No document with this ID
        """
        document = await document_crud.get_by_id(self.db, document_id)
        if document is None:
            raise DocumentNotFoundError(document_id)
        return document

    async def delete_document(self, document_id: str) -> int:
        """
        Delete a document and all of its chunks. The caller commits.

        Returns:
            int: Number of chunks deleted

        Raises:
            DocumentNotFoundError: No document with this ID
        """
        if not await document_crud.exists(self.db, document_id):
            raise DocumentNotFoundError(document_id)

        deleted_chunks = await chunk_crud.delete_by_document(self.db, document_id)
        await document_crud.delete_by_id(self.db, document_id)

        logger.info(
            f"{__name__}:delete_document - Document deleted",
            extra={"document_id": document_id, "chunk_count": deleted_chunks},
        )
        return deleted_chunks
