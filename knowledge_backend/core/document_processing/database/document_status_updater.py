"""
Document status updater.

Moves a document through its ingestion states:
PENDING/READY/ERROR -> PROCESSING -> READY (or ERROR with a message).

Each call commits its own transaction so status is visible to readers while
the pipeline is still running.

Dependencies: sqlalchemy
System role: Document metadata persistence for the pipeline
"""

import logging
from datetime import datetime

from sqlalchemy import DateTime, bindparam, text
from sqlalchemy.ext.asyncio import AsyncSession

from knowledge_backend.boundary.db.base import utc_now
from knowledge_backend.boundary.db.models.document_model import DocumentStatus
from knowledge_backend.core.exceptions import DocumentNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_ERROR_MAX_LENGTH = 2000

_MARK_PROCESSING = text(
    """
    UPDATE project_documents
    SET status = :status, error_message = NULL,
        processing_started_at = :now, updated_at = :now
    WHERE id = :doc_id
    RETURNING id
    """
).bindparams(bindparam("now", type_=DateTime(timezone=True)))

_MARK_READY = text(
    """
    UPDATE project_documents
    SET status = :status, error_message = NULL,
        processed_at = :now, updated_at = :now
    WHERE id = :doc_id
    RETURNING id
    """
).bindparams(bindparam("now", type_=DateTime(timezone=True)))

_MARK_ERROR = text(
    """
    UPDATE project_documents
    SET status = :status, error_message = :error_msg, updated_at = :now
    WHERE id = :doc_id
    RETURNING id
    """
).bindparams(bindparam("now", type_=DateTime(timezone=True)))


def truncate_error(message: str, max_length: int = DEFAULT_ERROR_MAX_LENGTH) -> str:
    """Clip an error message to the stored length."""
    return message[:max_length]


class DocumentStatusUpdater:
    """Update document status during processing."""

    def __init__(
        self,
        db_session: AsyncSession,
        error_max_length: int = DEFAULT_ERROR_MAX_LENGTH,
    ) -> None:
        """
        Initialize with database session.

        Args:
            db_session: AsyncSession bound to the metadata store
            error_max_length: Stored error messages are clipped to this length
        """
        self.db = db_session
        self._error_max_length = error_max_length

    async def _execute(self, stmt, params: dict, document_id: str) -> datetime:
        now = utc_now()
        result = await self.db.execute(stmt, {**params, "doc_id": document_id, "now": now})
        if result.fetchone() is None:
            raise DocumentNotFoundError(document_id)
        await self.db.commit()
        return now

    async def mark_processing(self, document_id: str) -> None:
        """
        Mark document as PROCESSING and clear any previous error.

        Raises:
            DocumentNotFoundError: Document not found
        """
        try:
            await self._execute(
                _MARK_PROCESSING,
                {"status": DocumentStatus.PROCESSING.value},
                document_id,
            )
            logger.info(
                f"{__name__}:mark_processing - Document marked as PROCESSING",
                extra={"document_id": document_id},
            )
        except Exception as e:
            logger.error(f"{__name__}:mark_processing - {type(e).__name__}: {e}")
            await self.db.rollback()
            raise

    async def mark_ready(self, document_id: str) -> None:
        """
        Mark document as READY.

        Raises:
            DocumentNotFoundError: Document not found
        """
        try:
            await self._execute(
                _MARK_READY,
                {"status": DocumentStatus.READY.value},
                document_id,
            )
            logger.info(
                f"{__name__}:mark_ready - Document marked as READY",
                extra={"document_id": document_id},
            )
        except Exception as e:
            logger.error(f"{__name__}:mark_ready - {type(e).__name__}: {e}")
            await self.db.rollback()
            raise

    async def mark_error(self, document_id: str, error_message: str) -> None:
        """
        Mark document as ERROR with a human-readable reason.

        Args:
            document_id: Document ID
            error_message: Failure description (clipped to the stored length)

        Raises:
            DocumentNotFoundError: Document not found
        """
        truncated_error = truncate_error(error_message, self._error_max_length)
        try:
            await self._execute(
                _MARK_ERROR,
                {"status": DocumentStatus.ERROR.value, "error_msg": truncated_error},
                document_id,
            )
            logger.info(
                f"{__name__}:mark_error - Document marked as ERROR",
                extra={"document_id": document_id, "error_message": truncated_error},
            )
        except Exception as e:
            logger.error(f"{__name__}:mark_error - {type(e).__name__}: {e}")
            await self.db.rollback()
            raise
