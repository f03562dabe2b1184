"""
Chunk persistence task.

Replaces all stored chunks of a document in a single transaction.

Dependencies: sqlalchemy
System role: Fifth stage of document ingestion pipeline
"""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from knowledge_backend.boundary.db.CRUD.chunk_crud import ChunkCRUD, chunk_crud
from knowledge_backend.core.exceptions import PersistenceError

from ..models import Chunk

logger = logging.getLogger(__name__)


class ChunkStoreTask:
    """Atomically replace a document's chunks."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        crud: ChunkCRUD = chunk_crud,
    ) -> None:
        self._session_factory = session_factory
        self._crud = crud

    async def replace(self, project_id: str, document_id: str, chunks: list[Chunk]) -> int:
        """
        Delete the document's stored chunks and insert ``chunks``.

        Args:
            project_id: Owning project
            document_id: Source document
            chunks: Embedded chunks

        Returns:
            int: Number of chunks stored

        Raises:
            PersistenceError: The transaction failed and was rolled back
        """
        async with self._session_factory() as session:
            try:
                stored = await self._crud.replace_document_chunks(
                    session, project_id, document_id, chunks
                )
                await session.commit()
            except (SQLAlchemyError, ValueError) as e:
                await session.rollback()
                logger.error(
                    f"{__name__}:replace - {type(e).__name__}: {e}",
                    extra={"document_id": document_id},
                )
                raise PersistenceError(
                    f"Failed to store document chunks: {type(e).__name__}",
                    document_id,
                    operation="replace_document_chunks",
                ) from e

        return stored
