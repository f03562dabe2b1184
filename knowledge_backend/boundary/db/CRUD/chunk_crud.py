"""
Chunk CRUD operations.

Bulk replace of a document's chunks and project-scoped candidate fetch for
similarity search.

Dependencies: sqlalchemy, knowledge_backend.boundary.db.models
System role: Chunk store persistence
"""

import logging
from typing import TYPE_CHECKING, Sequence

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from knowledge_backend.boundary.db.base import utc_now
from knowledge_backend.boundary.db.models.chunk_model import ChunkModel

if TYPE_CHECKING:
    from knowledge_backend.core.document_processing.models.chunk import Chunk

logger = logging.getLogger(__name__)


class ChunkCRUD:
    """CRUD operations for ChunkModel (keyed on chunk_id, not id)."""

    def __init__(self) -> None:
        self.model = ChunkModel

    async def replace_document_chunks(
        self,
        session: AsyncSession,
        project_id: str,
        document_id: str,
        chunks: list["Chunk"],
    ) -> int:
        """
        Delete every stored chunk of a document and insert the new set.

        Runs inside the caller's transaction; the caller commits or rolls
        back, so readers never observe a partial set.

        Args:
            session: Async database session
            project_id: Owning project
            document_id: Source document
            chunks: Embedded chunks in ordinal order

        Returns:
            Number of chunks inserted

        Raises:
            ValueError: If a chunk has no embedding
        """
        await self.delete_by_document(session, document_id)

        created_at = utc_now()
        rows = []
        for ordinal, chunk in enumerate(chunks):
            if chunk.embedding is None:
                raise ValueError(f"Chunk {chunk.chunk_id} has no embedding")
            rows.append(
                ChunkModel(
                    chunk_id=chunk.chunk_id,
                    project_id=project_id,
                    document_id=document_id,
                    chunk_index=ordinal,
                    text=chunk.text,
                    embedding=list(chunk.embedding),
                    token_count=chunk.token_count,
                    created_at=created_at,
                )
            )
        session.add_all(rows)
        await session.flush()

        logger.info(
            f"{__name__}:replace_document_chunks - Replaced chunks",
            extra={"document_id": document_id, "chunk_count": len(rows)},
        )
        return len(rows)

    async def get_by_project(
        self,
        session: AsyncSession,
        project_id: str,
        limit: int = 2048,
    ) -> Sequence[ChunkModel]:
        """
        Fetch candidate chunks for a project in stable order.

        Ordered by created_at, chunk_index, chunk_id so equal similarity
        scores rank deterministically.

        Args:
            session: Async database session
            project_id: Project to scan
            limit: Maximum candidates

        Returns:
            Sequence of ChunkModels
        """
        stmt = (
            select(ChunkModel)
            .where(ChunkModel.project_id == project_id)
            .order_by(ChunkModel.created_at, ChunkModel.chunk_index, ChunkModel.chunk_id)
            .limit(limit)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def get_by_document(
        self,
        session: AsyncSession,
        document_id: str,
    ) -> Sequence[ChunkModel]:
        """Return a document's chunks by ordinal."""
        stmt = (
            select(ChunkModel)
            .where(ChunkModel.document_id == document_id)
            .order_by(ChunkModel.chunk_index)
        )
        result = await session.execute(stmt)
        return result.scalars().all()

    async def delete_by_document(self, session: AsyncSession, document_id: str) -> int:
        """
        Delete all chunks of a document.

        Returns:
            Number of rows deleted
        """
        result = await session.execute(
            delete(ChunkModel).where(ChunkModel.document_id == document_id)
        )
        return result.rowcount or 0


chunk_crud = ChunkCRUD()
