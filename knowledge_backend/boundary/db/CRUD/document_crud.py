"""
Document CRUD operations.

Extends BaseCRUD with project-scoped listing for DocumentModel.

Dependencies: sqlalchemy, knowledge_backend.boundary.db.models
System role: Document metadata persistence
"""

from typing import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from knowledge_backend.boundary.db.CRUD.base_crud import BaseCRUD
from knowledge_backend.boundary.db.models.document_model import DocumentModel


class DocumentCRUD(BaseCRUD[DocumentModel]):
    """CRUD operations for DocumentModel."""

    def __init__(self) -> None:
        super().__init__(DocumentModel)

    async def get_by_project(
        self,
        session: AsyncSession,
        project_id: str,
        limit: int | None = None,
    ) -> Sequence[DocumentModel]:
        """
        Retrieve a project's documents, newest first.

        Args:
            session: Async database session
            project_id: Owning project
            limit: Maximum number of documents to return

        Returns:
            Sequence of DocumentModels ordered by created_at descending
        """
        stmt = (
            select(DocumentModel)
            .where(DocumentModel.project_id == project_id)
            .order_by(DocumentModel.created_at.desc(), DocumentModel.id)
        )
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await session.execute(stmt)
        return result.scalars().all()


document_crud = DocumentCRUD()
