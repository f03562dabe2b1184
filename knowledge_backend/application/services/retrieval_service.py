"""
Retrieval service.

Serves project-scoped similarity search over stored chunks. Candidates are
fetched from the chunk store and ranked in-process by Retriever.

Dependencies: knowledge_backend.boundary.db, knowledge_backend.core
System role: Search orchestration
"""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from knowledge_backend.boundary.db.CRUD.chunk_crud import chunk_crud
from knowledge_backend.boundary.db.models.chunk_model import ChunkModel
from knowledge_backend.configs.retrieval import RetrievalSettings
from knowledge_backend.core.document_processing.configs import get_pipeline_settings
from knowledge_backend.core.document_processing.embeddings_wrapper import (
    Embeddings,
    LocalHashEmbeddings,
)
from knowledge_backend.core.document_processing.models import Chunk
from knowledge_backend.core.exceptions import RetrievalError, ValidationError
from knowledge_backend.core.retriever import Retriever, SearchHit
from knowledge_backend.observability import log_with_context

logger = logging.getLogger(__name__)


def chunk_from_model(model: ChunkModel) -> Chunk:
    """Convert a stored chunk row into the domain model."""
    return Chunk(
        chunk_id=model.chunk_id,
        project_id=model.project_id,
        document_id=model.document_id,
        chunk_index=model.chunk_index,
        text=model.text,
        token_count=model.token_count,
        embedding=model.embedding,
    )


class RetrievalService:
    """Project-scoped cosine similarity search."""

    def __init__(
        self,
        db: AsyncSession,
        settings: RetrievalSettings | None = None,
        embeddings: Embeddings | None = None,
    ) -> None:
        """
        Initialize retrieval service.

        Args:
            db: AsyncSession for the chunk store
            settings: Retrieval settings (defaults if None)
            embeddings: Query embedder; must match the ingestion embedder
        """
        self.db = db
        self._settings = settings or RetrievalSettings()
        self._embeddings = embeddings or LocalHashEmbeddings(
            get_pipeline_settings().embedding_dimension
        )
        self._retriever = Retriever()

    async def search(
        self,
        project_id: str,
        query_embedding: list[float],
        limit: int | None = None,
    ) -> list[SearchHit]:
        """
        Rank a project's chunks against a query embedding.

        Args:
            project_id: Project to search
            query_embedding: Query vector
            limit: Maximum hits (settings default if None)

        Returns:
            list[SearchHit]: At most ``limit`` hits, best first

        Raises:
            ValidationError: limit is below 1 (limits above max_limit are capped)
            RetrievalError: The chunk store could not be read
        """
        limit = self._settings.default_limit if limit is None else limit
        if limit < 1:
            raise ValidationError("limit must be at least 1", field="limit")
        limit = min(limit, self._settings.max_limit)

        try:
            rows = await chunk_crud.get_by_project(
                self.db, project_id, limit=self._settings.candidate_limit
            )
        except SQLAlchemyError as e:
            raise RetrievalError(
                f"Failed to load chunks: {type(e).__name__}", project_id
            ) from e

        hits = self._retriever.rank(
            query_embedding,
            (chunk_from_model(row) for row in rows),
            limit,
        )
        log_with_context(
            logger,
            logging.INFO,
            f"{__name__}:search - Ranked candidates",
            project_id=project_id,
            candidate_count=len(rows),
            hit_count=len(hits),
        )
        return hits

    async def search_by_text(
        self,
        project_id: str,
        query: str,
        limit: int | None = None,
    ) -> list[SearchHit]:
        """
        Embed a text query and search with it.

        Raises:
            ValidationError: Blank query or limit below 1
        """
        if not query or not query.strip():
            raise ValidationError("query must not be empty", field="query")
        return await self.search(project_id, self._embeddings.embed_query(query), limit)
