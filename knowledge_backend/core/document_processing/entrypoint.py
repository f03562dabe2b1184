"""
Document pipeline orchestrator.

Coordinates status updates, download, extraction, chunking, embedding and
chunk replacement for one document. Any failure after the document enters
PROCESSING is recorded on the document and re-raised.

Dependencies: All task modules, configs
System role: Pipeline orchestration (coordinates only)
"""

import logging
import time

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from knowledge_backend.core.exceptions import (
    EmptyContentError,
    KnowledgeBackendException,
    NoChunksProducedError,
)
from knowledge_backend.observability import log_exception_with_context

from .configs import DocumentPipelineSettings, get_pipeline_settings
from .database.document_status_updater import DocumentStatusUpdater
from .embeddings_wrapper import Embeddings, LocalHashEmbeddings
from .models import IngestionRequest, PipelineResult
from .tasks import (
    ChunkingTask,
    ChunkStoreTask,
    EmbeddingTask,
    ParsingTask,
    S3DownloadTask,
)

logger = logging.getLogger(__name__)


def describe_failure(exc: BaseException) -> str:
    """Human-readable failure message stored on the document."""
    if isinstance(exc, KnowledgeBackendException):
        return exc.message
    return str(exc) or type(exc).__name__


class DocumentPipeline:
    """Orchestrate document ingestion: download -> extract -> chunk -> embed -> store."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        download_task: S3DownloadTask,
        settings: DocumentPipelineSettings | None = None,
        embeddings: Embeddings | None = None,
    ) -> None:
        """
        Initialize pipeline with configuration.

        Args:
            session_factory: Factory for metadata and chunk store sessions
            download_task: Fetches document bytes by storage key
            settings: Pipeline settings (uses defaults if None)
            embeddings: Embedding backend (local hashing embedder if None)
        """
        self._settings = settings or get_pipeline_settings()
        self._session_factory = session_factory

        self._download_task = download_task
        self._parsing_task = ParsingTask()
        self._chunking_task = ChunkingTask(
            chunk_size=self._settings.chunk_size,
            chunk_overlap=self._settings.chunk_overlap,
            min_split_offset=self._settings.min_split_offset,
        )
        self._embedding_task = EmbeddingTask(
            embeddings or LocalHashEmbeddings(self._settings.embedding_dimension)
        )
        self._chunk_store_task = ChunkStoreTask(session_factory)

    async def _mark_processing(self, document_id: str) -> None:
        async with self._session_factory() as session:
            await DocumentStatusUpdater(session).mark_processing(document_id)

    async def _mark_ready(self, document_id: str) -> None:
        async with self._session_factory() as session:
            await DocumentStatusUpdater(session).mark_ready(document_id)

    async def _mark_error(self, document_id: str, error_message: str) -> None:
        async with self._session_factory() as session:
            updater = DocumentStatusUpdater(
                session, error_max_length=self._settings.error_message_max_length
            )
            await updater.mark_error(document_id, error_message)

    async def process(self, request: IngestionRequest) -> PipelineResult:
        """
        Process one document through the full pipeline.

        Args:
            request: Trigger payload naming the document and its upload

        Returns:
            PipelineResult: Chunk and token counts plus timing

        Raises:
            DocumentNotFoundError: The document does not exist (nothing recorded)
            DownloadError: Bytes could not be fetched
            ParsingError: Content could not be parsed
            UnsupportedFormatError: No extractor for the MIME type
            EmptyContentError: Extraction produced only whitespace
            NoChunksProducedError: Chunking produced nothing
            PersistenceError: Chunk replacement failed
        """
        start_time = time.perf_counter()
        document_id = request.document_id
        context = {"document_id": document_id, "project_id": request.project_id}

        await self._mark_processing(document_id)

        try:
            downloaded = await self._download_task.download(
                request.storage_key, request.mime_type
            )

            text = self._parsing_task.extract(
                downloaded.content, downloaded.mime_type, request.filename
            )
            if not text.strip():
                raise EmptyContentError(document_id)

            chunks = self._chunking_task.chunk(text, request.project_id, document_id)
            if not chunks:
                raise NoChunksProducedError(document_id)

            embedded_chunks = self._embedding_task.embed(chunks)

            stored = await self._chunk_store_task.replace(
                request.project_id, document_id, embedded_chunks
            )

            await self._mark_ready(document_id)

        except Exception as e:
            log_exception_with_context(
                logger,
                f"{__name__}:process - Ingestion failed",
                e,
                **context,
            )
            try:
                await self._mark_error(document_id, describe_failure(e))
            except Exception as status_error:
                logger.error(
                    f"{__name__}:process - Failed to record ERROR status: "
                    f"{type(status_error).__name__}: {status_error}",
                    extra=context,
                )
            raise

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        result = PipelineResult(
            document_id=document_id,
            project_id=request.project_id,
            chunk_count=stored,
            token_count=sum(chunk.token_count for chunk in embedded_chunks),
            mime_type=downloaded.mime_type,
            processing_time_ms=elapsed_ms,
        )
        logger.info(
            f"{__name__}:process - Document processed",
            extra={
                **context,
                "chunk_count": result.chunk_count,
                "processing_time_ms": round(elapsed_ms, 2),
            },
        )
        return result
