"""
End-to-end tests for DocumentPipeline.

Runs the real extraction, chunking, embedding, chunk store and status
updater against in-memory SQLite. Only the download is stubbed.
"""

from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from knowledge_backend.boundary.db.CRUD.chunk_crud import chunk_crud
from knowledge_backend.boundary.db.CRUD.document_crud import document_crud
from knowledge_backend.boundary.db.models.document_model import DocumentStatus
from knowledge_backend.core.document_processing import DocumentPipeline, IngestionRequest
from knowledge_backend.core.exceptions import (
    DocumentNotFoundError,
    DownloadError,
    EmptyContentError,
    ParsingError,
    PersistenceError,
    UnsupportedFormatError,
)


def _request(document, mime_type: str | None = "text/plain") -> IngestionRequest:
    return IngestionRequest(
        document_id=document.id,
        project_id=document.project_id,
        storage_key=document.storage_key,
        filename=document.filename,
        mime_type=mime_type,
    )


async def _reload(session_factory, document_id: str):
    async with session_factory() as session:
        document = await document_crud.get_by_id(session, document_id)
        chunks = await chunk_crud.get_by_document(session, document_id)
        return document, chunks


class TestSuccessfulIngestion:
    async def test_short_text_document(
        self, session_factory, make_document, fake_download_task
    ) -> None:
        document = await make_document()
        pipeline = DocumentPipeline(
            session_factory, fake_download_task(b"Hello world. This is a test.")
        )

        result = await pipeline.process(_request(document))

        assert result.chunk_count == 1
        assert result.token_count == 6
        assert result.mime_type == "text/plain"

        stored, chunks = await _reload(session_factory, document.id)
        assert stored.status == DocumentStatus.READY
        assert stored.error_message is None
        assert stored.processing_started_at is not None
        assert stored.processed_at is not None
        assert len(chunks) == 1
        assert chunks[0].text == "Hello world. This is a test."
        assert chunks[0].token_count == 6
        assert len(chunks[0].embedding) == 1536

    async def test_long_document_is_split(
        self, session_factory, make_document, fake_download_task
    ) -> None:
        paragraph = "Sentence number one is here. " * 15
        content = "\n\n".join(paragraph.strip() for _ in range(12)).encode()
        assert len(content) > 5000
        document = await make_document()
        pipeline = DocumentPipeline(session_factory, fake_download_task(content))

        result = await pipeline.process(_request(document))

        _, chunks = await _reload(session_factory, document.id)
        assert result.chunk_count == len(chunks) > 1
        assert [c.chunk_index for c in chunks] == list(range(len(chunks)))

    async def test_reingestion_replaces_chunks(
        self, session_factory, make_document, fake_download_task
    ) -> None:
        document = await make_document()
        long_text = "\n\n".join(["Paragraph text goes here. " * 20] * 6).encode()

        await DocumentPipeline(session_factory, fake_download_task(long_text)).process(
            _request(document)
        )
        await DocumentPipeline(session_factory, fake_download_task(b"Short now.")).process(
            _request(document)
        )

        stored, chunks = await _reload(session_factory, document.id)
        assert stored.status == DocumentStatus.READY
        assert [c.text for c in chunks] == ["Short now."]

    async def test_reingestion_after_error_clears_message(
        self, session_factory, make_document, fake_download_task
    ) -> None:
        document = await make_document()
        with pytest.raises(EmptyContentError):
            await DocumentPipeline(session_factory, fake_download_task(b"   ")).process(
                _request(document)
            )

        await DocumentPipeline(session_factory, fake_download_task(b"Fixed.")).process(
            _request(document)
        )

        stored, _ = await _reload(session_factory, document.id)
        assert stored.status == DocumentStatus.READY
        assert stored.error_message is None


class TestFailedIngestion:
    async def test_malformed_json(
        self, session_factory, make_document, fake_download_task
    ) -> None:
        document = await make_document(filename="data.json", mime_type="application/json")
        pipeline = DocumentPipeline(
            session_factory, fake_download_task(b'{"broken": ', "application/json")
        )

        with pytest.raises(ParsingError):
            await pipeline.process(_request(document, "application/json"))

        stored, chunks = await _reload(session_factory, document.id)
        assert stored.status == DocumentStatus.ERROR
        assert stored.error_message.startswith("Failed to parse JSON document")
        assert chunks == []

    async def test_download_404(self, session_factory, make_document) -> None:
        document = await make_document()
        download_task = AsyncMock()
        download_task.download.side_effect = DownloadError(
            "Failed to download file (404 Not Found)",
            document.storage_key,
            status_code=404,
        )
        pipeline = DocumentPipeline(session_factory, download_task)

        with pytest.raises(DownloadError):
            await pipeline.process(_request(document))

        stored, _ = await _reload(session_factory, document.id)
        assert stored.status == DocumentStatus.ERROR
        assert "404" in stored.error_message
        assert "Details" not in stored.error_message

    async def test_empty_content(
        self, session_factory, make_document, fake_download_task
    ) -> None:
        document = await make_document()
        pipeline = DocumentPipeline(session_factory, fake_download_task(b" \n\t "))

        with pytest.raises(EmptyContentError):
            await pipeline.process(_request(document))

        stored, _ = await _reload(session_factory, document.id)
        assert stored.status == DocumentStatus.ERROR
        assert stored.error_message == (
            "Uploaded document does not contain usable textual content."
        )

    async def test_unsupported_format(
        self, session_factory, make_document, fake_download_task
    ) -> None:
        document = await make_document(filename="image.png", mime_type="image/png")
        pipeline = DocumentPipeline(session_factory, fake_download_task(b"\x89PNG", "image/png"))

        with pytest.raises(UnsupportedFormatError):
            await pipeline.process(_request(document, "image/png"))

        stored, _ = await _reload(session_factory, document.id)
        assert stored.status == DocumentStatus.ERROR
        assert "image/png" in stored.error_message

    async def test_error_message_is_truncated(self, session_factory, make_document) -> None:
        document = await make_document()
        download_task = AsyncMock()
        download_task.download.side_effect = RuntimeError("x" * 5000)
        pipeline = DocumentPipeline(session_factory, download_task)

        with pytest.raises(RuntimeError):
            await pipeline.process(_request(document))

        stored, _ = await _reload(session_factory, document.id)
        assert len(stored.error_message) == 2000

    async def test_chunk_store_failure_keeps_previous_chunks(
        self, session_factory, make_document, fake_download_task, monkeypatch
    ) -> None:
        document = await make_document()
        await DocumentPipeline(session_factory, fake_download_task(b"First version.")).process(
            _request(document)
        )

        async def failing_flush(self, objects=None):
            raise OperationalError("INSERT INTO project_chunks", {}, Exception("disk I/O error"))

        monkeypatch.setattr(AsyncSession, "flush", failing_flush)
        pipeline = DocumentPipeline(session_factory, fake_download_task(b"Second version."))

        with pytest.raises(PersistenceError) as exc_info:
            await pipeline.process(_request(document))

        monkeypatch.undo()
        assert exc_info.value.details["operation"] == "replace_document_chunks"
        stored, chunks = await _reload(session_factory, document.id)
        assert stored.status == DocumentStatus.ERROR
        assert stored.error_message == "Failed to store document chunks: OperationalError"
        assert [c.text for c in chunks] == ["First version."]

    async def test_status_failure_does_not_mask_original_error(
        self, session_factory, make_document, fake_download_task
    ) -> None:
        document = await make_document()
        pipeline = DocumentPipeline(session_factory, fake_download_task(b""))
        pipeline._mark_error = AsyncMock(side_effect=RuntimeError("database down"))

        with pytest.raises(EmptyContentError):
            await pipeline.process(_request(document))

        pipeline._mark_error.assert_awaited_once()

    async def test_missing_document(self, session_factory, fake_download_task) -> None:
        download_task = fake_download_task(b"text")
        pipeline = DocumentPipeline(session_factory, download_task)
        request = IngestionRequest(
            document_id="does-not-exist",
            project_id="p",
            storage_key="k",
            filename="f.txt",
            mime_type="text/plain",
        )

        with pytest.raises(DocumentNotFoundError):
            await pipeline.process(request)

        download_task.download.assert_not_called()
