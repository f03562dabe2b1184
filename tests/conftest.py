"""
Shared test fixtures for the test suite.

Provides: in-memory SQLite async database, session factory, document factory,
fake download task
Dependencies: pytest, sqlalchemy, aiosqlite
System role: Test infrastructure and fixture management
"""

import uuid
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from knowledge_backend.boundary.db.base import Base
from knowledge_backend.boundary.db.CRUD.document_crud import document_crud
from knowledge_backend.boundary.db.models.document_model import DocumentModel
from knowledge_backend.core.document_processing.tasks.s3_download_task import DownloadedDocument


@pytest.fixture
async def test_engine():
    """In-memory SQLite engine with all tables created."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the test engine."""
    return async_sessionmaker(test_engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
async def test_async_db(session_factory):
    """
    Async session for a single test.

    Yields:
        AsyncSession: Session rolled back after the test
    """
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def project_id() -> str:
    return "project-" + uuid.uuid4().hex[:8]


@pytest.fixture
def make_document(session_factory, project_id):
    """Factory creating a committed PENDING document."""

    async def _make(
        filename: str = "notes.txt",
        mime_type: str = "text/plain",
        storage_key: str | None = None,
        project: str | None = None,
    ) -> DocumentModel:
        async with session_factory() as session:
            document = await document_crud.create(
                session,
                project_id=project or project_id,
                storage_key=storage_key or f"projects/{project or project_id}/{filename}",
                filename=filename,
                mime_type=mime_type,
                size=0,
            )
            await session.commit()
            return document

    return _make


@pytest.fixture
def fake_download_task():
    """Download task stub returning configurable bytes."""

    def _make(content: bytes, mime_type: str = "text/plain") -> AsyncMock:
        task = AsyncMock()
        task.download = AsyncMock(
            side_effect=lambda storage_key, declared_mime_type=None: DownloadedDocument(
                storage_key=storage_key,
                content=content,
                mime_type=mime_type,
            )
        )
        return task

    return _make
