"""
Database boundary layer: ORM models, CRUD operations, and connection management.

Exports:
  - Base, StringIdMixin, TimestampMixin: Model building blocks
  - get_engine(), get_async_engine(), get_async_session_factory(), get_async_db()
  - DocumentModel, DocumentStatus, ChunkModel: Persisted entities
  - document_crud, chunk_crud: CRUD singletons

Dependencies: sqlalchemy, knowledge_backend.configs
System role: Document metadata store and chunk store
"""

from knowledge_backend.boundary.db.base import Base, StringIdMixin, TimestampMixin
from knowledge_backend.boundary.db.connection import (
    get_async_db,
    get_async_engine,
    get_async_session_factory,
    get_engine,
)
from knowledge_backend.boundary.db.models import ChunkModel, DocumentModel, DocumentStatus
from knowledge_backend.boundary.db.CRUD import (
    BaseCRUD,
    ChunkCRUD,
    DocumentCRUD,
    chunk_crud,
    document_crud,
)

__all__ = [
    "Base",
    "StringIdMixin",
    "TimestampMixin",
    "get_engine",
    "get_async_engine",
    "get_async_session_factory",
    "get_async_db",
    "ChunkModel",
    "DocumentModel",
    "DocumentStatus",
    "BaseCRUD",
    "ChunkCRUD",
    "DocumentCRUD",
    "chunk_crud",
    "document_crud",
]
