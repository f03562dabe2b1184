"""
Database models package.

Exports:
  - DocumentModel, DocumentStatus: Document ORM model and status enum
  - ChunkModel: Stored chunk with embedding
"""

from knowledge_backend.boundary.db.models.chunk_model import ChunkModel
from knowledge_backend.boundary.db.models.document_model import DocumentModel, DocumentStatus

__all__ = [
    "ChunkModel",
    "DocumentModel",
    "DocumentStatus",
]
