"""
CRUD operations for database models.

Usage:
    from knowledge_backend.boundary.db.CRUD import document_crud, chunk_crud

    document = await document_crud.get_by_id(db, document_id)
    candidates = await chunk_crud.get_by_project(db, project_id)
"""

from knowledge_backend.boundary.db.CRUD.base_crud import BaseCRUD
from knowledge_backend.boundary.db.CRUD.chunk_crud import ChunkCRUD, chunk_crud
from knowledge_backend.boundary.db.CRUD.document_crud import DocumentCRUD, document_crud

__all__ = [
    "BaseCRUD",
    "ChunkCRUD",
    "chunk_crud",
    "DocumentCRUD",
    "document_crud",
]
