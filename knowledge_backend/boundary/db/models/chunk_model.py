"""
Chunk ORM model.

One row per embedded text chunk. The embedding is stored as a JSON array
and ranked in-process by the retriever.

Dependencies: sqlalchemy, knowledge_backend.boundary.db.base
System role: Chunk store
"""

from datetime import datetime

from sqlalchemy import JSON, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from knowledge_backend.boundary.db.base import Base, utc_now


class ChunkModel(Base):
    """
    Stored chunk with its embedding.

    Attributes:
        chunk_id: Content-addressed identifier (32 hex chars)
        project_id: Owning project, used to scope searches
        document_id: Source document (ON DELETE CASCADE)
        chunk_index: Zero-based ordinal within the document
        text: Chunk text
        embedding: Embedding vector as a list of floats
        token_count: Whitespace token count
        created_at: Insert timestamp (UTC)
    """

    __tablename__ = "project_chunks"
    __table_args__ = (
        Index("ix_project_chunks_project_order", "project_id", "created_at", "chunk_index"),
    )

    chunk_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    project_id: Mapped[str] = mapped_column(String(64), nullable=False)
    document_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("project_documents.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    chunk_index: Mapped[int] = mapped_column(Integer, nullable=False)
    text: Mapped[str] = mapped_column(Text, nullable=False)
    embedding: Mapped[list[float]] = mapped_column(JSON, nullable=False)
    token_count: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        nullable=False,
    )

    document = relationship("DocumentModel", back_populates="chunks")
