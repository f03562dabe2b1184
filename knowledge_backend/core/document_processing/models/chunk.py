"""
Chunk domain model for document processing pipeline.

Represents a document chunk with deterministic ID, content, source window
and embedding.

Dependencies: pydantic
System role: Data structure for document chunks in ingestion pipeline
"""

from pydantic import BaseModel, Field


class Chunk(BaseModel):
    """Document chunk with optional embedding vector."""

    chunk_id: str = Field(description="Deterministic chunk identifier (content hash)")
    project_id: str = Field(description="Owning project")
    document_id: str = Field(description="Source document")
    chunk_index: int = Field(ge=0, description="Zero-based ordinal within the document")
    text: str = Field(description="Chunk text content")
    token_count: int = Field(ge=1, description="Whitespace token estimate")
    start_index: int = Field(default=0, ge=0, description="Window start in the normalized text")
    end_index: int = Field(default=0, ge=0, description="Window end in the normalized text")
    embedding: list[float] | None = Field(default=None, description="Embedding vector")
