"""
Document processing pipeline for ingestion.

Extracts, chunks, embeds and stores uploaded documents, recording status on
the document as it goes.

Dependencies: httpx, pypdf, sqlalchemy, pydantic
System role: Document ingestion pipeline entrypoint
"""

from .configs import (
    DocumentPipelineSettings,
    get_pipeline_settings,
)
from .embeddings_wrapper import Embeddings, LocalHashEmbeddings
from .entrypoint import DocumentPipeline
from .models import Chunk, IngestionRequest, PipelineResult

__all__ = [
    "DocumentPipeline",
    "DocumentPipelineSettings",
    "get_pipeline_settings",
    "Embeddings",
    "LocalHashEmbeddings",
    "Chunk",
    "IngestionRequest",
    "PipelineResult",
]
