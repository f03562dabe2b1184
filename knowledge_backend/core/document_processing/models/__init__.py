"""
Models for document processing pipeline.

Exports: Chunk, PipelineResult, IngestionRequest, SQSRecord
"""

from .chunk import Chunk
from .ingestion_event import IngestionRequest, SQSRecord
from .pipeline_result import PipelineResult

__all__ = [
    "Chunk",
    "PipelineResult",
    "IngestionRequest",
    "SQSRecord",
]
