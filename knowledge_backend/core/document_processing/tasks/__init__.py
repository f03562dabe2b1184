"""
Task modules for document processing pipeline.

Exports: S3DownloadTask, ParsingTask, ChunkingTask, EmbeddingTask, ChunkStoreTask
"""

from .chunk_store_task import ChunkStoreTask
from .chunking_task import ChunkingTask
from .embedding_task import EmbeddingTask
from .parsing_task import ParsingTask
from .s3_download_task import DownloadedDocument, S3DownloadTask

__all__ = [
    "S3DownloadTask",
    "DownloadedDocument",
    "ParsingTask",
    "ChunkingTask",
    "EmbeddingTask",
    "ChunkStoreTask",
]
