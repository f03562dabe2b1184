"""
Application services.

Exports: DocumentService, RetrievalService
"""

from .document_service import DocumentService
from .retrieval_service import RetrievalService

__all__ = ["DocumentService", "RetrievalService"]
