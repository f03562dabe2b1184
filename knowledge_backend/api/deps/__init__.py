"""API-specific dependencies."""

from .dependencies import (
    get_document_pipeline,
    get_document_service,
    get_retrieval_service,
    get_service_cache,
    get_settings_dependency,
)

__all__ = [
    "get_document_pipeline",
    "get_document_service",
    "get_retrieval_service",
    "get_service_cache",
    "get_settings_dependency",
]
