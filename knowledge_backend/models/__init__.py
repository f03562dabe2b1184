"""API request and response schemas."""

from .document import (
    DocumentListResponse,
    DocumentResponse,
    RegisterDocumentRequest,
    RegisterDocumentResponse,
)
from .search import SearchHitResponse, SearchRequest, SearchResponse

__all__ = [
    "DocumentListResponse",
    "DocumentResponse",
    "RegisterDocumentRequest",
    "RegisterDocumentResponse",
    "SearchHitResponse",
    "SearchRequest",
    "SearchResponse",
]
