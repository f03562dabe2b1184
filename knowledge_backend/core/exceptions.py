"""
Exception hierarchy for the knowledge backend.

Every ingestion stage raises a subclass of DocumentProcessingError so the
pipeline can record one human-readable message on the document and re-raise.
All exceptions carry a details dict for observability.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class KnowledgeBackendException(Exception):
    """Base exception for all knowledge backend errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(KnowledgeBackendException):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class DocumentNotFoundError(KnowledgeBackendException):
    """Raised when a document record cannot be found."""

    def __init__(self, document_id: str, details: dict[str, Any] | None = None) -> None:
        details = details or {}
        details["document_id"] = document_id
        super().__init__(f"Document not found: {document_id}", details)


class RetrievalError(KnowledgeBackendException):
    """Raised when similarity search cannot be served."""

    def __init__(
        self,
        message: str,
        project_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if project_id:
            details["project_id"] = project_id
        super().__init__(message, details)


class DocumentProcessingError(KnowledgeBackendException):
    """Base exception for document ingestion failures."""

    def __init__(
        self,
        message: str,
        document_id: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize document processing error.

        Args:
            message: Error message (stored on the document when ingestion fails)
            document_id: ID of the document being ingested
            details: Additional context
        """
        details = details or {}
        if document_id:
            details["document_id"] = document_id
        super().__init__(message, details)


class UnsupportedFormatError(DocumentProcessingError):
    """Raised when neither the MIME type nor the filename maps to an extractor."""

    def __init__(
        self,
        mime_type: str,
        filename: str | None = None,
        document_id: str | None = None,
    ) -> None:
        details: dict[str, Any] = {"mime_type": mime_type}
        if filename:
            details["filename"] = filename
        super().__init__(
            f'Unsupported file type "{mime_type}". '
            "Please upload plain text, Markdown, JSON, or PDF files.",
            document_id,
            details,
        )
        self.mime_type = mime_type


class ParsingError(DocumentProcessingError):
    """Raised when format-specific parsing fails (malformed JSON, unreadable PDF)."""

    def __init__(
        self,
        message: str,
        document_id: str | None = None,
        file_type: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if file_type:
            details["file_type"] = file_type
        super().__init__(message, document_id, details)


class DownloadError(DocumentProcessingError):
    """Raised when document bytes cannot be fetched from object storage."""

    def __init__(
        self,
        message: str,
        storage_key: str | None = None,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if storage_key:
            details["storage_key"] = storage_key
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(message, details=details)
        self.storage_key = storage_key
        self.status_code = status_code


class EmptyContentError(DocumentProcessingError):
    """Raised when extraction yields no usable text."""

    def __init__(self, document_id: str | None = None) -> None:
        super().__init__(
            "Uploaded document does not contain usable textual content.",
            document_id,
        )


class NoChunksProducedError(DocumentProcessingError):
    """Raised when chunking produces no chunks."""

    def __init__(self, document_id: str | None = None) -> None:
        super().__init__(
            "Unable to generate text chunks from the uploaded document.",
            document_id,
        )


class PersistenceError(DocumentProcessingError):
    """Raised when the chunk store rejects a replace operation."""

    def __init__(
        self,
        message: str,
        document_id: str | None = None,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, document_id, details)
