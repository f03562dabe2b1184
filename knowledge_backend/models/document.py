"""
Document API schemas.

Dependencies: pydantic
System role: Document API contracts
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from knowledge_backend.boundary.db.models.document_model import DocumentStatus


class RegisterDocumentRequest(BaseModel):
    """Request schema for registering an upload that is already in storage."""

    storage_key: str = Field(description="Object key returned by the upload step")
    filename: str = Field(description="Original filename")
    mime_type: str = Field(
        default="application/octet-stream",
        description="Declared MIME type of the file",
    )
    size: int = Field(ge=0, description="File size in bytes")
    checksum: str | None = Field(default=None, description="Optional content checksum")


class RegisterDocumentResponse(BaseModel):
    """Response schema after registration; ingestion continues in the background."""

    document_id: str
    status: DocumentStatus


class DocumentResponse(BaseModel):
    """Response schema for a document record."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    project_id: str
    storage_key: str
    filename: str
    mime_type: str
    size: int
    checksum: str | None = None
    status: DocumentStatus
    error_message: str | None = None
    processing_started_at: datetime | None = None
    processed_at: datetime | None = None
    created_at: datetime
    updated_at: datetime


class DocumentListResponse(BaseModel):
    """Document list response."""

    documents: list[DocumentResponse]
    total: int
