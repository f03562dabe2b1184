"""
Ingestion trigger schema.

Validates the message that starts ingestion of one document, whether it
arrives from the API's background task or from an SQS record body.

Dependencies: pydantic
System role: Data validation and contract definition
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class IngestionRequest(BaseModel):
    """Trigger payload for a single document ingestion."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        json_schema_extra={
            "example": {
                "documentId": "550e8400-e29b-41d4-a716-446655440000",
                "projectId": "project-123",
                "storageKey": "projects/project-123/documents/notes.md",
                "filename": "notes.md",
                "mimeType": "text/markdown",
            }
        },
    )

    document_id: str = Field(..., min_length=1, description="Document ID in the metadata store")
    project_id: str = Field(..., min_length=1, description="Project the chunks belong to")
    storage_key: str = Field(..., min_length=1, description="Object storage key of the upload")
    filename: str = Field(..., description="Original filename")
    mime_type: str | None = Field(default=None, description="Declared MIME type from the upload")


class SQSRecord(BaseModel):
    """Single SQS record wrapper."""

    messageId: str
    body: str
    receiptHandle: str | None = None
    attributes: dict = {}
    messageAttributes: dict = {}
