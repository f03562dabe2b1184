"""
Pipeline result model for document processing.

Dependencies: pydantic
System role: Return type for DocumentPipeline.process()
"""

from pydantic import BaseModel, Field


class PipelineResult(BaseModel):
    """Result of document processing pipeline execution."""

    document_id: str = Field(description="Unique document identifier")
    project_id: str = Field(description="Owning project")
    chunk_count: int = Field(description="Number of chunks stored")
    token_count: int = Field(description="Total token estimate across chunks")
    mime_type: str = Field(description="Effective MIME type used for extraction")
    processing_time_ms: float = Field(description="Total processing time in milliseconds")
