"""
Configuration settings for the document ingestion pipeline.

Dependencies: pydantic, pydantic_settings
System role: Centralized pipeline configuration
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DocumentPipelineSettings(BaseSettings):
    """Settings for document ingestion pipeline."""

    model_config = SettingsConfigDict(
        env_prefix="DOC_PIPELINE_",
        case_sensitive=False,
        extra="ignore",
    )

    # Chunking settings
    chunk_size: int = Field(
        default=1800,
        description="Maximum chunk window in characters",
    )
    chunk_overlap: int = Field(
        default=200,
        description="Characters shared by consecutive windows",
    )
    min_split_offset: int = Field(
        default=400,
        description="A boundary is only used when it sits past this window offset",
    )

    # Embedding settings
    embedding_dimension: int = Field(
        default=1536,
        description="Length of every embedding vector",
    )

    # Status settings
    error_message_max_length: int = Field(
        default=2000,
        description="Stored error messages are truncated to this length",
    )


@lru_cache
def get_pipeline_settings() -> DocumentPipelineSettings:
    """
    Get cached pipeline settings instance.

    Returns:
        DocumentPipelineSettings: Singleton settings loaded from environment
    """
    return DocumentPipelineSettings()
