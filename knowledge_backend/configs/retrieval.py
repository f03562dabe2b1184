"""
Retrieval configuration settings.

Controls the project-scoped similarity search: how many stored chunks are
scanned and how many hits are returned by default. The query embedding
dimension comes from the ingestion pipeline settings.

Dependencies: pydantic, pydantic_settings
System role: Similarity search configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RetrievalSettings(BaseSettings):
    """Similarity search configuration."""

    model_config = SettingsConfigDict(
        env_prefix="RETRIEVAL_",
        case_sensitive=False,
        extra="ignore",
    )

    default_limit: int = Field(default=8, description="Hits returned when no limit is given")
    max_limit: int = Field(default=64, description="Upper bound accepted by the search API")
    candidate_limit: int = Field(
        default=2048,
        description="Maximum stored chunks scanned per project search",
    )
