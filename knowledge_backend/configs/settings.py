"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from knowledge_backend.configs.base import BaseSettings
from knowledge_backend.configs.database import DatabaseSettings
from knowledge_backend.configs.retrieval import RetrievalSettings
from knowledge_backend.configs.s3_documents import S3DocumentsSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    database: DatabaseSettings = DatabaseSettings()
    retrieval: RetrievalSettings = RetrievalSettings()
    s3_documents: S3DocumentsSettings = S3DocumentsSettings()


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Environment variables are read once and cached for the process.

    Returns:
        Settings: Application settings instance

    Usage:
        from knowledge_backend.configs import get_settings
        settings = get_settings()
    """
    return Settings()
