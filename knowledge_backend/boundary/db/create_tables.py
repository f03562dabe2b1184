"""
Database table creation script.

Creates or drops every table registered on Base.metadata.

Dependencies: sqlalchemy, knowledge_backend.configs
System role: Database schema initialization

Usage:
    python -m knowledge_backend.boundary.db.create_tables
"""

import logging

from sqlalchemy import Engine

from knowledge_backend.boundary.db.base import Base
from knowledge_backend.boundary.db.connection import get_engine

# Import all models to register them with Base.metadata
from knowledge_backend.boundary.db.models.chunk_model import ChunkModel  # noqa: F401
from knowledge_backend.boundary.db.models.document_model import DocumentModel  # noqa: F401

logger = logging.getLogger(__name__)


def create_all_tables(engine: Engine | None = None) -> None:
    """
    Create all database tables from registered ORM models.

    Idempotent: existing tables are left unchanged.

    Raises:
        SQLAlchemyError: If the connection or DDL fails
    """
    engine = engine or get_engine()
    Base.metadata.create_all(bind=engine)
    logger.info(f"{__name__}:create_all_tables - Tables created: {sorted(Base.metadata.tables)}")


def drop_all_tables(engine: Engine | None = None) -> None:
    """
    Drop all database tables and their data.

    WARNING: Irreversible data loss. Only use in development environments.
    """
    engine = engine or get_engine()
    Base.metadata.drop_all(bind=engine)
    logger.info(f"{__name__}:drop_all_tables - All tables dropped")


if __name__ == "__main__":
    from knowledge_backend.observability import configure_logging

    configure_logging()
    create_all_tables()
