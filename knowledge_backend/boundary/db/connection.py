"""
Database connection management.

Provides SQLAlchemy engines, session factories, and the FastAPI dependency
for async session injection.

Dependencies: sqlalchemy, knowledge_backend.configs
System role: Database connection lifecycle management
"""

from functools import lru_cache
from typing import AsyncGenerator

from sqlalchemy import Engine, create_engine
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from knowledge_backend.configs import get_settings


def get_engine() -> Engine:
    """
    Create the sync engine used for schema management.

    Returns:
        Engine: SQLAlchemy engine with pre-ping health checks
    """
    db_config = get_settings().database
    return create_engine(
        db_config.database_url,
        echo=db_config.echo_sql,
        pool_size=db_config.pool_size,
        max_overflow=db_config.max_overflow,
        pool_timeout=db_config.pool_timeout,
        pool_pre_ping=True,
    )


@lru_cache
def get_async_engine() -> AsyncEngine:
    """
    Create the async engine shared by the API and the ingestion pipeline.

    Cached so every request reuses one connection pool.

    Returns:
        AsyncEngine: Configured async SQLAlchemy engine
    """
    db_config = get_settings().database
    return create_async_engine(
        db_config.async_database_url,
        echo=db_config.echo_sql,
        pool_size=db_config.pool_size,
        max_overflow=db_config.max_overflow,
        pool_timeout=db_config.pool_timeout,
        pool_pre_ping=True,
    )


def get_async_session_factory(engine: AsyncEngine | None = None) -> async_sessionmaker[AsyncSession]:
    """
    Create an async session factory for database operations.

    Sessions do not autoflush and keep attributes loaded after commit, so
    returned models can be serialized once the transaction has ended.

    Args:
        engine: Engine to bind (defaults to the configured async engine)

    Returns:
        async_sessionmaker: Async session factory

    Usage:
        SessionFactory = get_async_session_factory()
        async with SessionFactory() as session:
            session.add(obj)
            await session.commit()
    """
    return async_sessionmaker(
        bind=engine or get_async_engine(),
        autoflush=False,
        expire_on_commit=False,
    )


async def get_async_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency yielding a request-scoped async session.

    Yields:
        AsyncSession: Session closed once the route completes
    """
    SessionFactory = get_async_session_factory()
    async with SessionFactory() as session:
        yield session
