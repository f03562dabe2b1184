"""
FastAPI application with assembled routers.

Dependencies: fastapi, uvicorn, knowledge_backend.api.routers
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from knowledge_backend.api.deps.dependencies import get_service_cache
from knowledge_backend.configs import get_settings
from knowledge_backend.observability import configure_logging

from .routers import documents_router, health_router, search_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Configures logging on startup and drops cached clients on shutdown.
    """
    configure_logging(get_settings().log_level)
    logger = logging.getLogger("uvicorn")
    logger.info("Knowledge backend starting")

    yield

    get_service_cache().clear()
    logger.info("Service cache cleared")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    app = FastAPI(
        title="Knowledge Backend API",
        description="Document ingestion and semantic retrieval for project knowledge bases",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register all routers with /api/v1 prefix for versioning
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(documents_router, prefix="/api/v1")
    app.include_router(search_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "knowledge_backend.api.main:app",
        host="0.0.0.0",
        port=8000,
    )
