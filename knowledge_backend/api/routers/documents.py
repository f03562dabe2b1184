"""
Document API endpoints.

Routes:
    POST   /projects/{project_id}/documents
    GET    /projects/{project_id}/documents
    GET    /documents/{document_id}
    DELETE /documents/{document_id}

Dependencies: knowledge_backend.application.services, knowledge_backend.models
System role: Document HTTP API
"""

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Query

from knowledge_backend.api.deps import get_document_pipeline, get_document_service
from knowledge_backend.application.services import DocumentService
from knowledge_backend.core.document_processing import DocumentPipeline, IngestionRequest
from knowledge_backend.core.exceptions import DocumentNotFoundError, ValidationError
from knowledge_backend.models.document import (
    DocumentListResponse,
    DocumentResponse,
    RegisterDocumentRequest,
    RegisterDocumentResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(tags=["documents"])


async def run_ingestion(pipeline: DocumentPipeline, request: IngestionRequest) -> None:
    """
    Background task running the ingestion pipeline for one document.

    The pipeline records failures on the document itself, so errors are
    only logged here.
    """
    try:
        result = await pipeline.process(request)
        logger.info(
            f"{__name__}:run_ingestion - Ingestion completed",
            extra={"document_id": result.document_id, "chunk_count": result.chunk_count},
        )
    except Exception as e:
        logger.warning(
            f"{__name__}:run_ingestion - Ingestion failed: {type(e).__name__}",
            extra={"document_id": request.document_id},
        )


@router.post(
    "/projects/{project_id}/documents",
    response_model=RegisterDocumentResponse,
    status_code=202,
)
async def register_document(
    project_id: str,
    request: RegisterDocumentRequest,
    background_tasks: BackgroundTasks,
    document_service: DocumentService = Depends(get_document_service),
    pipeline: DocumentPipeline = Depends(get_document_pipeline),
) -> RegisterDocumentResponse:
    """
    Register an uploaded document and schedule its ingestion.

    Raises:
        HTTPException(400): Invalid request
    """
    try:
        document = await document_service.register_document(
            project_id=project_id,
            storage_key=request.storage_key,
            filename=request.filename,
            mime_type=request.mime_type,
            size=request.size,
            checksum=request.checksum,
        )
        await document_service.db.commit()
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)

    background_tasks.add_task(
        run_ingestion,
        pipeline,
        IngestionRequest(
            document_id=document.id,
            project_id=project_id,
            storage_key=document.storage_key,
            filename=document.filename,
            mime_type=document.mime_type,
        ),
    )
    return RegisterDocumentResponse(document_id=document.id, status=document.status)


@router.get("/projects/{project_id}/documents", response_model=DocumentListResponse)
async def list_documents(
    project_id: str,
    limit: int = Query(default=200, ge=1, le=200),
    document_service: DocumentService = Depends(get_document_service),
) -> DocumentListResponse:
    """List a project's documents, newest first."""
    documents = await document_service.list_documents(project_id, limit=limit)
    return DocumentListResponse(
        documents=[DocumentResponse.model_validate(document) for document in documents],
        total=len(documents),
    )


@router.get("/documents/{document_id}", response_model=DocumentResponse)
async def get_document(
    document_id: str,
    document_service: DocumentService = Depends(get_document_service),
) -> DocumentResponse:
    """
    Get one document with its ingestion status.

    Raises:
        HTTPException(404): Document not found
    """
    try:
        document = await document_service.get_document(document_id)
    except DocumentNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    return DocumentResponse.model_validate(document)


@router.delete("/documents/{document_id}", status_code=204)
async def delete_document(
    document_id: str,
    document_service: DocumentService = Depends(get_document_service),
) -> None:
    """
    Delete a document and its chunks.

    Raises:
        HTTPException(404): Document not found
    """
    try:
        await document_service.delete_document(document_id)
        await document_service.db.commit()
    except DocumentNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
