"""
Search API endpoints.

Routes: POST /projects/{project_id}/search

Dependencies: knowledge_backend.application.services, knowledge_backend.models
System role: Similarity search HTTP API
"""

from fastapi import APIRouter, Depends, HTTPException

from knowledge_backend.api.deps import get_retrieval_service
from knowledge_backend.application.services import RetrievalService
from knowledge_backend.core.exceptions import RetrievalError, ValidationError
from knowledge_backend.models.search import SearchHitResponse, SearchRequest, SearchResponse

router = APIRouter(tags=["search"])


@router.post("/projects/{project_id}/search", response_model=SearchResponse)
async def search_project(
    project_id: str,
    request: SearchRequest,
    retrieval_service: RetrievalService = Depends(get_retrieval_service),
) -> SearchResponse:
    """
    Rank a project's chunks against a text query or an embedding.

    Raises:
        HTTPException(400): Invalid query
        HTTPException(500): Chunk store unavailable
    """
    try:
        if request.embedding is not None:
            hits = await retrieval_service.search(project_id, request.embedding, request.limit)
        else:
            hits = await retrieval_service.search_by_text(project_id, request.query, request.limit)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except RetrievalError as e:
        raise HTTPException(status_code=500, detail=e.message)

    return SearchResponse(
        project_id=project_id,
        hits=[
            SearchHitResponse(
                chunk_id=hit.chunk.chunk_id,
                document_id=hit.chunk.document_id,
                chunk_index=hit.chunk.chunk_index,
                text=hit.chunk.text,
                token_count=hit.chunk.token_count,
                score=hit.score,
            )
            for hit in hits
        ],
    )
