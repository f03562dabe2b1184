"""API tests for the search and health endpoints."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi.testclient import TestClient

from knowledge_backend.api.deps import get_retrieval_service
from knowledge_backend.api.main import create_app
from knowledge_backend.core.document_processing.models import Chunk
from knowledge_backend.core.exceptions import RetrievalError, ValidationError
from knowledge_backend.core.retriever import SearchHit


def _hit(index: int, score: float) -> SearchHit:
    return SearchHit(
        chunk=Chunk(
            chunk_id=f"c{index}",
            project_id="p1",
            document_id="doc-1",
            chunk_index=index,
            text=f"chunk {index}",
            token_count=2,
            embedding=[0.0, 1.0],
        ),
        score=score,
    )


@pytest.fixture
def mock_retrieval_service() -> MagicMock:
    service = MagicMock()
    service.search = AsyncMock(return_value=[_hit(0, 0.9), _hit(1, 0.5)])
    service.search_by_text = AsyncMock(return_value=[_hit(1, 0.7)])
    return service


@pytest.fixture
def client(mock_retrieval_service) -> TestClient:
    app = create_app()
    app.dependency_overrides[get_retrieval_service] = lambda: mock_retrieval_service
    return TestClient(app)


class TestSearch:
    def test_search_by_query(self, client: TestClient, mock_retrieval_service) -> None:
        response = client.post("/api/v1/projects/p1/search", json={"query": "cells", "limit": 3})

        assert response.status_code == 200
        body = response.json()
        assert body["project_id"] == "p1"
        assert body["hits"] == [
            {
                "chunk_id": "c1",
                "document_id": "doc-1",
                "chunk_index": 1,
                "text": "chunk 1",
                "token_count": 2,
                "score": 0.7,
            }
        ]
        mock_retrieval_service.search_by_text.assert_awaited_once_with("p1", "cells", 3)

    def test_search_by_embedding(self, client: TestClient, mock_retrieval_service) -> None:
        response = client.post("/api/v1/projects/p1/search", json={"embedding": [0.0, 1.0]})

        assert response.status_code == 200
        assert [hit["score"] for hit in response.json()["hits"]] == [0.9, 0.5]
        mock_retrieval_service.search.assert_awaited_once_with("p1", [0.0, 1.0], 8)

    @pytest.mark.parametrize(
        "payload",
        [
            {},
            {"query": "a", "embedding": [1.0]},
            {"query": "a", "limit": 0},
            {"query": "a", "limit": 65},
        ],
    )
    def test_invalid_payloads(self, client: TestClient, payload: dict) -> None:
        assert client.post("/api/v1/projects/p1/search", json=payload).status_code == 422

    def test_validation_error_maps_to_400(
        self, client: TestClient, mock_retrieval_service
    ) -> None:
        mock_retrieval_service.search_by_text.side_effect = ValidationError(
            "query must not be empty", field="query"
        )

        response = client.post("/api/v1/projects/p1/search", json={"query": " "})

        assert response.status_code == 400
        assert response.json()["detail"] == "query must not be empty"

    def test_retrieval_error_maps_to_500(
        self, client: TestClient, mock_retrieval_service
    ) -> None:
        mock_retrieval_service.search_by_text.side_effect = RetrievalError("Failed to load chunks")

        response = client.post("/api/v1/projects/p1/search", json={"query": "x"})

        assert response.status_code == 500


def test_health_check() -> None:
    client = TestClient(create_app())

    response = client.get("/api/v1/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "service": "knowledge-backend"}
