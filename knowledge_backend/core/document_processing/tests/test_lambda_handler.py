"""Unit tests for the SQS ingestion handler."""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest

from knowledge_backend.core.document_processing import lambda_handler
from knowledge_backend.core.document_processing.lambda_handler import (
    MessageParseError,
    handler,
    parse_ingestion_record,
)
from knowledge_backend.core.document_processing.models import PipelineResult
from knowledge_backend.core.exceptions import DownloadError


def _record(message_id: str, document_id: str = "doc-1", **overrides) -> dict:
    body = {
        "documentId": document_id,
        "projectId": "p1",
        "storageKey": f"projects/p1/{document_id}.md",
        "filename": f"{document_id}.md",
        "mimeType": "text/markdown",
    }
    body.update(overrides)
    return {"messageId": message_id, "receiptHandle": "h", "body": json.dumps(body)}


def _result(document_id: str) -> PipelineResult:
    return PipelineResult(
        document_id=document_id,
        project_id="p1",
        chunk_count=2,
        token_count=40,
        mime_type="text/markdown",
        processing_time_ms=12.5,
    )


@pytest.fixture
def lambda_env(monkeypatch):
    monkeypatch.setenv("S3_DOCUMENTS_BUCKET", "documents")
    monkeypatch.setenv("POSTGRES_HOST", "localhost")
    monkeypatch.setenv("POSTGRES_PASSWORD", "secret")


@pytest.fixture
def mock_pipeline(monkeypatch):
    pipeline = MagicMock()
    pipeline.process = AsyncMock(side_effect=lambda request: _result(request.document_id))
    monkeypatch.setattr(lambda_handler, "_get_pipeline", lambda: pipeline)
    return pipeline


def test_parse_ingestion_record():
    request = parse_ingestion_record(_record("m1"))

    assert request.document_id == "doc-1"
    assert request.mime_type == "text/markdown"


@pytest.mark.parametrize(
    "record",
    [
        {"messageId": "m1", "body": ""},
        {"messageId": "m1", "body": "not json"},
        {"messageId": "m1", "body": json.dumps({"documentId": "doc-1"})},
        {"body": "{}"},
    ],
)
def test_parse_ingestion_record_invalid(record):
    with pytest.raises(MessageParseError):
        parse_ingestion_record(record)


def test_handler_missing_environment(monkeypatch):
    for var in lambda_handler.REQUIRED_ENV_VARS:
        monkeypatch.delenv(var, raising=False)

    response = handler({"Records": [_record("m1")]}, None)

    assert response["statusCode"] == 500
    assert "S3_DOCUMENTS_BUCKET" in json.loads(response["body"])["error"]


def test_handler_all_records_succeed(lambda_env, mock_pipeline):
    event = {"Records": [_record("m1", "doc-1"), _record("m2", "doc-2")]}

    response = handler(event, None)

    assert response["statusCode"] == 200
    body = json.loads(response["body"])
    assert body["processed"] == 2
    assert body["failed"] == 0
    assert [r["document_id"] for r in body["results"]] == ["doc-1", "doc-2"]
    assert body["results"][0]["chunk_count"] == 2
    assert mock_pipeline.process.await_count == 2


def test_handler_partial_failure(lambda_env, mock_pipeline):
    async def process(request):
        if request.document_id == "doc-2":
            raise DownloadError("Failed to download file (404 Not Found): k", "k", 404)
        return _result(request.document_id)

    mock_pipeline.process.side_effect = process
    event = {
        "Records": [
            _record("m1", "doc-1"),
            _record("m2", "doc-2"),
            {"messageId": "m3", "body": "garbage"},
        ]
    }

    response = handler(event, None)

    assert response["statusCode"] == 206
    body = json.loads(response["body"])
    assert body["processed"] == 3
    assert body["failed"] == 2
    statuses = {r["messageId"]: r for r in body["results"]}
    assert statuses["m1"]["status"] == "success"
    assert statuses["m2"]["error"] == "Document processing failed"
    assert "404" in statuses["m2"]["details"]
    assert statuses["m3"]["error"] == "Invalid message format"


def test_handler_unexpected_error(lambda_env, mock_pipeline):
    mock_pipeline.process.side_effect = RuntimeError("boom")

    response = handler({"Records": [_record("m1")]}, None)

    assert response["statusCode"] == 206
    result = json.loads(response["body"])["results"][0]
    assert result["error"] == "Unexpected error"
    assert result["details"] == "boom"


def test_handler_empty_event(lambda_env, mock_pipeline):
    response = handler({}, None)

    assert response["statusCode"] == 200
    assert json.loads(response["body"])["processed"] == 0
