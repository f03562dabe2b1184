"""
Lambda handler for SQS-triggered document ingestion.

Each SQS record body is an IngestionRequest JSON document. Records are
processed sequentially; a bad record is reported and the batch continues.

Environment variables:
- S3_DOCUMENTS_BUCKET: S3 bucket holding raw uploads
- POSTGRES_HOST / POSTGRES_PASSWORD: Metadata and chunk store
- LOG_LEVEL: Logging level

Dependencies: models.ingestion_event, entrypoint, boundary
System role: Lambda entry point for async document ingestion
"""

import asyncio
import json
import logging
import os
from typing import Any, Dict

from dotenv import load_dotenv
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from knowledge_backend.boundary.aws.s3_client import S3DocumentClient
from knowledge_backend.configs import get_settings
from knowledge_backend.core.exceptions import KnowledgeBackendException

from .entrypoint import DocumentPipeline
from .models.ingestion_event import IngestionRequest, SQSRecord
from .tasks import S3DownloadTask

# Load environment variables from .env if present
load_dotenv()

logger = logging.getLogger(__name__)
logger.setLevel(os.getenv("LOG_LEVEL", "INFO"))

REQUIRED_ENV_VARS = (
    "S3_DOCUMENTS_BUCKET",
    "POSTGRES_HOST",
    "POSTGRES_PASSWORD",
)


class MessageParseError(Exception):
    """Raised when an SQS message cannot be parsed."""

    pass


def parse_ingestion_record(record: Dict[str, Any]) -> IngestionRequest:
    """
    Parse and validate an SQS record.

    Args:
        record: Single SQS record from event['Records']

    Returns:
        IngestionRequest: Validated trigger payload

    Raises:
        MessageParseError: Invalid record or message body
    """
    try:
        sqs_record = SQSRecord.model_validate(record)
        if not sqs_record.body.strip():
            raise ValueError("Empty message body")

        message = IngestionRequest.model_validate_json(sqs_record.body)
        logger.info(
            "%s:parse_ingestion_record - Parsed message",
            __name__,
            extra={
                "message_id": sqs_record.messageId,
                "document_id": message.document_id,
            },
        )
        return message

    except PydanticValidationError as e:
        logger.error("%s:parse_ingestion_record - ValidationError: %s", __name__, e)
        raise MessageParseError(f"Invalid message schema: {e}") from e
    except ValueError as e:
        logger.error("%s:parse_ingestion_record - ValueError: %s", __name__, e)
        raise MessageParseError(f"Invalid message: {e}") from e


def validate_environment() -> Dict[str, str]:
    """
    Check that the variables needed to reach storage and the database are set.

    Returns:
        Mapping of each required variable to its value

    Raises:
        ValueError: One or more variables are unset or empty
    """
    missing = [name for name in REQUIRED_ENV_VARS if not os.getenv(name)]
    if missing:
        raise ValueError(f"Missing required environment variables: {', '.join(missing)}")

    logger.info("%s:validate_environment - Environment validated", __name__)
    return {name: os.environ[name] for name in REQUIRED_ENV_VARS}


def _build_pipeline() -> DocumentPipeline:
    """
    Build the pipeline from settings.

    Each record runs in its own event loop, so the engine keeps no pooled
    connections between records.
    """
    settings = get_settings()
    engine = create_async_engine(
        settings.database.async_database_url,
        poolclass=NullPool,
        pool_pre_ping=True,
    )
    session_factory = async_sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)

    s3_settings = settings.s3_documents
    storage_client = S3DocumentClient(
        bucket=s3_settings.bucket,
        region=s3_settings.region,
        access_key_id=s3_settings.access_key_id,
        secret_access_key=s3_settings.secret_access_key,
    )
    download_task = S3DownloadTask(
        storage_client,
        timeout=s3_settings.download_timeout,
        url_expiry=s3_settings.download_url_expiry,
    )
    return DocumentPipeline(session_factory, download_task)


def _get_pipeline() -> DocumentPipeline:
    """Return the pipeline, created once per Lambda container."""
    if not hasattr(_get_pipeline, "_pipeline"):
        _get_pipeline._pipeline = _build_pipeline()
    return _get_pipeline._pipeline


def _failure(message_id: str | None, error: str, details: str) -> Dict[str, Any]:
    return {"messageId": message_id, "status": "failed", "error": error, "details": details}


def _process_record(record: Dict[str, Any]) -> Dict[str, Any]:
    """Run one record through the pipeline and describe the outcome."""
    message_id = record.get("messageId")
    try:
        request = parse_ingestion_record(record)
    except MessageParseError as e:
        logger.warning("%s:_process_record - MessageParseError: %s", __name__, e)
        return _failure(message_id, "Invalid message format", str(e))

    try:
        outcome = asyncio.run(_get_pipeline().process(request))
    except KnowledgeBackendException as e:
        # The pipeline already stored the failure on the document
        logger.error("%s:_process_record - %s: %s", __name__, type(e).__name__, e)
        return _failure(message_id, "Document processing failed", e.message)
    except Exception as e:
        logger.error("%s:_process_record - %s: %s", __name__, type(e).__name__, e)
        return _failure(message_id, "Unexpected error", str(e))

    return {
        "messageId": message_id,
        "status": "success",
        "document_id": outcome.document_id,
        "chunk_count": outcome.chunk_count,
        "processing_time_ms": outcome.processing_time_ms,
    }


def handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Lambda handler for SQS document ingestion events.

    Args:
        event: SQS event with Records array
        context: Lambda context object (unused)

    Returns:
        Dict with statusCode (200 all succeeded, 206 partial failure,
        500 misconfiguration) and a JSON body with per-record results
    """
    records = event.get("Records", [])
    logger.info(
        "%s:handler - Received SQS event",
        __name__,
        extra={"record_count": len(records)},
    )

    try:
        validate_environment()
    except ValueError as e:
        logger.error("%s:handler - ValueError: %s", __name__, e)
        return {"statusCode": 500, "body": json.dumps({"error": str(e), "results": []})}

    results = [_process_record(record) for record in records]
    failed = sum(1 for result in results if result["status"] == "failed")

    logger.info(
        "%s:handler - Batch finished",
        __name__,
        extra={"success_count": len(results) - failed, "failed_count": failed},
    )
    body = {"processed": len(results), "failed": failed, "results": results}
    return {"statusCode": 206 if failed else 200, "body": json.dumps(body)}
