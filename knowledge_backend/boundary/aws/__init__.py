"""
AWS boundary adapters.

Exports:
  - S3DocumentClient: Document bucket client (metadata + presigned download URLs)
  - StorageObjectMetadata: Result of a metadata lookup
"""

from knowledge_backend.boundary.aws.s3_client import S3DocumentClient, StorageObjectMetadata

__all__ = ["S3DocumentClient", "StorageObjectMetadata"]
