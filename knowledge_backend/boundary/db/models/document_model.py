"""
Document ORM model.

Represents uploaded project documents together with their ingestion status.

Dependencies: sqlalchemy, knowledge_backend.boundary.db.base
System role: Document metadata store
"""

import enum
from datetime import datetime

from sqlalchemy import BigInteger, DateTime, Enum, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from knowledge_backend.boundary.db.base import Base, StringIdMixin, TimestampMixin


class DocumentStatus(str, enum.Enum):
    """
    Document ingestion lifecycle states.

    PENDING: Registered, awaiting ingestion
    PROCESSING: Pipeline is extracting, chunking and embedding
    READY: Chunks stored and searchable
    ERROR: Ingestion failed; error_message holds the reason
    """

    PENDING = "pending"
    PROCESSING = "processing"
    READY = "ready"
    ERROR = "error"


class DocumentModel(Base, StringIdMixin, TimestampMixin):
    """
    Document ORM model tracking ingestion state.

    Lifecycle: registration (PENDING) -> pipeline (PROCESSING) -> READY or
    ERROR. Re-ingestion re-enters PROCESSING from any state.

    Relationships:
        chunks: Stored chunks, deleted with the document
    """

    __tablename__ = "project_documents"

    project_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    storage_key: Mapped[str] = mapped_column(
        String(1024),
        nullable=False,
        doc="Object key of the raw upload",
    )
    filename: Mapped[str] = mapped_column(String(255), nullable=False)
    mime_type: Mapped[str] = mapped_column(String(255), nullable=False)
    size: Mapped[int] = mapped_column(BigInteger, nullable=False, default=0)
    checksum: Mapped[str | None] = mapped_column(String(128), nullable=True)

    status: Mapped[DocumentStatus] = mapped_column(
        Enum(
            DocumentStatus,
            native_enum=False,
            length=16,
            values_callable=lambda enum_cls: [member.value for member in enum_cls],
        ),
        nullable=False,
        default=DocumentStatus.PENDING,
    )
    error_message: Mapped[str | None] = mapped_column(Text, nullable=True)
    processing_started_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )
    processed_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    chunks = relationship(
        "ChunkModel",
        back_populates="document",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
