"""
Boundary-aware text chunking task.

Slides a fixed window over the normalized text. When the window does not
reach the end, the cut moves back to the latest paragraph break or sentence
end found past ``min_split_offset``. Consecutive windows share
``chunk_overlap`` characters.

Dependencies: hashlib (stdlib)
System role: Third stage of document ingestion pipeline
"""

import hashlib

from ..models import Chunk

PARAGRAPH_BREAK = "\n\n"
SENTENCE_END = ". "


def build_chunk_id(project_id: str, document_id: str, ordinal: int, text: str) -> str:
    """Content-addressed chunk id: first 32 hex chars of a SHA-256 digest."""
    digest = hashlib.sha256(f"{project_id}:{document_id}:{ordinal}:{text}".encode("utf-8"))
    return digest.hexdigest()[:32]


def estimate_token_count(text: str) -> int:
    """Whitespace word count, never below 1."""
    return max(1, len(text.split()))


class ChunkingTask:
    """Split text into overlapping chunks with deterministic IDs."""

    def __init__(
        self,
        chunk_size: int = 1800,
        chunk_overlap: int = 200,
        min_split_offset: int = 400,
    ) -> None:
        """
        Initialize chunking task.

        Args:
            chunk_size: Maximum window size in characters
            chunk_overlap: Characters shared by consecutive windows
            min_split_offset: Boundaries at or before this window offset are ignored

        Raises:
            ValueError: Configuration under which the window could stall
        """
        if chunk_size < 1:
            raise ValueError("chunk_size must be positive")
        if chunk_overlap < 0 or chunk_overlap >= chunk_size:
            raise ValueError("chunk_overlap must be in [0, chunk_size)")
        if min_split_offset < chunk_overlap:
            raise ValueError("min_split_offset must be >= chunk_overlap")

        self._chunk_size = chunk_size
        self._chunk_overlap = chunk_overlap
        self._min_split_offset = min_split_offset

    def chunk(self, text: str, project_id: str, document_id: str) -> list[Chunk]:
        """
        Split text into chunks.

        Args:
            text: Extracted document text
            project_id: Owning project (part of every chunk id)
            document_id: Source document (part of every chunk id)

        Returns:
            list[Chunk]: Chunks in order, without embeddings; empty for blank text
        """
        normalized = text.replace("\r\n", "\n").strip()
        length = len(normalized)
        chunks: list[Chunk] = []
        start = 0

        while start < length:
            end = min(start + self._chunk_size, length)

            if end < length:
                window = normalized[start:end]
                candidates = [
                    offset
                    for offset in (window.rfind(PARAGRAPH_BREAK), window.rfind(SENTENCE_END))
                    if offset > self._min_split_offset
                ]
                if candidates:
                    end = start + max(candidates) + 1

            chunk_text = normalized[start:end].strip()
            if chunk_text:
                ordinal = len(chunks)
                chunks.append(
                    Chunk(
                        chunk_id=build_chunk_id(project_id, document_id, ordinal, chunk_text),
                        project_id=project_id,
                        document_id=document_id,
                        chunk_index=ordinal,
                        text=chunk_text,
                        token_count=estimate_token_count(chunk_text),
                        start_index=start,
                        end_index=end,
                    )
                )

            if end == length:
                break

            start = max(0, end - self._chunk_overlap)

        return chunks
