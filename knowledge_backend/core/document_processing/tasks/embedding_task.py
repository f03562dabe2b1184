"""
Embedding task.

Attaches an embedding to every chunk using the configured Embeddings
backend.

Dependencies: embeddings_wrapper
System role: Fourth stage of document ingestion pipeline
"""

from ..embeddings_wrapper import Embeddings
from ..models import Chunk


class EmbeddingTask:
    """Embed chunk texts."""

    def __init__(self, embeddings: Embeddings) -> None:
        self._embeddings = embeddings

    def embed(self, chunks: list[Chunk]) -> list[Chunk]:
        """
        Return copies of the chunks with embeddings attached.

        Args:
            chunks: Chunks in order

        Returns:
            list[Chunk]: Same order, each with ``embedding`` set
        """
        vectors = self._embeddings.embed_documents([chunk.text for chunk in chunks])
        return [
            chunk.model_copy(update={"embedding": vector})
            for chunk, vector in zip(chunks, vectors)
        ]
