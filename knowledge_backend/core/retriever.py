"""
Cosine similarity ranking.

Scores stored chunks against a query embedding and returns the best hits.
Candidates are expected in their storage order (created_at, chunk_index,
chunk_id); equal scores keep that order because the sort is stable.

Dependencies: pydantic
System role: Similarity search core
"""

import math
from typing import Iterable, Sequence

from pydantic import BaseModel, Field

from knowledge_backend.core.document_processing.models import Chunk
from knowledge_backend.core.exceptions import ValidationError


class SearchHit(BaseModel):
    """A stored chunk with its similarity to the query."""

    chunk: Chunk
    score: float = Field(description="Cosine similarity in [-1, 1]")


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Cosine similarity over the overlapping prefix of two vectors.

    Returns 0.0 when either vector is empty or has zero magnitude.
    """
    length = min(len(a), len(b))
    if length == 0:
        return 0.0

    dot = 0.0
    norm_a = 0.0
    norm_b = 0.0
    for i in range(length):
        x = a[i]
        y = b[i]
        dot += x * y
        norm_a += x * x
        norm_b += y * y

    denominator = math.sqrt(norm_a) * math.sqrt(norm_b)
    if denominator == 0:
        return 0.0
    return dot / denominator


class Retriever:
    """Rank candidate chunks by cosine similarity."""

    def rank(
        self,
        query_embedding: Sequence[float],
        candidates: Iterable[Chunk],
        limit: int,
    ) -> list[SearchHit]:
        """
        Return the top ``limit`` candidates by descending similarity.

        Candidates without an embedding and non-finite scores are skipped.

        Args:
            query_embedding: Query vector
            candidates: Chunks in storage order
            limit: Maximum hits to return

        Returns:
            list[SearchHit]: Sorted non-increasing by score

        Raises:
            ValidationError: limit is below 1
        """
        if limit < 1:
            raise ValidationError("limit must be at least 1", field="limit")

        hits = []
        for chunk in candidates:
            if chunk.embedding is None:
                continue
            score = cosine_similarity(query_embedding, chunk.embedding)
            if math.isfinite(score):
                hits.append(SearchHit(chunk=chunk, score=score))

        hits = sorted(hits, key=lambda hit: hit.score, reverse=True)
        return hits[:limit]
