"""
Search API schemas.

Dependencies: pydantic
System role: Search API contracts
"""

from pydantic import BaseModel, Field, model_validator


class SearchRequest(BaseModel):
    """Search by text query or by a precomputed embedding (exactly one)."""

    query: str | None = Field(default=None, description="Text to embed and search with")
    embedding: list[float] | None = Field(default=None, description="Query embedding")
    limit: int = Field(default=8, ge=1, le=64, description="Maximum hits")

    @model_validator(mode="after")
    def _exactly_one_query(self) -> "SearchRequest":
        if (self.query is None) == (self.embedding is None):
            raise ValueError("Provide exactly one of 'query' or 'embedding'")
        return self


class SearchHitResponse(BaseModel):
    """A ranked chunk."""

    chunk_id: str
    document_id: str
    chunk_index: int
    text: str
    token_count: int
    score: float


class SearchResponse(BaseModel):
    """Ranked hits, best first."""

    project_id: str
    hits: list[SearchHitResponse]
