"""
Local hashing-trick embeddings.

Deterministic bag-of-words vectors: each token is hashed into one of
``dimension`` buckets and the counts are L2-normalized. Needs no network
access or model weights, so ingestion and search stay reproducible. A
model-backed client can replace it by implementing ``Embeddings``.

Dependencies: None (stdlib only)
System role: Embedding generation for ingestion and query-time search
"""

import logging
import math
import re
import struct
import unicodedata
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)

FNV_OFFSET_BASIS = 2166136261
FNV_PRIME = 16777619
DEFAULT_DIMENSION = 1536

# Everything except letters, digits and whitespace; underscore is punctuation here.
_NON_WORD = re.compile(r"[^\w\s]|_")


class Embeddings(ABC):
    """Interface shared by every embedding backend."""

    @property
    @abstractmethod
    def dimension(self) -> int:
        """Length of every vector this backend returns."""

    @abstractmethod
    def embed_query(self, text: str) -> list[float]:
        """Embed a single text."""

    def embed_documents(self, texts: list[str]) -> list[list[float]]:
        """Embed several texts, preserving order."""
        return [self.embed_query(text) for text in texts]


def tokenize(text: str) -> list[str]:
    """Lowercase, NFKD-normalize, blank out punctuation and split on whitespace."""
    normalized = unicodedata.normalize("NFKD", text.lower())
    return _NON_WORD.sub(" ", normalized).split()


def hash_token(token: str) -> int:
    """
    32-bit FNV-1a over the token's UTF-16 code units, as a signed integer.

    Tokens outside the Basic Multilingual Plane hash their surrogate pair.
    """
    value = FNV_OFFSET_BASIS
    for (code_unit,) in struct.iter_unpack("<H", token.encode("utf-16-le")):
        value ^= code_unit
        value = (value * FNV_PRIME) & 0xFFFFFFFF
    if value >= 0x80000000:
        value -= 0x100000000
    return value


class LocalHashEmbeddings(Embeddings):
    """Hashing-trick embedder with a fixed output dimension."""

    def __init__(self, dimension: int = DEFAULT_DIMENSION) -> None:
        if dimension < 1:
            raise ValueError("dimension must be positive")
        self._dimension = dimension
        logger.debug(f"{__name__}:__init__ - Initialized with dimension={dimension}")

    @property
    def dimension(self) -> int:
        return self._dimension

    def embed_query(self, text: str) -> list[float]:
        """
        Embed text into a unit-length vector.

        Args:
            text: Any text; empty or punctuation-only text is allowed

        Returns:
            list[float]: ``dimension`` floats, L2-normalized unless all zero
        """
        vector = [0.0] * self._dimension
        for token in tokenize(text):
            vector[abs(hash_token(token)) % self._dimension] += 1.0

        magnitude = math.sqrt(sum(component * component for component in vector))
        if magnitude == 0:
            return vector
        return [component / magnitude for component in vector]
