"""Embedder interface for text embedding generation.

Defines the contract for embedding providers (SentenceTransformers, test fakes).
"""

from abc import ABC, abstractmethod
from typing import List


class EmbedderInterface(ABC):
    """Interface for text embedding implementations.

    Contract (Liskov Substitution):
        - embed() returns one vector per input text, in input order
        - Each vector has length == dimension
        - Empty input returns empty list
    """

    @abstractmethod
    def embed(self, texts: List[str]) -> List[List[float]]:
        """Generate embeddings for a list of texts."""
        pass

    def embed_query(self, text: str) -> List[float]:
        """Embed a single query string."""
        vectors = self.embed([text])
        return vectors[0] if vectors else []

    @property
    @abstractmethod
    def dimension(self) -> int:
        """Embedding vector dimension."""
        pass

    @property
    @abstractmethod
    def model_name(self) -> str:
        """Name/identifier of the embedding model."""
        pass
