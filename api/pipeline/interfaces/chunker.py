"""Chunker interface for text chunking strategies."""

from abc import ABC, abstractmethod
from typing import List


class ChunkerInterface(ABC):
    """Interface for text chunking implementations.

    Contract (Liskov Substitution):
        - chunkify() returns the chunk texts in original-file order
        - Position in the returned list is the chunk index (0-based, contiguous)
        - Blank input returns an empty list
    """

    @abstractmethod
    def chunkify(self, source: str) -> List[str]:
        """Split source text into ordered chunks."""
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name of this chunker."""
        pass
