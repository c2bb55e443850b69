"""
Value objects for the documentation assistant.

Principles:
- Immutable data structures
- Named instead of primitive types (no Primitive Obsession)
- Small, focused classes with single responsibility
"""

from dataclasses import dataclass
from typing import Optional

from domain_models import DocumentChunk

@dataclass(frozen=True)
class IndexingStats:
    """Immutable statistics about an indexing run.

    Replaces dict usage like {'processed': 0, 'failed': 0} in the orchestrator.
    """
    processed: int = 0
    failed: int = 0
    total: int = 0
    duration_ms: int = 0

    def __str__(self) -> str:
        return f"{self.processed}/{self.total} files processed, {self.failed} failed"

@dataclass(frozen=True)
class ProcessingResult:
    """Result of processing a single file.

    Replaces tuple returns like (chunks_count, error).
    """
    file_path: str
    chunks_count: int = 0
    error_message: Optional[str] = None

    @classmethod
    def success(cls, file_path: str, chunks_count: int) -> 'ProcessingResult':
        """Create a result for successful processing."""
        return cls(file_path=file_path, chunks_count=chunks_count)

    @classmethod
    def failure(cls, file_path: str, error: str) -> 'ProcessingResult':
        """Create a result for failed processing."""
        return cls(file_path=file_path, error_message=error)

    @property
    def succeeded(self) -> bool:
        return self.error_message is None

    @property
    def failed(self) -> bool:
        return self.error_message is not None

@dataclass(frozen=True)
class StoreStats:
    """Document store size introspection.

    size_bytes is -1 when the on-disk size is unknown.
    """
    count: int
    size_bytes: int

    @property
    def size_mb(self) -> str:
        """Size in megabytes, formatted for display ("-1" if unknown)"""
        if self.size_bytes < 0:
            return "-1"
        return f"{self.size_bytes / 1048576.0:.2f}"

@dataclass(frozen=True)
class ScoredChunk:
    """A chunk paired with the relevance score that selected it."""
    chunk: DocumentChunk
    score: float
