"""Domain models for the indexing and retrieval pipeline"""
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import PurePosixPath
from typing import Optional

@dataclass(frozen=True)
class RepositoryRef:
    """A configured source repository.

    full_name ("owner/name") correlates fetched files back to their origin.
    """
    owner: str
    name: str
    branch: str = "main"

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"

    @classmethod
    def parse(cls, value: str) -> 'RepositoryRef':
        """Parse "owner/name" or "owner/name@branch"."""
        location, _, branch = value.strip().partition("@")
        owner, sep, name = location.partition("/")
        if not sep or not owner or not name or "/" in name:
            raise ValueError(f"Invalid repository '{value}', expected owner/name[@branch]")
        return cls(owner=owner, name=name, branch=branch or "main")

@dataclass(frozen=True)
class FileRef:
    """A file listed by the source provider (no content yet)"""
    path: str
    repository_full_name: str

    @property
    def name(self) -> str:
        return PurePosixPath(self.path).name

@dataclass
class SourceFile:
    """Fetched file content. Consumed once by the orchestrator, never stored."""
    path: str
    repository: RepositoryRef
    raw_content: str

@dataclass
class DocumentChunk:
    """Represents a stored chunk of a source file.

    (file_path, chunk_index) orders chunks within a file; chunk_index is 0-based.
    """
    id: str
    file_path: str
    repository_owner: str
    repository_name: str
    branch_name: str
    content_chunk: str
    chunk_index: int
    content_hash: Optional[str] = None
    embedding_id: Optional[str] = None
    created_at: datetime = field(default_factory=datetime.now)
    updated_at: datetime = field(default_factory=datetime.now)

    @property
    def repository_full_name(self) -> str:
        return f"{self.repository_owner}/{self.repository_name}"
