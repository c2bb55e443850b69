import logging
import os
import sqlite3
import threading
import uuid
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from config import default_config, DatabaseConfig, RetrievalConfig
from domain_models import DocumentChunk, RepositoryRef
from hybrid_search import RelevanceScorer
from ingestion.chunk_repository import ChunkRepository, EmbeddingRepository
from pipeline.interfaces.embedder import EmbedderInterface

# Centralized logging configuration - import triggers suppression
import ingestion.logging_config  # noqa: F401

logger = logging.getLogger(__name__)

IN_MEMORY = ":memory:"


class DatabaseConnection:
    """Manages the SQLite connection"""

    def __init__(self, config: DatabaseConfig = default_config.database):
        self.config = config
        self.conn = None

    def connect(self) -> sqlite3.Connection:
        """Establish database connection"""
        if self.config.path != IN_MEMORY:
            Path(self.config.path).parent.mkdir(parents=True, exist_ok=True)
        self.conn = sqlite3.connect(
            self.config.path,
            check_same_thread=self.config.check_same_thread
        )
        if self.config.path != IN_MEMORY:
            # WAL allows concurrent reads during writes
            self.conn.execute("PRAGMA journal_mode=WAL")
        self.conn.execute("PRAGMA busy_timeout=5000")
        return self.conn

    def close(self):
        """Close connection"""
        if self.conn:
            self.conn.close()
            self.conn = None


class SchemaManager:
    """Manages database schema"""

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    def create_schema(self):
        """Create all required tables"""
        self._create_chunks_table()
        self._create_embeddings_table()
        self.conn.commit()

    def _create_chunks_table(self):
        self.conn.execute("""
            CREATE TABLE IF NOT EXISTS chunks (
                id TEXT PRIMARY KEY,
                file_path TEXT NOT NULL,
                repository_owner TEXT NOT NULL,
                repository_name TEXT NOT NULL,
                branch_name TEXT NOT NULL,
                content_chunk TEXT NOT NULL,
                chunk_index INTEGER NOT NULL,
                content_hash TEXT,
                embedding_id TEXT,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL,
                UNIQUE (repository_owner, repository_name, file_path, chunk_index)
            )
        """)
        self.conn.execute("""
            CREATE INDEX IF NOT EXISTS idx_chunks_repository
            ON chunks(repository_owner, repository_name)
        """)

    def _create_embeddings_table(self):
        self.conn.execute("""
            CREATE TABLE IF NOT EXISTS embeddings (
                id TEXT PRIMARY KEY,
                vector BLOB NOT NULL,
                dimension INTEGER NOT NULL
            )
        """)


class DocumentStore:
    """Persistent keyed collection of document chunks.

    Thread Safety:
    A single threading.RLock guards the connection and the search snapshot.
    A file's chunks are written in one transaction and the snapshot is
    invalidated in the same critical section, so readers see either all of
    a file's new chunks or none of them.

    Search:
    Queries run against an in-memory RelevanceScorer snapshot (NumPy + BM25)
    that is rebuilt lazily on the first read after a write.
    """

    def __init__(self, embedder: EmbedderInterface,
                 config: DatabaseConfig = default_config.database,
                 retrieval: RetrievalConfig = default_config.retrieval):
        self._lock = threading.RLock()
        self._config = config
        self._retrieval = retrieval
        self.embedder = embedder
        self.db_conn = DatabaseConnection(config)
        self.conn = self.db_conn.connect()
        SchemaManager(self.conn).create_schema()
        self.chunks = ChunkRepository(self.conn)
        self.embeddings = EmbeddingRepository(self.conn)
        self._snapshot: Optional[RelevanceScorer] = None

    # === Write path ===

    def upsert_chunks(self, file_path: str, repository: RepositoryRef,
                      chunks: Sequence[Tuple[int, str]], content_hash: Optional[str] = None) -> int:
        """Replace the stored chunks of one file as a single unit.

        chunks are (index, content) pairs whose indexes must form 0..N-1.
        Rows at an existing (file, index) are updated in place; rows beyond
        the new chunk count are deleted. Returns the number of chunks stored.
        """
        ordered = sorted(chunks, key=lambda c: c[0])
        if [idx for idx, _ in ordered] != list(range(len(ordered))):
            raise ValueError(f"Chunk indexes for {file_path} must be contiguous from 0")

        texts = [content for _, content in ordered]
        vectors = self.embedder.embed(texts) if texts else []

        with self._lock:
            with self.conn:
                self._write_file(file_path, repository, texts, vectors, content_hash)
            self._snapshot = None
        return len(texts)

    def _write_file(self, file_path, repository, texts, vectors, content_hash):
        now = datetime.now()
        existing = self.chunks.find_by_file(repository.owner, repository.name, file_path)

        for idx, (text, vector) in enumerate(zip(texts, vectors)):
            current = existing.get(idx)
            if current:
                self.chunks.update_content(current.id, text, content_hash, repository.branch, now)
                embedding_id = current.embedding_id or self._new_id()
                self.embeddings.upsert(embedding_id, vector)
                continue
            embedding_id = self._new_id()
            self.embeddings.upsert(embedding_id, vector)
            self.chunks.add(DocumentChunk(
                id=self._new_id(),
                file_path=file_path,
                repository_owner=repository.owner,
                repository_name=repository.name,
                branch_name=repository.branch,
                content_chunk=text,
                chunk_index=idx,
                content_hash=content_hash,
                embedding_id=embedding_id,
                created_at=now,
                updated_at=now,
            ))

        stale = [c for i, c in existing.items() if i >= len(texts)]
        self.chunks.delete_ids([c.id for c in stale])
        self.embeddings.delete_ids([c.embedding_id for c in stale if c.embedding_id])

    def purge(self, owner: str, name: str) -> int:
        """Delete every chunk of a repository in one transaction."""
        with self._lock:
            with self.conn:
                embedding_ids = self.chunks.embedding_ids_for_repository(owner, name)
                self.embeddings.delete_ids(embedding_ids)
                deleted = self.chunks.delete_repository(owner, name)
            self._snapshot = None
        logger.info("Purged %d chunks for %s/%s", deleted, owner, name)
        return deleted

    # === Read path ===

    def query_hybrid(self, query: str, limit: int, threshold: float) -> List[DocumentChunk]:
        vector = self.embedder.embed_query(query)
        with self._lock:
            results = self._scorer().hybrid(query, vector, limit, threshold)
        return [r.chunk for r in results]

    def query_best_file(self, query: str) -> List[DocumentChunk]:
        vector = self.embedder.embed_query(query)
        with self._lock:
            return self._scorer().best_file(query, vector)

    def query_relevant(self, query: str, limit: int) -> List[DocumentChunk]:
        vector = self.embedder.embed_query(query)
        with self._lock:
            results = self._scorer().relevant(vector, limit)
        return [r.chunk for r in results]

    def query_keyword(self, query: str, limit: int) -> List[DocumentChunk]:
        with self._lock:
            results = self._scorer().keyword(query, limit)
        return [r.chunk for r in results]

    def all_chunks(self) -> List[DocumentChunk]:
        with self._lock:
            return self.chunks.find_all()

    def _scorer(self) -> RelevanceScorer:
        """Current search snapshot (caller must hold lock)."""
        if self._snapshot is None:
            chunks = self.chunks.find_all()
            vectors_by_id = self.embeddings.find_all()
            aligned = [c for c in chunks if c.embedding_id in vectors_by_id]
            self._snapshot = RelevanceScorer(
                aligned,
                [vectors_by_id[c.embedding_id] for c in aligned],
                semantic_weight=self._retrieval.semantic_weight,
                keyword_weight=self._retrieval.keyword_weight,
            )
            logger.debug("Search snapshot rebuilt: %d chunks", len(aligned))
        return self._snapshot

    # === Introspection ===

    def count(self) -> int:
        with self._lock:
            return self.chunks.count()

    def size_on_disk_bytes(self) -> int:
        """Database size including WAL/SHM files, -1 if unknown."""
        path = self._config.path
        if path == IN_MEMORY or not os.path.exists(path):
            return -1
        total = 0
        for candidate in (path, f"{path}-wal", f"{path}-shm"):
            if os.path.exists(candidate):
                total += os.path.getsize(candidate)
        return total

    def close(self):
        with self._lock:
            self.db_conn.close()
        logger.info("Document store closed")

    @staticmethod
    def _new_id() -> str:
        return uuid.uuid4().hex
