"""Repositories for chunk and embedding rows.

Thin SQL wrappers; transactions and locking belong to the DocumentStore.
"""
import sqlite3
from datetime import datetime
from typing import Dict, List, Sequence

import numpy as np

from domain_models import DocumentChunk

_CHUNK_COLUMNS = """
    id, file_path, repository_owner, repository_name, branch_name,
    content_chunk, chunk_index, content_hash, embedding_id, created_at, updated_at
"""


class ChunkRepository:
    """CRUD for the chunks table"""

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    def add(self, chunk: DocumentChunk):
        self.conn.execute(f"""
            INSERT INTO chunks ({_CHUNK_COLUMNS})
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
        """, (
            chunk.id, chunk.file_path, chunk.repository_owner, chunk.repository_name,
            chunk.branch_name, chunk.content_chunk, chunk.chunk_index, chunk.content_hash,
            chunk.embedding_id, chunk.created_at.isoformat(), chunk.updated_at.isoformat()
        ))

    def update_content(self, chunk_id: str, content: str, content_hash: str,
                       branch_name: str, updated_at: datetime):
        """Update a chunk in place (id and created_at are kept)"""
        self.conn.execute("""
            UPDATE chunks
            SET content_chunk = ?, content_hash = ?, branch_name = ?, updated_at = ?
            WHERE id = ?
        """, (content, content_hash, branch_name, updated_at.isoformat(), chunk_id))

    def find_by_file(self, owner: str, name: str, file_path: str) -> Dict[int, DocumentChunk]:
        """Existing chunks of one file keyed by chunk index"""
        cursor = self.conn.execute(f"""
            SELECT {_CHUNK_COLUMNS} FROM chunks
            WHERE repository_owner = ? AND repository_name = ? AND file_path = ?
        """, (owner, name, file_path))
        return {row[6]: self._row_to_chunk(row) for row in cursor}

    def find_all(self) -> List[DocumentChunk]:
        """All chunks in deterministic (repository, file, index) order"""
        cursor = self.conn.execute(f"""
            SELECT {_CHUNK_COLUMNS} FROM chunks
            ORDER BY repository_owner, repository_name, file_path, chunk_index
        """)
        return [self._row_to_chunk(row) for row in cursor]

    def delete_ids(self, chunk_ids: Sequence[str]):
        if not chunk_ids:
            return
        placeholders = ','.join('?' * len(chunk_ids))
        self.conn.execute(f"DELETE FROM chunks WHERE id IN ({placeholders})", list(chunk_ids))

    def delete_repository(self, owner: str, name: str) -> int:
        cursor = self.conn.execute(
            "DELETE FROM chunks WHERE repository_owner = ? AND repository_name = ?",
            (owner, name)
        )
        return cursor.rowcount

    def embedding_ids_for_repository(self, owner: str, name: str) -> List[str]:
        cursor = self.conn.execute("""
            SELECT embedding_id FROM chunks
            WHERE repository_owner = ? AND repository_name = ? AND embedding_id IS NOT NULL
        """, (owner, name))
        return [row[0] for row in cursor]

    def count(self) -> int:
        return self.conn.execute("SELECT COUNT(*) FROM chunks").fetchone()[0]

    @staticmethod
    def _row_to_chunk(row) -> DocumentChunk:
        return DocumentChunk(
            id=row[0],
            file_path=row[1],
            repository_owner=row[2],
            repository_name=row[3],
            branch_name=row[4],
            content_chunk=row[5],
            chunk_index=row[6],
            content_hash=row[7],
            embedding_id=row[8],
            created_at=datetime.fromisoformat(row[9]),
            updated_at=datetime.fromisoformat(row[10]),
        )


class EmbeddingRepository:
    """Stores embedding vectors as float32 blobs"""

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    def upsert(self, embedding_id: str, vector: Sequence[float]):
        blob = np.asarray(vector, dtype=np.float32).tobytes()
        self.conn.execute("""
            INSERT INTO embeddings (id, vector, dimension) VALUES (?, ?, ?)
            ON CONFLICT(id) DO UPDATE SET vector = excluded.vector, dimension = excluded.dimension
        """, (embedding_id, blob, len(vector)))

    def find_all(self) -> Dict[str, List[float]]:
        """All stored vectors keyed by embedding id"""
        cursor = self.conn.execute("SELECT id, vector FROM embeddings")
        return {row[0]: np.frombuffer(row[1], dtype=np.float32).tolist() for row in cursor}

    def delete_ids(self, embedding_ids: Sequence[str]):
        if not embedding_ids:
            return
        placeholders = ','.join('?' * len(embedding_ids))
        self.conn.execute(f"DELETE FROM embeddings WHERE id IN ({placeholders})", list(embedding_ids))
