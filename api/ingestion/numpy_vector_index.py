"""
NumPy-based in-memory vector index for fast similarity search.

The document store rebuilds this index from its embeddings table after each
write; queries then run brute-force cosine similarity with NumPy's vectorized
operations instead of scanning rows in SQL.
"""
from typing import Sequence

import numpy as np


class NumpyVectorIndex:
    """In-memory vector index using NumPy for similarity search.

    Usage:
        index = NumpyVectorIndex(vectors)
        scores = index.similarities(query_embedding)  # aligned with vectors
    """

    def __init__(self, vectors: Sequence[Sequence[float]]):
        if len(vectors) == 0:
            self.embeddings = np.zeros((0, 0), dtype=np.float32)
            self.norms = np.zeros(0, dtype=np.float32)
            return

        self.embeddings = np.asarray(vectors, dtype=np.float32)
        # Pre-compute norms for cosine; zero vectors score 0 instead of NaN
        norms = np.linalg.norm(self.embeddings, axis=1)
        self.norms = np.where(norms == 0, 1.0, norms).astype(np.float32)

    def __len__(self) -> int:
        return self.embeddings.shape[0]

    def similarities(self, query_embedding: Sequence[float]) -> np.ndarray:
        """Cosine similarity of the query against every stored vector.

        Returns an array aligned with insertion order (all zeros when the
        query is empty, zero, or of a different dimension).
        """
        if len(self) == 0:
            return np.zeros(0, dtype=np.float32)

        query = np.asarray(query_embedding, dtype=np.float32)
        query_norm = np.linalg.norm(query) if query.size else 0.0
        if query_norm == 0 or query.shape[0] != self.embeddings.shape[1]:
            return np.zeros(len(self), dtype=np.float32)

        # Cosine similarity: dot(a,b) / (norm(a) * norm(b))
        return np.dot(self.embeddings, query) / (self.norms * query_norm)

