"""Batch encoder for efficient embedding generation.

Encodes all chunks of a file in as few model.encode() calls as possible
instead of one call per chunk.
"""

import math
from typing import List


class BatchEncoder:
    """Encodes texts in batches for efficient embedding generation.

    sentence-transformers is optimized for batch operations - encoding
    32 texts at once is much faster than 32 individual encode calls.
    """

    def __init__(self, model, batch_size: int = 32):
        """Initialize with embedding model.

        Args:
            model: SentenceTransformer model (or compatible)
            batch_size: Number of texts per batch (default 32, optimal for CPU)
        """
        self.model = model
        self.batch_size = batch_size

    def encode(self, texts: List[str]) -> List[List[float]]:
        """Encode texts in batches, preserving input order."""
        if not texts:
            return []

        total_batches = math.ceil(len(texts) / self.batch_size)
        result = []
        for batch_num in range(total_batches):
            start_idx = batch_num * self.batch_size
            end_idx = min(start_idx + self.batch_size, len(texts))
            result.extend(self._encode_batch(texts[start_idx:end_idx]))
        return result

    def _encode_batch(self, texts: List[str]) -> List[List[float]]:
        """Encode a single batch of texts."""
        embeddings = self.model.encode(
            texts,
            show_progress_bar=False,
            convert_to_numpy=True
        )
        return [emb.tolist() for emb in embeddings]
