"""SentenceTransformer embedder adapter.

Wraps BatchEncoder to implement EmbedderInterface.
"""

from typing import List

from pipeline.interfaces.embedder import EmbedderInterface
from pipeline.batch_encoder import BatchEncoder


class SentenceTransformerEmbedder(EmbedderInterface):
    """Embedder implementation using SentenceTransformers."""

    def __init__(self, model, batch_size: int = 32):
        """Initialize with a loaded SentenceTransformer model.

        Args:
            model: SentenceTransformer model instance
            batch_size: Number of texts per batch (default 32)
        """
        self._model = model
        self._batch_encoder = BatchEncoder(model=model, batch_size=batch_size)

    def embed(self, texts: List[str]) -> List[List[float]]:
        return self._batch_encoder.encode(texts)

    @property
    def dimension(self) -> int:
        return self._model.get_sentence_embedding_dimension()

    @property
    def model_name(self) -> str:
        # SentenceTransformer models have a _name_or_path attribute
        return getattr(self._model, '_name_or_path', 'unknown')
