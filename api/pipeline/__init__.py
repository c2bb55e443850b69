"""Pipeline layer: embedding generation.

Components here turn chunk text into vectors:
- EmbedderInterface: contract for embedding providers
- BatchEncoder: batched encode() calls
- SentenceTransformerEmbedder: default provider
"""

from .interfaces import EmbedderInterface, ChunkerInterface
from .embedders import SentenceTransformerEmbedder

__all__ = ['EmbedderInterface', 'ChunkerInterface', 'SentenceTransformerEmbedder']
