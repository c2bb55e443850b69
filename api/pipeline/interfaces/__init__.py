"""Pipeline interfaces.

Provides abstract base classes for pipeline components:
- ChunkerInterface: Text chunking strategies
- EmbedderInterface: Text embedding generation
"""

from pipeline.interfaces.chunker import ChunkerInterface
from pipeline.interfaces.embedder import EmbedderInterface

__all__ = [
    'ChunkerInterface',
    'EmbedderInterface',
]
