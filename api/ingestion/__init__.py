"""
Ingestion package - chunking and storage of repository documents.

This package handles the write side of the pipeline:
- Text-file filtering of repository listings (FileFilterPolicy)
- Fixed-size chunking with overlap (TextChunker)
- SQLite document store with an in-memory search snapshot (ingestion.database)

The document store is imported from ingestion.database directly; it depends
on hybrid_search, which itself uses ingestion.numpy_vector_index.
"""

# Centralized logging configuration - import triggers suppression
from . import logging_config  # noqa: F401

from .helpers import ContentHasher
from .chunking import TextChunker
from .file_filter import FileFilterPolicy

__all__ = ['ContentHasher', 'TextChunker', 'FileFilterPolicy']
