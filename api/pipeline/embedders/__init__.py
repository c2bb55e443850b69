"""Embedding providers behind EmbedderInterface."""

from pipeline.embedders.sentence_transformer_embedder import SentenceTransformerEmbedder

__all__ = ['SentenceTransformerEmbedder']
