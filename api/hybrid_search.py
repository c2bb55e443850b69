"""
Relevance scoring behind the document store's query capabilities.

Three signals are computed over an in-memory snapshot of the stored chunks:
- semantic: cosine similarity of embeddings (NumpyVectorIndex)
- keyword overlap: fraction of distinct query terms present in a chunk
- BM25: probabilistic lexical ranking (rank_bm25), used for keyword-only search

Hybrid score = semantic_weight * max(cosine, 0) + keyword_weight * overlap.
The weights are configuration, not contract; the retrieval cascade only
relies on the ordering/threshold/limit behaviour of each query method.
"""
import re
from collections import OrderedDict
from pathlib import PurePosixPath
from typing import List, Optional, Sequence

import numpy as np
from rank_bm25 import BM25Okapi

from domain_models import DocumentChunk
from ingestion.numpy_vector_index import NumpyVectorIndex
from value_objects import ScoredChunk

STOPWORDS = {
    'a', 'an', 'and', 'are', 'as', 'at', 'be', 'by', 'can', 'do', 'does',
    'for', 'from', 'how', 'i', 'in', 'is', 'it', 'me', 'my', 'of', 'on',
    'or', 'the', 'to', 'what', 'when', 'where', 'which', 'with', 'you',
}


def tokenize(text: str) -> List[str]:
    """
    Simple word tokenization with lowercasing.

    Splits on non-alphanumeric characters, lowercases all tokens.
    """
    tokens = re.split(r'\W+', text.lower())
    return [t for t in tokens if t]


def query_terms(text: str) -> List[str]:
    """Distinct query tokens without stopwords, in first-seen order."""
    terms = [t for t in tokenize(text) if t not in STOPWORDS]
    return list(OrderedDict.fromkeys(terms))


class BM25Searcher:
    """
    BM25 keyword search using rank_bm25 library.

    Scores ALL chunks probabilistically rather than boolean matching.
    Chunks missing query terms still get partial scores based on terms present.
    """

    def __init__(self, chunks: Sequence[DocumentChunk]):
        self._chunks = list(chunks)
        self._corpus = [tokenize(c.content_chunk) for c in self._chunks]
        # Empty corpus is handled gracefully
        self._bm25: Optional[BM25Okapi] = BM25Okapi(self._corpus) if self._corpus else None

    @staticmethod
    def title_boost(file_path: str, terms: Sequence[str]) -> float:
        """
        Calculate boost multiplier based on query/file-name overlap.

        A query mentioning "install" or "db2" favours files named after it.
        """
        if not file_path or not terms:
            return 1.0

        filename_tokens = set(tokenize(PurePosixPath(file_path).stem))
        overlap = len(filename_tokens & set(terms))

        if overlap == 0:
            return 1.0
        # 1.5x for 1 match, 2.0x for 2, 3.0x for 3+
        if overlap >= 3:
            return 3.0
        elif overlap >= 2:
            return 2.0
        else:
            return 1.5

    def scores(self, query: str) -> np.ndarray:
        """BM25 score for every chunk (title boost applied)."""
        terms = tokenize(query)
        if not self._bm25 or not terms:
            return np.zeros(len(self._chunks))

        scores = np.asarray(self._bm25.get_scores(terms), dtype=float)
        for idx in range(len(scores)):
            if scores[idx] > 0:
                scores[idx] *= self.title_boost(self._chunks[idx].file_path, terms)
        return scores

    def search(self, query: str, top_k: int) -> List[ScoredChunk]:
        """
        Top-k chunks by BM25 score.

        Zero-score chunks (no matching terms) are never returned. Scores can
        be zero for every chunk when a term occurs in most of a tiny corpus,
        so chunks with any term present fall back to their term hit count.
        """
        scores = self.scores(query)
        terms = set(tokenize(query))
        results = []
        for idx, chunk in enumerate(self._chunks):
            score = float(scores[idx]) if len(scores) else 0.0
            if score <= 0:
                hits = len(terms & set(self._corpus[idx]))
                score = hits * 1e-6
            if score > 0:
                results.append(ScoredChunk(chunk=chunk, score=score))
        return _rank(results)[:top_k]


class RelevanceScorer:
    """Scores a fixed snapshot of chunks against queries.

    Built once per store generation (after writes) and then shared by readers.
    chunks and vectors must be aligned (vectors[i] embeds chunks[i]).
    """

    def __init__(self, chunks: Sequence[DocumentChunk], vectors: Sequence[Sequence[float]],
                 semantic_weight: float = 0.7, keyword_weight: float = 0.3):
        if len(chunks) != len(vectors):
            raise ValueError("chunks and vectors must be aligned")
        self.chunks = list(chunks)
        self.semantic_weight = semantic_weight
        self.keyword_weight = keyword_weight
        self.index = NumpyVectorIndex(vectors)
        self.bm25 = BM25Searcher(self.chunks)
        self._token_sets = [set(tokenize(c.content_chunk)) for c in self.chunks]

    def __len__(self) -> int:
        return len(self.chunks)

    # === Signals ===

    def semantic_scores(self, query_vector: Sequence[float]) -> np.ndarray:
        """Cosine similarity, negative values clipped to 0."""
        return np.clip(self.index.similarities(query_vector), 0.0, 1.0)

    def keyword_overlap_scores(self, query: str) -> np.ndarray:
        """Fraction of distinct query terms found in each chunk."""
        terms = query_terms(query) or tokenize(query)
        if not terms:
            return np.zeros(len(self.chunks))
        wanted = set(terms)
        return np.array([len(wanted & tokens) / len(wanted) for tokens in self._token_sets], dtype=float)

    def hybrid_scores(self, query: str, query_vector: Sequence[float]) -> np.ndarray:
        if not self.chunks:
            return np.zeros(0)
        return (self.semantic_weight * self.semantic_scores(query_vector)
                + self.keyword_weight * self.keyword_overlap_scores(query))

    # === Query capabilities ===

    def hybrid(self, query: str, query_vector: Sequence[float],
               limit: int, threshold: float) -> List[ScoredChunk]:
        """Chunks at or above threshold, best first, capped at limit."""
        scores = self.hybrid_scores(query, query_vector)
        results = [
            ScoredChunk(chunk=chunk, score=float(scores[idx]))
            for idx, chunk in enumerate(self.chunks)
            if scores[idx] >= threshold
        ]
        return _rank(results)[:limit]

    def relevant(self, query_vector: Sequence[float], limit: int) -> List[ScoredChunk]:
        """Top chunks by semantic similarity alone, no threshold."""
        scores = self.index.similarities(query_vector)
        results = [ScoredChunk(chunk=chunk, score=float(scores[idx]))
                   for idx, chunk in enumerate(self.chunks)]
        return _rank(results)[:limit]

    def keyword(self, query: str, limit: int) -> List[ScoredChunk]:
        """Top chunks by lexical score alone."""
        return self.bm25.search(query, limit)

    def best_file(self, query: str, query_vector: Sequence[float]) -> List[DocumentChunk]:
        """All chunks of the single most relevant file, in chunk order.

        A file's relevance is its best chunk's hybrid score, boosted when the
        file name shares terms with the query. Ties keep the first file seen.
        """
        if not self.chunks:
            return []

        scores = self.hybrid_scores(query, query_vector)
        terms = query_terms(query)
        file_scores: "OrderedDict[tuple, float]" = OrderedDict()
        for idx, chunk in enumerate(self.chunks):
            key = _file_key(chunk)
            file_scores[key] = max(file_scores.get(key, 0.0), float(scores[idx]))

        best_key, best_score = None, 0.0
        for key, score in file_scores.items():
            boosted = score * BM25Searcher.title_boost(key[2], terms)
            if boosted > best_score:
                best_key, best_score = key, boosted

        if best_key is None:
            return []
        file_chunks = [c for c in self.chunks if _file_key(c) == best_key]
        return sorted(file_chunks, key=lambda c: c.chunk_index)


def _file_key(chunk: DocumentChunk) -> tuple:
    return (chunk.repository_owner, chunk.repository_name, chunk.file_path)


def _rank(results: List[ScoredChunk]) -> List[ScoredChunk]:
    """Sort by score descending; stable so equal scores keep store order."""
    return sorted(results, key=lambda r: r.score, reverse=True)
