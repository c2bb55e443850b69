"""Retrieval cascade - ordered search strategies with fallbacks.

Strategies run in order until one yields chunks:
  1. full content: best-matching file only (returned even when empty)
  2. hybrid: keyword + semantic, limit/threshold depend on fast mode
  3. best-matching file      } fallbacks, only when fast mode is off
  4. standard relevance      } or full content was requested
  5. keyword only            }
"""
import logging
from typing import List

from config import default_config, RetrievalConfig
from domain_models import DocumentChunk

logger = logging.getLogger(__name__)


class RetrievalCascade:
    """Selects stored chunks for a query via the store's query capabilities"""

    def __init__(self, store, config: RetrievalConfig = default_config.retrieval):
        self.store = store
        self.config = config

    def retrieve(self, query: str, fast_mode: bool = True,
                 full_content: bool = False) -> List[DocumentChunk]:
        if full_content:
            return self.store.query_best_file(query)

        limit = self.config.fast_limit if fast_mode else self.config.deep_limit
        threshold = self.config.fast_threshold if fast_mode else self.config.deep_threshold
        chunks = self.store.query_hybrid(query, limit, threshold)
        if chunks or fast_mode:
            return chunks

        logger.info(f"Hybrid search returned no results, trying best file approach for: {query}")
        chunks = self.store.query_best_file(query)
        if chunks:
            return chunks

        logger.info(f"No best file found, trying standard search for: {query}")
        chunks = self.store.query_relevant(query, self.config.relevance_limit)
        if chunks:
            return chunks

        logger.info(f"No results with standard search, trying keyword fallback for: {query}")
        return self.store.query_keyword(query, self.config.keyword_limit)

    def best_file(self, query: str) -> List[DocumentChunk]:
        """All chunks of the single most relevant file"""
        return self.store.query_best_file(query)
