"""Fixed-size text chunker.

Splits file content into overlapping character windows, preferring to break
at paragraph, sentence, then word boundaries.
"""

import logging
from typing import List

from pipeline.interfaces.chunker import ChunkerInterface

logger = logging.getLogger(__name__)


class TextChunker(ChunkerInterface):
    """Fixed-size character chunker with overlap.

    The returned list position is the chunk index, so indexes are always
    contiguous from 0 in original-file order.
    """

    def __init__(self, size: int = 1000, overlap: int = 200):
        if size <= 0:
            raise ValueError("Chunk size must be positive")
        if overlap < 0 or overlap >= size:
            raise ValueError("Chunk overlap must be in [0, size)")
        self.size = size
        self.overlap = overlap

    @property
    def name(self) -> str:
        return "fixed"

    def chunkify(self, source: str) -> List[str]:
        if not source or not source.strip():
            return []

        text = source.strip()
        chunks: List[str] = []
        start = 0

        while start < len(text):
            end = start + self.size
            if end >= len(text):
                tail = text[start:].strip()
                if tail:
                    chunks.append(tail)
                break

            break_point = self._find_break_point(text, start, end)
            piece = text[start:break_point].strip()
            if piece:
                chunks.append(piece)

            # Step back for overlap, but always make progress
            next_start = break_point - self.overlap
            start = next_start if next_start > start else break_point

        return chunks

    def _find_break_point(self, text: str, start: int, target: int) -> int:
        """Find a good break point at or before target.

        Prefers breaking at:
        1. Paragraph breaks (double newline)
        2. Line breaks
        3. Sentence endings
        4. Word boundaries (spaces)
        """
        window_start = max(start + 1, target - self.size // 4)

        para_break = text.rfind('\n\n', window_start, target)
        if para_break != -1:
            return para_break + 2

        line_break = text.rfind('\n', window_start, target)
        if line_break != -1:
            return line_break + 1

        for punct in ('. ', '! ', '? '):
            sent_break = text.rfind(punct, window_start, target)
            if sent_break != -1:
                return sent_break + 2

        space = text.rfind(' ', window_start, target)
        if space != -1:
            return space + 1

        # Last resort: hard break at target
        return target
