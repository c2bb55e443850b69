"""Direct-file fast path: return a whole stored file without generation."""
import re
from typing import List, Optional

from domain_models import DocumentChunk

DIRECT_FILE_PATTERNS = [
    re.compile(r'\b(show|give|get|display)\s+(me\s+)?(the\s+)?(complete|full|entire|whole)\s+'),
    re.compile(r'\b(raw|exact|direct|unprocessed)\s+(content|file|document)\b'),
    re.compile(r'\bjust\s+(show|give|display)\s+'),
    re.compile(r'\bonly\s+(show|give|display)\s+'),
]

# Shorter suffix/prefix matches are treated as coincidence, not chunk overlap
MIN_OVERLAP_CHARS = 20


def is_direct_file_request(message: str) -> bool:
    """Check if the caller asks for unprocessed file content"""
    text = message.lower().strip()
    if '.md' in text:
        return True
    return any(pattern.search(text) for pattern in DIRECT_FILE_PATTERNS)


def overlap_length(previous: str, current: str) -> int:
    """Length of the longest suffix of previous that starts current.

    Returns 0 when the shared text is shorter than MIN_OVERLAP_CHARS.
    """
    longest = min(len(previous), len(current))
    for size in range(longest, MIN_OVERLAP_CHARS - 1, -1):
        if previous.endswith(current[:size]):
            return size
    return 0


def render_file(chunks: List[DocumentChunk]) -> Optional[str]:
    """Rebuild one file from its chunks in index order, under a header.

    Text repeated at the start of a chunk because of chunking overlap is
    emitted once. Returns None when there is nothing to render.
    """
    if not chunks:
        return None
    ordered = sorted(chunks, key=lambda c: c.chunk_index)
    parts = [ordered[0].content_chunk]
    for previous, chunk in zip(ordered, ordered[1:]):
        shared = overlap_length(previous.content_chunk, chunk.content_chunk)
        if shared:
            parts.append(chunk.content_chunk[shared:])
        else:
            parts.append("\n" + chunk.content_chunk)
    body = "".join(parts)
    return f"**File: {ordered[0].file_path}**\n\n{body}\n"
