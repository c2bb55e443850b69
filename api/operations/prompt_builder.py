"""
Context assembly and prompt rendering.

Retrieved chunks are grouped by file (first-seen file order, chunk index
order within a file) and embedded in one of three instruction templates
chosen from the query's intent:

- raw/complete-guide: return everything verbatim
- how-to with prerequisites: prerequisites first, then only the asked-for section
- default: extract only the section answering the question
"""
import re
from collections import OrderedDict
from enum import Enum
from typing import List

from domain_models import DocumentChunk

RAW_CONTENT_PATTERN = re.compile(r'\b(only|just|exact|raw|direct|exactly)\b')
COMPLETE_GUIDE_PATTERN = re.compile(r'\b(setup|install|guide|complete|full|entire|all steps|walkthrough)\b')
HOW_TO_CREATE_PATTERN = re.compile(
    r'\b(how to|how do|how can|steps to|process for|method for).*'
    r'(create|setup|install|configure|build|deploy|establish)\b'
)
PREREQUISITE_MARKERS = ("prerequisite", "requirements", "before you begin", "before starting", "prereq")

NO_CONTEXT_TEMPLATE = """USER QUESTION: {query}

No relevant documentation found for this query. Please try different keywords or check if the topic is covered under different terminology in the available documentation.
"""

COMPLETE_CONTENT_TEMPLATE = """Return the COMPLETE content related to: "{query}"

CRITICAL: Provide ALL steps, commands, and procedures from the document.
Do NOT summarize, truncate, or skip any details.
Include ALL download links, installation steps, configuration details, and verification commands.
Maintain exact formatting, commands, file paths, and structure from the original documentation.
When the document contains numbered steps, include ALL steps in order.

CONTENT:
{context}

RETURN COMPLETE CONTENT FOR: {query}
"""

PREREQUISITES_TEMPLATE = """You are an expert technical assistant. The user is asking how to create/setup something.

USER QUESTION: "{query}"

CRITICAL INSTRUCTIONS FOR PREREQUISITE HANDLING:
1. FIRST, extract and show any Prerequisites/Requirements sections from the documentation
2. Format Prerequisites clearly with a "Prerequisites" or "Requirements" heading
3. THEN, extract ONLY the specific section that answers the user's question
4. Do NOT include the entire document - be selective and focused
5. If they ask "how to create organization", show ONLY organization creation steps
6. If they ask "how to setup X", show ONLY X setup steps
7. Maintain exact formatting, commands, and structure from the original documentation
8. Include ALL necessary details for the specific operation they're asking about
9. Do NOT include unrelated operations, sections, or other topics from the same file

RESPONSE FORMAT:
# Prerequisites
[Extract and list only the prerequisite/requirement sections here]

# [Main Topic User Asked About]
[Extract and show ONLY the specific section that answers their question]

COMPLETE DOCUMENTATION:
{context}

EXTRACT PREREQUISITES FIRST, THEN SHOW ONLY THE SPECIFIC SECTION FOR: {query}
"""

SELECTIVE_TEMPLATE = """You are an expert technical assistant. Analyze the user's question and extract ONLY the relevant information from the provided documentation.

USER QUESTION: "{query}"

CRITICAL INSTRUCTIONS - BE SELECTIVE:
1. Read and understand what the user is specifically asking for
2. From the complete documentation below, extract ONLY the section(s) that directly answer their question
3. Do NOT return the entire document or complete file content
4. If they ask "how to create X", provide ONLY the creation steps, not query/update/delete operations
5. If they ask "how to query X", provide ONLY the query examples, not creation/update operations
6. If they ask "how to update X", provide ONLY the update steps, not creation/query operations
7. If they ask "how to delete X", provide ONLY the deletion steps, not creation/update operations
8. Maintain the exact formatting, commands, and structure from the original documentation
9. Include ALL necessary details for the specific operation they're asking about
10. Do NOT include unrelated operations, sections, or topics from the same file
11. Be focused and targeted - users want specific answers, not entire documents

COMPLETE DOCUMENTATION:
{context}

EXTRACT AND PROVIDE ONLY THE SPECIFIC SECTION THAT ANSWERS: {query}
"""


class QueryIntent(Enum):
    COMPLETE_CONTENT = "complete_content"
    PREREQUISITES = "prerequisites"
    SELECTIVE = "selective"


def assemble_context(chunks: List[DocumentChunk]) -> str:
    """Group chunks by file in first-seen order, each file sorted by chunk index"""
    by_file: "OrderedDict[str, List[DocumentChunk]]" = OrderedDict()
    for chunk in chunks:
        by_file.setdefault(chunk.file_path, []).append(chunk)

    parts = []
    for file_path, file_chunks in by_file.items():
        parts.append(f"\n--- Content from: {file_path} ---\n")
        for chunk in sorted(file_chunks, key=lambda c: c.chunk_index):
            parts.append(f"{chunk.content_chunk}\n")
    return "".join(parts)


def has_prerequisites(context: str) -> bool:
    lowered = context.lower()
    return any(marker in lowered for marker in PREREQUISITE_MARKERS)


def classify_intent(query: str, context: str) -> QueryIntent:
    """Pick the template for a query; raw/complete wins over how-to"""
    text = query.lower()
    if RAW_CONTENT_PATTERN.search(text) or COMPLETE_GUIDE_PATTERN.search(text):
        return QueryIntent.COMPLETE_CONTENT
    if HOW_TO_CREATE_PATTERN.search(text) and has_prerequisites(context):
        return QueryIntent.PREREQUISITES
    return QueryIntent.SELECTIVE


TEMPLATES = {
    QueryIntent.COMPLETE_CONTENT: COMPLETE_CONTENT_TEMPLATE,
    QueryIntent.PREREQUISITES: PREREQUISITES_TEMPLATE,
    QueryIntent.SELECTIVE: SELECTIVE_TEMPLATE,
}


class PromptBuilder:
    """Builds the grounding prompt handed to the generative engine. No I/O."""

    def build(self, query: str, chunks: List[DocumentChunk]) -> str:
        if not chunks:
            return NO_CONTEXT_TEMPLATE.format(query=query)

        context = assemble_context(chunks)
        intent = classify_intent(query, context)
        return TEMPLATES[intent].format(query=query, context=context)
