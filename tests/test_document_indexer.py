"""
Tests for DocumentIndexer - chunk, hash and upsert one fetched file
"""
import hashlib

from domain_models import SourceFile
from ingestion.chunking import TextChunker
from operations.document_indexer import DocumentIndexer


def _source(repo, path, content):
    return SourceFile(path=path, repository=repo, raw_content=content)


def test_index_file_stores_chunks_in_order(store, repo):
    indexer = DocumentIndexer(store, TextChunker(size=60, overlap=10))
    content = "\n\n".join(f"Paragraph {i} explains step {i} of the install." for i in range(6))

    result = indexer.index_file(_source(repo, "install.md", content))

    chunks = store.all_chunks()
    assert result.succeeded
    assert result.chunks_count == len(chunks) > 1
    assert [c.chunk_index for c in chunks] == list(range(len(chunks)))
    assert {c.content_hash for c in chunks} == {hashlib.sha256(content.encode()).hexdigest()}


def test_reindex_shrinks_file(store, repo):
    indexer = DocumentIndexer(store, TextChunker(size=60, overlap=10))
    long_content = "\n\n".join(f"Section {i} of the long guide text." for i in range(8))
    indexer.index_file(_source(repo, "guide.md", long_content))

    result = indexer.index_file(_source(repo, "guide.md", "Now a single short paragraph."))

    chunks = store.all_chunks()
    assert result.chunks_count == 1
    assert [(c.chunk_index, c.content_chunk) for c in chunks] == [(0, "Now a single short paragraph.")]


def test_blank_file_removes_existing_chunks(store, repo):
    indexer = DocumentIndexer(store)
    indexer.index_file(_source(repo, "notes.md", "Some notes"))

    result = indexer.index_file(_source(repo, "notes.md", "   "))

    assert result.chunks_count == 0
    assert store.count() == 0
