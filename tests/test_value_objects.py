# Copyright (c) 2024 RAG-KB Contributors
# SPDX-License-Identifier: MIT

"""Tests for value objects."""

import pytest

from domain_models import FileRef, RepositoryRef
from value_objects import IndexingStats, ProcessingResult, StoreStats


class TestIndexingStats:
    """Test IndexingStats value object."""

    def test_default_values(self):
        stats = IndexingStats()
        assert (stats.processed, stats.failed, stats.total) == (0, 0, 0)

    def test_str(self):
        assert str(IndexingStats(processed=8, failed=2, total=10)) == "8/10 files processed, 2 failed"

    def test_immutable(self):
        stats = IndexingStats(processed=1)
        with pytest.raises(Exception):
            stats.processed = 5


class TestProcessingResult:
    """Test ProcessingResult value object."""

    def test_success(self):
        result = ProcessingResult.success("docs/a.md", 3)
        assert result.succeeded
        assert not result.failed
        assert result.chunks_count == 3

    def test_failure(self):
        result = ProcessingResult.failure("docs/a.md", "timeout")
        assert result.failed
        assert result.error_message == "timeout"
        assert result.chunks_count == 0


class TestStoreStats:
    """Test StoreStats value object."""

    def test_size_mb_two_decimals(self):
        assert StoreStats(count=10, size_bytes=1048576).size_mb == "1.00"
        assert StoreStats(count=10, size_bytes=1572864).size_mb == "1.50"

    def test_small_size_rounds_to_zero(self):
        assert StoreStats(count=1, size_bytes=4096).size_mb == "0.00"

    def test_unknown_size(self):
        assert StoreStats(count=0, size_bytes=-1).size_mb == "-1"


class TestRepositoryRef:

    def test_full_name(self):
        assert RepositoryRef("acme", "docs").full_name == "acme/docs"

    def test_parse_with_branch(self):
        assert RepositoryRef.parse("acme/docs@v2") == RepositoryRef("acme", "docs", "v2")

    def test_file_ref_name(self):
        assert FileRef(path="guides/install/README.md", repository_full_name="acme/docs").name == "README.md"
