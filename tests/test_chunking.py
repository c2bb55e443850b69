"""
Tests for the fixed-size text chunker
"""
import pytest

from ingestion.chunking import TextChunker


class TestTextChunker:
    """Test TextChunker.chunkify"""

    def test_blank_input_returns_no_chunks(self):
        chunker = TextChunker(size=100, overlap=10)

        assert chunker.chunkify("") == []
        assert chunker.chunkify("   \n\n ") == []

    def test_short_text_is_single_chunk(self):
        chunker = TextChunker(size=100, overlap=10)

        assert chunker.chunkify("  Install the operator.  ") == ["Install the operator."]

    def test_chunks_respect_size(self):
        text = " ".join(f"word{i}" for i in range(400))
        chunker = TextChunker(size=120, overlap=20)

        chunks = chunker.chunkify(text)

        assert len(chunks) > 1
        assert all(len(c) <= 120 for c in chunks)

    def test_chunks_cover_all_words_in_order(self):
        words = [f"w{i}" for i in range(300)]
        chunker = TextChunker(size=80, overlap=15)

        chunks = chunker.chunkify(" ".join(words))

        vocabulary = set(words)
        seen = []
        for chunk in chunks:
            for word in chunk.split():
                if word in vocabulary and word not in seen:
                    seen.append(word)
        assert seen == words

    def test_prefers_paragraph_breaks(self):
        first = "a" * 80
        second = "b" * 60
        chunker = TextChunker(size=100, overlap=0)

        chunks = chunker.chunkify(f"{first}\n\n{second}")

        assert chunks == [first, second]

    def test_overlap_repeats_tail_of_previous_chunk(self):
        text = " ".join(f"t{i:03d}" for i in range(100))
        chunker = TextChunker(size=100, overlap=30)

        chunks = chunker.chunkify(text)

        assert chunks[1].split()[0] in chunks[0].split()

    def test_text_without_spaces_uses_hard_breaks(self):
        chunker = TextChunker(size=50, overlap=10)

        chunks = chunker.chunkify("x" * 175)

        assert all(len(c) <= 50 for c in chunks)
        assert "".join(chunks).count("x") >= 175

    @pytest.mark.parametrize("size,overlap", [(0, 0), (-5, 0), (100, 100), (100, -1)])
    def test_invalid_configuration_rejected(self, size, overlap):
        with pytest.raises(ValueError):
            TextChunker(size=size, overlap=overlap)
