"""
Unit tests for the word-window chunker.
"""

import pytest

from talkrag.core.errors import ChunkingConfigError
from talkrag.ingestion.chunking import chunk_record, chunk_step, chunk_text
from talkrag.schemas.corpus import CorpusRecord


def _words(n: int) -> str:
    return " ".join(f"w{i}" for i in range(n))


def _reconstruct(chunks: list[str], step: int) -> list[str]:
    """Rebuild the word sequence from step-advancing windows."""
    words: list[str] = []
    for chunk in chunks[:-1]:
        words.extend(chunk.split()[:step])
    words.extend(chunks[-1].split())
    return words


class TestChunkText:
    def test_default_step_is_820(self):
        assert chunk_step(1024, 0.2) == (204, 820)

    def test_exact_window_is_one_chunk(self):
        chunks = chunk_text(_words(1024), 1024, 0.2)
        assert len(chunks) == 1
        assert len(chunks[0].split()) == 1024

    def test_2000_words_is_two_chunks(self):
        chunks = chunk_text(_words(2000), 1024, 0.2)
        assert len(chunks) == 2
        first, second = (c.split() for c in chunks)
        assert first == [f"w{i}" for i in range(1024)]
        assert second == [f"w{i}" for i in range(820, 2000)]

    def test_long_text_windows_start_at_multiples_of_step(self):
        chunks = chunk_text(_words(5000), 1024, 0.2)
        starts = [int(c.split()[0][1:]) for c in chunks]
        assert starts == [i * 820 for i in range(len(chunks))]
        assert chunks[-1].split()[-1] == "w4999"

    def test_short_text_is_single_unpadded_chunk(self):
        assert chunk_text("one two   three\nfour", 1024, 0.2) == ["one two three four"]

    def test_blank_text_has_no_chunks(self):
        assert chunk_text("", 1024, 0.2) == []
        assert chunk_text("  \n\t ", 1024, 0.2) == []

    def test_leading_whitespace_does_not_create_empty_word(self):
        assert chunk_text("\n  Title: X", 10, 0.2) == ["Title: X"]

    @pytest.mark.parametrize(
        "n_words,window,ratio",
        [(1, 4, 0.5), (7, 4, 0.5), (100, 10, 0.0), (999, 50, 0.9), (3000, 1024, 0.2)],
    )
    def test_windows_cover_text_without_gaps(self, n_words, window, ratio):
        text = _words(n_words)
        chunks = chunk_text(text, window, ratio)
        _, step = chunk_step(window, ratio)
        assert _reconstruct(chunks, step) == text.split()

    def test_deterministic(self):
        text = _words(3333)
        assert chunk_text(text, 256, 0.25) == chunk_text(text, 256, 0.25)

    @pytest.mark.parametrize("ratio", [1.0, 1.5, -0.1])
    def test_rejects_overlap_that_cannot_advance(self, ratio):
        with pytest.raises(ChunkingConfigError):
            chunk_text(_words(10), 4, ratio)

    def test_rejects_empty_window(self):
        with pytest.raises(ValueError):
            chunk_text(_words(10), 0, 0.2)


class TestChunkRecord:
    @pytest.fixture
    def record(self):
        return CorpusRecord(
            record_id="42",
            title="The power of vulnerability",
            speaker="Brené Brown",
            description="A talk about connection.",
            transcript=_words(1500),
        )

    def test_chunks_are_numbered_and_keyed(self, record):
        chunks = chunk_record(record, 1024, 0.2)
        assert [c.chunk_index for c in chunks] == list(range(len(chunks)))
        assert [c.vector_id for c in chunks] == [f"42-{i}" for i in range(len(chunks))]
        assert chunks[0].text.startswith("Title: The power of vulnerability Speaker: Brené Brown")

    def test_metadata_links_back_to_record(self, record):
        md = chunk_record(record, 1024, 0.2)[1].metadata()
        assert md.record_id == "42"
        assert md.title == "The power of vulnerability"
        assert md.speaker == "Brené Brown"
        assert md.chunk_index == 1

    def test_rechunking_gives_identical_identities(self, record):
        first = chunk_record(record, 1024, 0.2)
        second = chunk_record(record, 1024, 0.2)
        assert [(c.vector_id, c.text) for c in first] == [(c.vector_id, c.text) for c in second]
