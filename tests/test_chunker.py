"""Tests for the fixed-size overlapping chunker."""

import pytest

from rag_memory.core.services.chunker import Chunker, chunk_text, normalize_newlines


class TestChunker:
    """Window boundaries, trimming and indexing."""

    def test_windows_advance_by_size_minus_overlap(self):
        text = "x" * 3000

        chunks = chunk_text(text, chunk_size=1200, overlap=150)

        assert [c.index for c in chunks] == [0, 1, 2]
        assert [c.start for c in chunks] == [0, 1050, 2100]
        assert [len(c.text) for c in chunks] == [1200, 1200, 900]

    def test_final_window_may_be_shorter(self):
        chunks = chunk_text("abcdefghij", chunk_size=4, overlap=1)

        assert [c.text for c in chunks] == ["abcd", "defg", "ghij", "j"]

    def test_consecutive_chunks_share_overlap(self):
        text = "".join(chr(ord("a") + i % 26) for i in range(100))

        chunks = chunk_text(text, chunk_size=30, overlap=10)

        for prev, nxt in zip(chunks, chunks[1:]):
            assert prev.text[-10:] == nxt.text[:10]

    def test_whitespace_windows_are_dropped_and_indices_stay_dense(self):
        text = "aaaa" + " " * 8 + "bbbb"

        chunks = chunk_text(text, chunk_size=4, overlap=0)

        assert [(c.index, c.text) for c in chunks] == [(0, "aaaa"), (1, "bbbb")]
        assert chunks[1].start == 12

    def test_windows_are_trimmed(self):
        chunks = chunk_text("  ab  cd  ", chunk_size=5, overlap=0)

        assert [c.text for c in chunks] == ["ab", "cd"]

    def test_overlap_equal_to_size_emits_first_window_only(self):
        text = "0123456789" * 50

        chunks = chunk_text(text, chunk_size=10, overlap=10)

        assert len(chunks) == 1
        assert chunks[0].text == "0123456789"
        assert chunks[0].index == 0

    def test_overlap_larger_than_size_emits_first_window_only(self):
        chunks = chunk_text("abcdefghijklmnop", chunk_size=4, overlap=9)

        assert [c.text for c in chunks] == ["abcd"]

    def test_empty_and_none_text_yield_nothing(self):
        assert chunk_text("", 10, 2) == []
        assert chunk_text(None, 10, 2) == []
        assert chunk_text("   \n\t  ", 10, 2) == []

    def test_split_is_deterministic_and_restartable(self):
        chunker = Chunker(chunk_size=7, overlap=3)
        text = "The quick brown fox jumps over the lazy dog"

        first = list(chunker.split(text))
        second = list(chunker.split(text))

        assert first == second

    def test_split_is_lazy(self):
        chunker = Chunker(chunk_size=5, overlap=0)

        iterator = chunker.split("a" * 1000)

        assert next(iterator).index == 0
        assert next(iterator).index == 1

    def test_invalid_parameters_raise(self):
        with pytest.raises(ValueError):
            Chunker(chunk_size=0, overlap=0)
        with pytest.raises(ValueError):
            Chunker(chunk_size=10, overlap=-1)


class TestNewlineNormalization:
    """Platform newlines must not move chunk boundaries."""

    def test_crlf_and_cr_collapse_to_lf(self):
        assert normalize_newlines("a\r\nb\rc\nd") == "a\nb\nc\nd"

    def test_crlf_text_chunks_like_lf_text(self):
        lf = "line one\nline two\nline three\n" * 40
        crlf = lf.replace("\n", "\r\n")

        assert chunk_text(crlf, 50, 10) == chunk_text(lf, 50, 10)
