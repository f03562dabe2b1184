"""Tests for boundary-aware chunking."""

import hashlib

import pytest

from knowledge_backend.core.document_processing.tasks import ChunkingTask
from knowledge_backend.core.document_processing.tasks.chunking_task import (
    build_chunk_id,
    estimate_token_count,
)

PROJECT = "project-1"
DOCUMENT = "document-1"


@pytest.fixture
def chunker() -> ChunkingTask:
    return ChunkingTask()


def _long_text() -> str:
    paragraph = " ".join(f"word{i}" for i in range(60)) + ". Another sentence follows here."
    return "\n\n".join(paragraph for _ in range(12))


class TestChunkingBasics:
    def test_short_text_is_one_chunk(self, chunker: ChunkingTask) -> None:
        chunks = chunker.chunk("Hello world. This is a test.", PROJECT, DOCUMENT)

        assert len(chunks) == 1
        assert chunks[0].text == "Hello world. This is a test."
        assert chunks[0].token_count == 6
        assert chunks[0].chunk_index == 0
        assert chunks[0].embedding is None

    @pytest.mark.parametrize("text", ["", "   ", "\r\n\r\n  \n"])
    def test_blank_text_gives_no_chunks(self, chunker: ChunkingTask, text: str) -> None:
        assert chunker.chunk(text, PROJECT, DOCUMENT) == []

    def test_crlf_is_normalized(self, chunker: ChunkingTask) -> None:
        chunks = chunker.chunk("  line one\r\nline two\r\n", PROJECT, DOCUMENT)

        assert chunks[0].text == "line one\nline two"

    def test_token_count_never_below_one(self) -> None:
        assert estimate_token_count("") == 1
        assert estimate_token_count("one  two\tthree\n") == 3


class TestChunkIds:
    def test_id_is_truncated_sha256(self) -> None:
        expected = hashlib.sha256(b"p:d:3:some text").hexdigest()[:32]

        assert build_chunk_id("p", "d", 3, "some text") == expected

    def test_ids_are_deterministic(self, chunker: ChunkingTask) -> None:
        first = chunker.chunk(_long_text(), PROJECT, DOCUMENT)
        second = chunker.chunk(_long_text(), PROJECT, DOCUMENT)

        assert [c.chunk_id for c in first] == [c.chunk_id for c in second]

    def test_ids_are_distinct_per_ordinal(self, chunker: ChunkingTask) -> None:
        chunks = chunker.chunk(_long_text(), PROJECT, DOCUMENT)

        assert len({c.chunk_id for c in chunks}) == len(chunks)
        assert all(len(c.chunk_id) == 32 for c in chunks)

    def test_ids_depend_on_document(self, chunker: ChunkingTask) -> None:
        a = chunker.chunk("Same text.", PROJECT, "doc-a")
        b = chunker.chunk("Same text.", PROJECT, "doc-b")

        assert a[0].chunk_id != b[0].chunk_id


class TestSlidingWindow:
    def test_long_text_gives_overlapping_chunks(self, chunker: ChunkingTask) -> None:
        text = _long_text()
        assert len(text) > 5000

        chunks = chunker.chunk(text, PROJECT, DOCUMENT)

        assert len(chunks) > 2
        for previous, current in zip(chunks, chunks[1:]):
            assert current.start_index == previous.end_index - 200
        assert all(c.end_index - c.start_index <= 1800 for c in chunks)
        assert [c.chunk_index for c in chunks] == list(range(len(chunks)))

    def test_windows_reconstruct_normalized_text(self, chunker: ChunkingTask) -> None:
        text = _long_text()
        chunks = chunker.chunk(text, PROJECT, DOCUMENT)

        rebuilt = text[: chunks[0].end_index]
        for chunk in chunks[1:]:
            rebuilt += text[chunk.start_index + 200 : chunk.end_index]

        assert rebuilt == text.strip()
        assert chunks[-1].end_index == len(text)

    def test_cut_at_paragraph_break(self, chunker: ChunkingTask) -> None:
        first = " ".join(["alpha"] * 166)
        second = " ".join(["beta"] * 400)
        text = first + "\n\n" + second

        chunks = chunker.chunk(text, PROJECT, DOCUMENT)

        assert chunks[0].text == first
        assert chunks[0].end_index == len(first) + 1
        assert chunks[1].start_index == len(first) + 1 - 200

    def test_latest_break_wins_and_keeps_period(self, chunker: ChunkingTask) -> None:
        text = "x" * 600 + "\n\n" + "y" * 298 + ". " + "z" * 2000

        chunks = chunker.chunk(text, PROJECT, DOCUMENT)

        assert chunks[0].end_index == 901
        assert chunks[0].text.endswith("y.")

    def test_breaks_near_window_start_are_ignored(self, chunker: ChunkingTask) -> None:
        text = "x" * 300 + "\n\n" + "y" * 3000

        chunks = chunker.chunk(text, PROJECT, DOCUMENT)

        assert chunks[0].end_index == 1800

    def test_text_without_breaks_is_cut_at_window_size(self, chunker: ChunkingTask) -> None:
        chunks = chunker.chunk("a" * 4000, PROJECT, DOCUMENT)

        assert [(c.start_index, c.end_index) for c in chunks] == [
            (0, 1800),
            (1600, 3400),
            (3200, 4000),
        ]

    def test_windows_count_code_points(self, chunker: ChunkingTask) -> None:
        chunks = chunker.chunk("\U0001F600" * 4000, PROJECT, DOCUMENT)

        assert [(c.start_index, c.end_index) for c in chunks] == [
            (0, 1800),
            (1600, 3400),
            (3200, 4000),
        ]
        assert all(c.text == "\U0001F600" * len(c.text) for c in chunks)
        assert all(c.text.encode("utf-8") for c in chunks)


class TestConfiguration:
    def test_overlap_must_be_smaller_than_size(self) -> None:
        with pytest.raises(ValueError):
            ChunkingTask(chunk_size=100, chunk_overlap=100, min_split_offset=100)

    def test_min_split_offset_must_cover_overlap(self) -> None:
        with pytest.raises(ValueError):
            ChunkingTask(chunk_size=1800, chunk_overlap=200, min_split_offset=100)

    def test_small_windows(self) -> None:
        chunker = ChunkingTask(chunk_size=50, chunk_overlap=10, min_split_offset=20)

        chunks = chunker.chunk("word " * 40, PROJECT, DOCUMENT)

        assert len(chunks) > 1
        assert all(len(c.text) <= 50 for c in chunks)
