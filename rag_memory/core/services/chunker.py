"""Chunker - fixed-size overlapping character windows."""

import logging
from typing import Iterator

from ..models.document import TextChunk

logger = logging.getLogger(__name__)


def normalize_newlines(text: str) -> str:
    """Collapse CRLF and lone CR into LF."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


class Chunker:
    """Split text into overlapping windows of chunk_size characters."""

    def __init__(self, chunk_size: int = 1200, overlap: int = 150):
        """Initialize chunker.

        Args:
            chunk_size: Window length in characters.
            overlap: Characters shared by consecutive windows.
                If overlap >= chunk_size only the first chunk is emitted.
        """
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        if overlap < 0:
            raise ValueError(f"overlap must be non-negative, got {overlap}")

        self._chunk_size = chunk_size
        self._overlap = overlap

    @property
    def chunk_size(self) -> int:
        return self._chunk_size

    @property
    def overlap(self) -> int:
        return self._overlap

    def split(self, text: str | None) -> Iterator[TextChunk]:
        """Lazily yield chunks of text.

        Windows advance by chunk_size - overlap. Each window is trimmed and
        dropped if empty; indices count emitted chunks only. Calling split
        again on the same input yields the same sequence.
        """
        text = normalize_newlines(text or "")
        step = self._chunk_size - self._overlap
        start = 0
        index = 0

        while start < len(text):
            window = text[start : start + self._chunk_size].strip()
            if window:
                yield TextChunk(index=index, text=window, start=start)
                index += 1

            if step <= 0:
                logger.warning(
                    f"Chunk overlap {self._overlap} >= chunk size "
                    f"{self._chunk_size}, emitting first window only"
                )
                return

            start += step


def chunk_text(text: str | None, chunk_size: int = 1200, overlap: int = 150) -> list[TextChunk]:
    """Chunk text eagerly."""
    return list(Chunker(chunk_size, overlap).split(text))
