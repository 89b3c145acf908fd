"""Document domain models."""
from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class ExtractedText:
    """Raw text pulled from a file or web page."""
    text: str
    title: Optional[str] = None


@dataclass(frozen=True)
class TextChunk:
    """Window emitted by the chunker."""
    index: int
    text: str
    start: int  # offset of the untrimmed window in the normalized text


@dataclass
class Chunk:
    """Persisted unit of retrievable knowledge."""
    source_id: str
    chunk_index: int
    text: str
    embedding: list[float] = field(default_factory=list)
    page_number: Optional[int] = None
    title: Optional[str] = None


@dataclass(frozen=True)
class SearchHit:
    """Search result from the chunk store."""
    source_id: str
    chunk_index: int
    text: str
    score: float

    @property
    def citation(self) -> str:
        return f"{self.source_id}#{self.chunk_index}"


@dataclass
class RetrievalResult:
    """Hits and the context block built from them."""
    hits: list[SearchHit]
    context: str

    @property
    def sources(self) -> list[str]:
        """Unique source ids in rank order."""
        seen = set()
        sources = []
        for hit in self.hits:
            if hit.source_id not in seen:
                seen.add(hit.source_id)
                sources.append(hit.source_id)
        return sources
