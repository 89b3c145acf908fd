"""Chunk store protocol for dependency injection."""
from typing import Protocol, Sequence, runtime_checkable

from ..models.document import Chunk, SearchHit


@runtime_checkable
class ChunkStoreProtocol(Protocol):
    """Protocol for durable chunk storage keyed by (source_id, chunk_index)."""

    def init(self) -> None:
        """Create the schema. Safe to call repeatedly."""
        ...

    def upsert(
        self,
        source_id: str,
        chunk_index: int,
        text: str,
        embedding: Sequence[float],
        page_number: int | None = None,
        title: str | None = None,
    ) -> None:
        """Insert a chunk or atomically replace the row with the same key."""
        ...

    def search(self, query_embedding: Sequence[float], top_k: int = 6) -> list[SearchHit]:
        """Score every stored chunk against the query and return the best top_k.

        Args:
            query_embedding: Query vector.
            top_k: Maximum number of hits.

        Returns:
            Hits sorted by descending score.
        """
        ...

    def get_chunk(self, source_id: str, chunk_index: int) -> Chunk | None:
        """Load one chunk by key."""
        ...

    def embedding_dim(self) -> int | None:
        """Dimensionality every stored embedding shares, None when empty."""
        ...

    def count(self) -> int:
        """Get chunk count."""
        ...

    def list_sources(self) -> list[tuple[str, int]]:
        """Get (source_id, chunk_count) pairs."""
        ...

    def delete_source(self, source_id: str) -> int:
        """Delete every chunk of a source, returning the number removed."""
        ...
