"""Search service - similarity search over the chunk store."""

import logging
from typing import Optional, Sequence

from ..models.document import SearchHit
from ..protocols.chunk_store import ChunkStoreProtocol

logger = logging.getLogger(__name__)


class SearchService:
    """Exhaustive top-K retrieval by cosine similarity."""

    def __init__(self, store: ChunkStoreProtocol, top_k: int = 6):
        """Initialize search service.

        Args:
            store: Chunk store to scan.
            top_k: Default number of results to return.
        """
        self._store = store
        self._top_k = top_k

    @property
    def top_k(self) -> int:
        return self._top_k

    def search(
        self, query_embedding: Sequence[float], top_k: Optional[int] = None
    ) -> list[SearchHit]:
        """Return the top_k stored chunks most similar to the query.

        Args:
            query_embedding: Query vector.
            top_k: Override number of results.

        Returns:
            Hits sorted by descending score, at most top_k of them.
        """
        top_k = self._top_k if top_k is None else top_k
        hits = self._store.search(query_embedding, top_k=top_k)
        logger.info(f"Search: returned {len(hits)}/{top_k} chunks")
        return hits
