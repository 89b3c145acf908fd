import logging
from abc import ABC, abstractmethod
from typing import Iterable, Sequence

import numpy as np

from ..models.document import SearchHit

logger = logging.getLogger(__name__)


class SimilarityStrategy(ABC):
    """Base class for vector similarity metrics."""

    @abstractmethod
    def score(self, a: Sequence[float], b: Sequence[float]) -> float:
        """Score two vectors. Degenerate inputs score 0, never raise."""
        ...


class CosineSimilarity(SimilarityStrategy):
    """dot(a, b) / (|a| * |b|), clipped to [-1, 1]."""

    def score(self, a: Sequence[float], b: Sequence[float]) -> float:
        return cosine_similarity(a, b)


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """Cosine similarity of two vectors.

    Vectors of different length, empty vectors and zero vectors score 0.0
    so a malformed chunk ranks last instead of failing the search.
    """
    if len(a) == 0 or len(a) != len(b):
        return 0.0

    va = np.asarray(a, dtype=np.float64)
    vb = np.asarray(b, dtype=np.float64)

    denom = np.linalg.norm(va) * np.linalg.norm(vb)
    if denom == 0 or not np.isfinite(denom):
        return 0.0

    similarity = float(np.dot(va, vb) / denom)
    if not np.isfinite(similarity):
        return 0.0
    return max(-1.0, min(1.0, similarity))


def rank_hits(
    scored: Iterable[tuple[SearchHit, int]], top_k: int
) -> list[SearchHit]:
    """Sort hits by descending score and keep the first top_k.

    Args:
        scored: (hit, row_id) pairs; row_id breaks ties after chunk_index.
        top_k: Maximum number of hits.

    Returns:
        Ranked hits. Equal scores order by ascending chunk_index, then row id.
    """
    if top_k <= 0:
        return []

    ranked = sorted(
        scored, key=lambda pair: (-pair[0].score, pair[0].chunk_index, pair[1])
    )
    hits = [hit for hit, _ in ranked[:top_k]]

    if logger.isEnabledFor(logging.DEBUG) and hits:
        top_scores = ", ".join(f"{h.score:.3f}" for h in hits[:3])
        logger.debug(f"Top-3 scores: [{top_scores}]")

    return hits
