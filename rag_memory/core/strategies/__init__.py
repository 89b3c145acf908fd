"""Scoring and ranking strategies."""
from .scoring import CosineSimilarity, SimilarityStrategy, cosine_similarity, rank_hits

__all__ = [
    "CosineSimilarity",
    "SimilarityStrategy",
    "cosine_similarity",
    "rank_hits",
]
