"""Domain models."""
from .document import Chunk, ExtractedText, RetrievalResult, SearchHit, TextChunk

__all__ = [
    "Chunk",
    "ExtractedText",
    "RetrievalResult",
    "SearchHit",
    "TextChunk",
]
