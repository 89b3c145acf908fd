"""Protocol interfaces for dependency injection."""
from .chunk_store import ChunkStoreProtocol
from .embedder import EmbedderProtocol
from .extractor import TextExtractorProtocol
from .llm import LLMProtocol

__all__ = [
    "ChunkStoreProtocol",
    "EmbedderProtocol",
    "TextExtractorProtocol",
    "LLMProtocol",
]
