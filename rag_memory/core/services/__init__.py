"""Core business services."""
from .chunker import Chunker, chunk_text
from .context_service import NO_MEMORIES_MESSAGE, build_context
from .search_service import SearchService
from .ingest_service import IngestService
from .ask_service import AskService

__all__ = [
    "Chunker",
    "chunk_text",
    "NO_MEMORIES_MESSAGE",
    "build_context",
    "SearchService",
    "IngestService",
    "AskService",
]
