"""
Shared test fixtures.

Provides: deterministic fake embedder, recording fake LLM, temporary SQLite store
Dependencies: pytest, pytest-asyncio
"""

import pytest

from rag_memory.core.services.search_service import SearchService
from rag_memory.infrastructure.stores.sqlite_store import SQLiteChunkStore
from tests.fakes import LetterEmbedder, RecordingLLM


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "memories.db")


@pytest.fixture
def store(db_path):
    chunk_store = SQLiteChunkStore(path=db_path)
    chunk_store.init()
    return chunk_store


@pytest.fixture
def embedder():
    return LetterEmbedder()


@pytest.fixture
def llm():
    return RecordingLLM()


@pytest.fixture
def search_service(store):
    return SearchService(store=store, top_k=6)
