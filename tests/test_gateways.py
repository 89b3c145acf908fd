"""Tests for the embedding and answering model adapters."""

from types import SimpleNamespace

import numpy as np
import pytest
from openai import OpenAIError

from rag_memory.core.exceptions import AnsweringModelError, EmbeddingGatewayError
from rag_memory.infrastructure.embeddings.ollama_embedder import OllamaEmbedder
from rag_memory.infrastructure.embeddings.validation import as_vector
from rag_memory.infrastructure.llm.ollama_client import OllamaClient


class TestAsVector:
    """Validation of raw model output."""

    def test_numpy_arrays_become_float_lists(self):
        vector = as_vector(np.array([1, 2.5], dtype=np.float32))

        assert vector == [1.0, 2.5]
        assert all(type(v) is float for v in vector)

    @pytest.mark.parametrize("raw", [[], None, [1.0, "x"], [True], [float("nan")], "abc"])
    def test_malformed_output_is_rejected(self, raw):
        with pytest.raises(EmbeddingGatewayError):
            as_vector(raw)


class _FakeEmbeddings:
    def __init__(self, data=None, error=None):
        self.data = data
        self.error = error
        self.requests = []

    def create(self, model, input):
        self.requests.append((model, input))
        if self.error is not None:
            raise self.error
        return SimpleNamespace(data=self.data)


class TestOllamaEmbedder:
    """Embedding gateway over the OpenAI-compatible API."""

    def _embedder(self, embeddings):
        embedder = OllamaEmbedder(base_url="http://ollama.test/v1", model="nomic-embed-text")
        embedder._client = SimpleNamespace(embeddings=embeddings)
        return embedder

    def test_returns_first_embedding(self):
        fake = _FakeEmbeddings(data=[SimpleNamespace(embedding=[0.5, -0.5])])

        assert self._embedder(fake).embed("hello") == [0.5, -0.5]
        assert fake.requests == [("nomic-embed-text", "hello")]

    def test_api_error_is_wrapped(self):
        fake = _FakeEmbeddings(error=OpenAIError("connection refused"))

        with pytest.raises(EmbeddingGatewayError):
            self._embedder(fake).embed("hello")

        assert len(fake.requests) == 1

    def test_empty_response_is_an_error(self):
        with pytest.raises(EmbeddingGatewayError):
            self._embedder(_FakeEmbeddings(data=[])).embed("hello")


class _FakeCompletions:
    def __init__(self, content=None, error=None, choices=True):
        self.content = content
        self.error = error
        self.choices = choices
        self.requests = []

    async def create(self, **kwargs):
        self.requests.append(kwargs)
        if self.error is not None:
            raise self.error
        if not self.choices:
            return SimpleNamespace(choices=[])
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


class TestOllamaClient:
    """Answering model over the OpenAI-compatible API."""

    def _client(self, completions):
        client = OllamaClient(base_url="http://ollama.test/v1", model="llama3.1:8b")
        client._client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
        return client

    @pytest.mark.asyncio
    async def test_prompt_carries_context_and_question(self):
        fake = _FakeCompletions(content="  The answer [pdf:a#0].  ")

        answer = await self._client(fake).complete("What?", "[pdf:a#0 score=0.900]\nfacts")

        assert answer == "The answer [pdf:a#0]."
        request = fake.requests[0]
        assert request["model"] == "llama3.1:8b"
        assert request["messages"][0]["role"] == "system"
        assert request["messages"][1]["content"] == (
            "CONTEXT:\n[pdf:a#0 score=0.900]\nfacts\n\nQUESTION:\nWhat?"
        )

    @pytest.mark.asyncio
    async def test_api_error_is_wrapped(self):
        fake = _FakeCompletions(error=OpenAIError("timeout"))

        with pytest.raises(AnsweringModelError):
            await self._client(fake).complete("q", "c")

    @pytest.mark.asyncio
    async def test_no_choices_is_an_error(self):
        with pytest.raises(AnsweringModelError):
            await self._client(_FakeCompletions(choices=False)).complete("q", "c")

    @pytest.mark.asyncio
    async def test_null_content_becomes_empty_answer(self):
        assert await self._client(_FakeCompletions(content=None)).complete("q", "c") == ""
