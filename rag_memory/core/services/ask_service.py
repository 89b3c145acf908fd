"""Ask service - coordinates retrieval and the answering model."""

import asyncio
import logging
from typing import Optional

from ..exceptions import EmbeddingGatewayError
from ..models.document import RetrievalResult
from ..protocols.embedder import EmbedderProtocol
from ..protocols.llm import LLMProtocol
from .context_service import build_context
from .search_service import SearchService

logger = logging.getLogger(__name__)


class AskService:
    """Embed the question, retrieve context, ask the model."""

    def __init__(
        self,
        embedder: EmbedderProtocol,
        search_service: SearchService,
        llm: LLMProtocol,
        max_context_chars: int = 12_000,
    ):
        """Initialize ask service.

        Args:
            embedder: Embedding service for the question.
            search_service: Search service.
            llm: Answering model.
            max_context_chars: Soft cap on the context block.
        """
        self._embedder = embedder
        self._search = search_service
        self._llm = llm
        self._max_context_chars = max_context_chars

    async def retrieve(
        self,
        question: str,
        top_k: Optional[int] = None,
        max_chars: Optional[int] = None,
    ) -> RetrievalResult:
        """Embed question, search and build the context block.

        Raises:
            EmbeddingGatewayError: If the question cannot be embedded.
        """
        query_embedding = await asyncio.to_thread(self._embedder.embed, question)
        if not query_embedding:
            raise EmbeddingGatewayError("Empty embedding for question")

        hits = await asyncio.to_thread(self._search.search, query_embedding, top_k)
        context = build_context(
            hits, self._max_context_chars if max_chars is None else max_chars
        )
        return RetrievalResult(hits=hits, context=context)

    async def ask(
        self,
        question: Optional[str],
        top_k: Optional[int] = None,
        max_chars: Optional[int] = None,
    ) -> str:
        """Answer a question from stored memories.

        Flow:
            1. Embed the question
            2. Top-K search over the chunk store
            3. Build the context block
            4. Ask the model with (question, context)

        Returns:
            The answer, or "" for an empty question (no model calls made).
        """
        if not question or not question.strip():
            return ""

        retrieval = await self.retrieve(question, top_k=top_k, max_chars=max_chars)
        logger.info(f"RAG hits: {len(retrieval.hits)} for '{question[:50]}...'")

        return await self._llm.complete(question, retrieval.context)
