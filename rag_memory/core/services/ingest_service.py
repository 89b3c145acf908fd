"""Ingest service - chunk, embed and upsert source text."""

import asyncio
import logging
from pathlib import Path
from typing import Optional

from ..exceptions import EmbeddingGatewayError, NoExtractableContentError
from ..models.document import TextChunk
from ..protocols.chunk_store import ChunkStoreProtocol
from ..protocols.embedder import EmbedderProtocol
from ..protocols.extractor import TextExtractorProtocol
from .chunker import Chunker

logger = logging.getLogger(__name__)


def source_id_for(locator: str) -> str:
    """Build a source id with a provenance prefix (url:, pdf:, file:)."""
    if locator.lower().startswith(("http://", "https://")):
        return f"url:{locator}"
    path = Path(locator)
    if path.suffix.lower() == ".pdf":
        return f"pdf:{path.name}"
    return f"file:{path.name}"


class IngestService:
    """Service for ingesting sources into the chunk store."""

    def __init__(
        self,
        embedder: EmbedderProtocol,
        store: ChunkStoreProtocol,
        extractor: Optional[TextExtractorProtocol] = None,
        chunk_size: int = 1200,
        chunk_overlap: int = 150,
        concurrency: int = 1,
    ):
        """Initialize ingest service.

        Args:
            embedder: Embedding service.
            store: Chunk store.
            extractor: Text extractor for files and URLs.
            chunk_size: Chunk size in characters.
            chunk_overlap: Overlap between chunks.
            concurrency: Chunks embedded and stored at once.
        """
        self._embedder = embedder
        self._store = store
        self._extractor = extractor
        self._chunker = Chunker(chunk_size, chunk_overlap)
        self._concurrency = max(1, concurrency)

    async def ingest(self, locator: str) -> int:
        """Extract a file or URL and ingest its text.

        Args:
            locator: File path or http(s) URL.

        Returns:
            Number of chunks stored.

        Raises:
            NoExtractableContentError: If extraction yields no text.
        """
        if self._extractor is None:
            raise RuntimeError("IngestService was built without a text extractor")

        extracted = await asyncio.to_thread(self._extractor.load, locator)
        return await self.ingest_text(
            source_id_for(locator), extracted.text, title=extracted.title
        )

    async def ingest_text(
        self,
        source_id: str,
        text: Optional[str],
        *,
        title: Optional[str] = None,
        page_number: Optional[int] = None,
    ) -> int:
        """Chunk text, embed each chunk and upsert it under source_id.

        Re-ingesting the same text overwrites the same (source_id, index)
        rows. The first failure aborts the call; chunks already stored stay.

        Returns:
            Number of chunks stored.

        Raises:
            NoExtractableContentError: If text is empty or whitespace,
                or chunking emits no chunk.
        """
        if not text or not text.strip():
            raise NoExtractableContentError(
                f"No extractable text for {source_id}; an OCR pass may be required"
            )

        chunks = self._chunker.split(text)

        if self._concurrency == 1:
            stored = 0
            for chunk in chunks:
                await self._store_chunk(source_id, chunk, title, page_number)
                stored += 1
        else:
            stored = await self._store_concurrently(source_id, list(chunks), title, page_number)

        if stored == 0:
            raise NoExtractableContentError(
                f"No chunks produced for {source_id} (chunk_size={self._chunker.chunk_size}, "
                f"overlap={self._chunker.overlap})"
            )

        logger.info(f"Ingested {stored} chunks for {source_id}")
        return stored

    async def _store_concurrently(
        self,
        source_id: str,
        chunks: list[TextChunk],
        title: Optional[str],
        page_number: Optional[int],
    ) -> int:
        """Embed and upsert chunks on a bounded pool; first failure cancels the rest."""
        semaphore = asyncio.Semaphore(self._concurrency)

        async def worker(chunk: TextChunk) -> None:
            async with semaphore:
                await self._store_chunk(source_id, chunk, title, page_number)

        try:
            async with asyncio.TaskGroup() as tg:
                for chunk in chunks:
                    tg.create_task(worker(chunk))
        except ExceptionGroup as eg:
            raise eg.exceptions[0]

        return len(chunks)

    async def _store_chunk(
        self,
        source_id: str,
        chunk: TextChunk,
        title: Optional[str],
        page_number: Optional[int],
    ) -> None:
        embedding = await asyncio.to_thread(self._embedder.embed, chunk.text)
        if not embedding:
            raise EmbeddingGatewayError(
                f"Empty embedding for {source_id}#{chunk.index}"
            )

        await asyncio.to_thread(
            self._store.upsert,
            source_id,
            chunk.index,
            chunk.text,
            embedding,
            page_number,
            title,
        )
        logger.debug(f"Stored {source_id}#{chunk.index} ({len(chunk.text)} chars)")
