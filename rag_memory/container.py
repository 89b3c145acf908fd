import logging
from dataclasses import dataclass, field
from typing import Any, Callable, TypeVar

from .config.settings import Settings

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class Container:
    _factories: dict[type, Callable[[], Any]] = field(default_factory=dict)
    _singletons: dict[type, Any] = field(default_factory=dict)
    _singleton_flags: set[type] = field(default_factory=set)

    def register(
        self, interface: type[T], factory: Callable[[], T], singleton: bool = False
    ) -> None:
        """Register factory for interface.

        Args:
            interface: Interface type.
            factory: Factory function.
            singleton: Whether to cache instance.
        """
        self._factories[interface] = factory
        if singleton:
            self._singleton_flags.add(interface)

    def resolve(self, interface: type[T]) -> T:
        if interface in self._singletons:
            return self._singletons[interface]

        if interface not in self._factories:
            raise KeyError(f"No factory registered for {interface}")

        instance = self._factories[interface]()

        if interface in self._singleton_flags:
            self._singletons[interface] = instance

        return instance

    def reset(self) -> None:
        """Reset singletons (for testing)."""
        self._singletons.clear()


container = Container()


def _build_embedder(settings: Settings):
    if settings.embedding_backend == "sentence_transformers":
        from .infrastructure.embeddings.sentence_transformer import (
            SentenceTransformerEmbedder,
        )

        return SentenceTransformerEmbedder(settings.embedding_model)

    if settings.embedding_backend == "ollama":
        from .infrastructure.embeddings.ollama_embedder import OllamaEmbedder

        return OllamaEmbedder(
            base_url=settings.embedding_base_url or settings.llm_base_url,
            model=settings.embedding_model,
        )

    raise ValueError(f"Unknown embedding backend: {settings.embedding_backend}")


def configure_container(settings: Settings) -> Container:
    """Configure container with all dependencies.

    Args:
        settings: Application settings.

    Returns:
        Configured container.
    """
    from .core.protocols.chunk_store import ChunkStoreProtocol
    from .core.protocols.embedder import EmbedderProtocol
    from .core.protocols.extractor import TextExtractorProtocol
    from .core.protocols.llm import LLMProtocol
    from .core.services.ask_service import AskService
    from .core.services.ingest_service import IngestService
    from .core.services.search_service import SearchService
    from .infrastructure.document_loaders import CompositeLoader
    from .infrastructure.llm.ollama_client import OllamaClient
    from .infrastructure.stores.sqlite_store import SQLiteChunkStore

    container.reset()

    container.register(
        EmbedderProtocol,
        lambda: _build_embedder(settings),
        singleton=True,
    )

    container.register(
        ChunkStoreProtocol,
        lambda: SQLiteChunkStore(path=settings.db_path),
        singleton=True,
    )

    container.register(
        TextExtractorProtocol,
        lambda: CompositeLoader(web_timeout=settings.web_timeout),
        singleton=True,
    )

    container.register(
        LLMProtocol,
        lambda: OllamaClient(
            base_url=settings.llm_base_url,
            model=settings.llm_model,
            max_tokens=settings.llm_max_tokens,
            temperature=settings.llm_temperature,
        ),
        singleton=True,
    )

    container.register(
        SearchService,
        lambda: SearchService(
            store=container.resolve(ChunkStoreProtocol),
            top_k=settings.rag_top_k,
        ),
        singleton=True,
    )

    container.register(
        IngestService,
        lambda: IngestService(
            embedder=container.resolve(EmbedderProtocol),
            store=container.resolve(ChunkStoreProtocol),
            extractor=container.resolve(TextExtractorProtocol),
            chunk_size=settings.chunk_size,
            chunk_overlap=settings.chunk_overlap,
            concurrency=settings.ingest_concurrency,
        ),
        singleton=True,
    )

    container.register(
        AskService,
        lambda: AskService(
            embedder=container.resolve(EmbedderProtocol),
            search_service=container.resolve(SearchService),
            llm=container.resolve(LLMProtocol),
            max_context_chars=settings.rag_max_context_chars,
        ),
        singleton=True,
    )

    logger.info("Container configured")
    return container
