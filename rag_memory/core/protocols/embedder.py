"""Embedder protocol for dependency injection."""
from typing import Protocol, runtime_checkable


@runtime_checkable
class EmbedderProtocol(Protocol):
    """Protocol for embedding service."""

    def embed(self, text: str) -> list[float]:
        """Embed a single text.

        Args:
            text: Text to embed.

        Returns:
            Vector of floats with the model's fixed dimensionality.

        Raises:
            EmbeddingGatewayError: If the model call fails.
        """
        ...

    def warmup(self) -> None:
        """Pre-load the model for faster inference."""
        ...
