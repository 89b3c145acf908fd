import logging

from openai import OpenAI, OpenAIError

from ...core.exceptions import EmbeddingGatewayError
from .validation import as_vector

logger = logging.getLogger(__name__)


class OllamaEmbedder:
    """Embedding client for Ollama (OpenAI-compatible API)."""

    def __init__(
        self,
        base_url: str = "http://localhost:11434/v1",
        model: str = "nomic-embed-text",
    ):
        """Initialize embedder.

        Args:
            base_url: Ollama API URL.
            model: Embedding model name.
        """
        self._client = OpenAI(base_url=base_url, api_key="ollama", max_retries=0)
        self._model = model

    def warmup(self) -> None:
        self.embed("warmup")
        logger.info(f"Embedding model {self._model} warmed up")

    def embed(self, text: str) -> list[float]:
        """Embed one text. No caching, no retries."""
        try:
            response = self._client.embeddings.create(model=self._model, input=text)
        except OpenAIError as e:
            raise EmbeddingGatewayError(f"Embedding call to {self._model} failed: {e}") from e

        if not response.data:
            raise EmbeddingGatewayError(f"Embedding model {self._model} returned no data")
        return as_vector(response.data[0].embedding)
