import logging
from functools import cached_property

from sentence_transformers import SentenceTransformer

from ...core.exceptions import EmbeddingGatewayError
from .validation import as_vector

logger = logging.getLogger(__name__)


class SentenceTransformerEmbedder:
    """Local embedding model loaded through sentence-transformers."""

    def __init__(self, model_name: str = "sentence-transformers/all-MiniLM-L6-v2"):
        self._model_name = model_name

    @cached_property
    def model(self) -> SentenceTransformer:
        logger.info(f"Loading embedding model: {self._model_name}")
        return SentenceTransformer(self._model_name)

    def warmup(self) -> None:
        _ = self.model
        logger.info("Embedding model warmed up")

    def embed(self, text: str) -> list[float]:
        try:
            raw = self.model.encode(text, convert_to_numpy=True)
        except Exception as e:
            raise EmbeddingGatewayError(f"Local embedding failed: {e}") from e
        return as_vector(raw)
