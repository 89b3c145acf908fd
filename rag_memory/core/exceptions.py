"""Error taxonomy for ingestion and retrieval."""


class RagMemoryError(Exception):
    """Base class for all rag_memory errors."""


class NoExtractableContentError(RagMemoryError):
    """Raised when a source yields no text (an OCR pass may be needed)."""


class EmbeddingGatewayError(RagMemoryError):
    """Raised when the embedding call fails or returns a malformed vector."""


class AnsweringModelError(RagMemoryError):
    """Raised when the answering model call fails."""


class StorageError(RagMemoryError):
    """Raised when the chunk store cannot be read or written."""


class CorruptRowError(StorageError):
    """Raised when a stored embedding does not decode to a valid vector."""

    def __init__(self, row_id: int | None, reason: str):
        self.row_id = row_id
        self.reason = reason
        super().__init__(f"Corrupt chunk row {row_id}: {reason}")


class ExtractionError(RagMemoryError):
    """Raised when a file or URL cannot be read."""


class EmbeddingDimensionError(StorageError):
    """Raised when an embedding's length differs from the store's dimensionality."""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Embedding has {actual} dimensions but the store holds {expected}; "
            "switching embedding models requires a fresh database or forgetting all sources"
        )
