"""Text extractor protocol for dependency injection."""
from typing import Protocol, runtime_checkable

from ..models.document import ExtractedText


@runtime_checkable
class TextExtractorProtocol(Protocol):
    """Protocol for turning a source locator (path or URL) into raw text."""

    def supports(self, locator: str) -> bool:
        """Check whether this extractor handles the locator."""
        ...

    def load(self, locator: str) -> ExtractedText:
        """Extract raw text. The text may be empty.

        Args:
            locator: File path or URL.

        Returns:
            Extracted text with an optional provenance title.
        """
        ...
