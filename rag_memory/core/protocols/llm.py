"""LLM protocol for dependency injection."""
from typing import Protocol, runtime_checkable


@runtime_checkable
class LLMProtocol(Protocol):
    """Protocol for the answering model."""

    async def complete(self, question: str, context: str) -> str:
        """Answer a question grounded on a context block.

        Args:
            question: User's question.
            context: Citation-annotated context block.

        Returns:
            Answer text.

        Raises:
            AnsweringModelError: If the model call fails.
        """
        ...
