
import logging

from openai import AsyncOpenAI, OpenAIError

from ...core.exceptions import AnsweringModelError

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You are a research assistant answering from a personal memory store.

Accuracy:
- Base the answer on the CONTEXT entries. Each entry starts with a header like [source#index score=0.812].
- Cite the headers of the entries you used, e.g. [pdf:handbook.pdf#3].
- If the context does not contain the answer, say so plainly. Do not invent facts.

Format:
- Fact -> 1-3 sentences.
- Instructions -> step by step."""

PROMPT_WITH_CONTEXT = """CONTEXT:
{context}

QUESTION:
{question}"""


class OllamaClient:
    """LLM client for Ollama (OpenAI-compatible API)."""

    def __init__(
        self,
        base_url: str = "http://localhost:11434/v1",
        model: str = "llama3.1:8b",
        max_tokens: int = 1024,
        temperature: float = 0.1,
    ):
        """Initialize Ollama client.

        Args:
            base_url: Ollama API URL.
            model: Model name.
            max_tokens: Max response tokens.
            temperature: Sampling temperature.
        """
        self._client = AsyncOpenAI(base_url=base_url, api_key="ollama", max_retries=0)
        self._model = model
        self._max_tokens = max_tokens
        self._temperature = temperature

    async def complete(self, question: str, context: str) -> str:
        """Answer question grounded on context.

        Args:
            question: User's question.
            context: Context block with citation headers.

        Returns:
            Answer text, stripped.
        """
        messages = [
            {"role": "system", "content": SYSTEM_PROMPT},
            {
                "role": "user",
                "content": PROMPT_WITH_CONTEXT.format(context=context, question=question),
            },
        ]

        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                messages=messages,
                max_tokens=self._max_tokens,
                temperature=self._temperature,
            )
        except OpenAIError as e:
            logger.error(f"[chat] {self._model} call failed: {e}")
            raise AnsweringModelError(f"Chat call to {self._model} failed: {e}") from e

        if not response.choices:
            raise AnsweringModelError(f"Chat model {self._model} returned no choices")

        return (response.choices[0].message.content or "").strip()
