"""Context assembler - formats ranked hits into a citation-annotated block."""

from typing import Sequence

from ..models.document import SearchHit

NO_MEMORIES_MESSAGE = "No relevant memories were found for this question."


def format_hit(hit: SearchHit) -> str:
    """Header, text and a blank separator line for one hit."""
    return f"[{hit.source_id}#{hit.chunk_index} score={hit.score:.3f}]\n{hit.text}\n\n"


def build_context(hits: Sequence[SearchHit] | None, max_chars: int = 12_000) -> str:
    """Build the context block passed to the answering model.

    Hits are re-sorted by descending score. Blocks are appended until the
    running length reaches max_chars, so the last included hit may overshoot
    by its own length. Never returns an empty string.

    Args:
        hits: Search hits in any order.
        max_chars: Soft cap on the block length.

    Returns:
        Trimmed context block, or NO_MEMORIES_MESSAGE.
    """
    if not hits:
        return NO_MEMORIES_MESSAGE

    parts: list[str] = []
    length = 0
    for hit in sorted(hits, key=lambda h: h.score, reverse=True):
        block = format_hit(hit)
        parts.append(block)
        length += len(block)
        if length >= max_chars:
            break

    context = "".join(parts).strip()
    return context or NO_MEMORIES_MESSAGE
