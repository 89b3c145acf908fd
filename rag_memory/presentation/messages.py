"""User-facing fallback messages."""

FALLBACK_MESSAGES = (
    "I couldn't reach my memory right now. Please try again in a moment.",
    "Something went wrong while thinking about that. Try asking again.",
    "My notes are out of reach at the moment. Give it another go shortly.",
    "I lost my train of thought. Could you ask that once more?",
)


def pick_fallback(seed: int) -> str:
    """Pick a fallback message deterministically from seed."""
    return FALLBACK_MESSAGES[seed % len(FALLBACK_MESSAGES)]
