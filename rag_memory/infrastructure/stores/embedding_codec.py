import json
import math
from typing import Sequence

from ...core.exceptions import CorruptRowError


def encode_embedding(embedding: Sequence[float]) -> str:
    """Serialize a vector as a JSON array.

    Python floats are binary64 and json writes their shortest round-trip
    repr, so decode_embedding(encode_embedding(v)) == v bit for bit.
    """
    return json.dumps([float(x) for x in embedding], allow_nan=False)


def decode_embedding(raw: str | bytes | None, row_id: int | None = None) -> list[float]:
    """Parse and validate a stored vector.

    Raises:
        CorruptRowError: If the value is not a JSON array of finite numbers.
    """
    if raw is None:
        raise CorruptRowError(row_id, "embedding is NULL")

    try:
        value = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise CorruptRowError(row_id, f"invalid JSON ({e})") from e

    if not isinstance(value, list):
        raise CorruptRowError(row_id, f"expected array, got {type(value).__name__}")

    vector: list[float] = []
    for item in value:
        if isinstance(item, bool) or not isinstance(item, (int, float)):
            raise CorruptRowError(row_id, f"non-numeric element {item!r}")
        number = float(item)
        if not math.isfinite(number):
            raise CorruptRowError(row_id, "non-finite element")
        vector.append(number)

    return vector
