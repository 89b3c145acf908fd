import math
from typing import Any

from ...core.exceptions import EmbeddingGatewayError


def as_vector(raw: Any) -> list[float]:
    """Convert a model response into a list of finite floats.

    Raises:
        EmbeddingGatewayError: If the response is empty or not numeric.
    """
    if hasattr(raw, "tolist"):
        raw = raw.tolist()

    if not isinstance(raw, (list, tuple)) or not raw:
        raise EmbeddingGatewayError("Embedding model returned an empty vector")

    vector = []
    for value in raw:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise EmbeddingGatewayError(f"Embedding contains non-numeric value {value!r}")
        number = float(value)
        if not math.isfinite(number):
            raise EmbeddingGatewayError("Embedding contains non-finite values")
        vector.append(number)
    return vector
