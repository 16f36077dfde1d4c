from __future__ import annotations
import math


def q(x: float | None, step: float) -> float | None:
    """Quantize a finite float to the nearest step; non-finite becomes None.

    JSON has no encoding for -inf, so silent levels serialize as null.
    """
    if x is None or math.isnan(x) or math.isinf(x):
        return None
    inv = 1.0 / step
    y = x * inv
    if y >= 0:
        yq = math.floor(y + 0.5)
    else:
        yq = -math.floor(-y + 0.5)
    return yq / inv


def q_list(xs, step: float) -> list[float | None]:
    """Quantize a sequence of floats."""
    return [q(float(v), step) for v in xs]
