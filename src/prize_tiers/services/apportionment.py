import math
from collections.abc import Sequence
from fractions import Fraction

type Weight = int | float | Fraction


def largest_remainder(total: int, weights: Sequence[Weight]) -> list[int]:
    """Apportion ``total`` units across ``weights`` (Hamilton method).

    Each entry first receives the floor of its ideal share
    ``total * w / sum(weights)``. The units still missing are handed out one
    at a time to the entries with the largest fractional remainder.

    Ties between equal remainders go to the lower index: the remainder sort
    is stable over the original weight order, so the result is deterministic.

    Shares are computed with exact rational arithmetic, which guarantees the
    floors never overshoot ``total``.

    Args:
        total: Non-negative number of units to distribute.
        weights: Non-negative weight per entry.

    Returns:
        One integer per weight, summing exactly to ``total``.
    """
    if total < 0:
        msg = f"Cannot apportion a negative total: {total}"
        raise ValueError(msg)
    exact = [_as_fraction(w) for w in weights]
    if any(w < 0 for w in exact):
        msg = f"Weights must be non-negative, got {list(weights)!r}"
        raise ValueError(msg)
    if total == 0 or not exact:
        return [0] * len(exact)

    weight_sum = sum(exact, Fraction(0))
    if weight_sum == 0:
        msg = f"Cannot apportion {total} units across zero total weight"
        raise ValueError(msg)

    ideals = [total * w / weight_sum for w in exact]
    allocations = [math.floor(ideal) for ideal in ideals]
    remainders = [ideal - floor for ideal, floor in zip(ideals, allocations, strict=True)]

    short = total - sum(allocations)
    by_remainder = sorted(range(len(exact)), key=lambda i: remainders[i], reverse=True)
    for idx in by_remainder[:short]:
        allocations[idx] += 1
    return allocations


def _as_fraction(weight: Weight) -> Fraction:
    if isinstance(weight, float) and not math.isfinite(weight):
        msg = f"Weights must be finite, got {weight!r}"
        raise ValueError(msg)
    return Fraction(weight)
