"""Math helpers — clamping, rounding, CV. No engine imports."""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def round_to(value: float, decimals: int = 1) -> float:
    """Half-up rounding to a fixed number of decimals.

    Python's round() is banker's rounding; descriptor values must round
    0.25 → 0.3 the way authoring tools expect.
    """
    factor = 10**decimals
    return math.floor(value * factor + 0.5) / factor


def clamp_round(value: float, lo: float, hi: float, decimals: int = 1) -> float:
    return round_to(clamp(value, lo, hi), decimals)


def coefficient_of_variation(values: NDArray[np.float64], offset: float = 0.0) -> float:
    """CV = std / (|mean| + offset). Population std, as the classifier expects."""
    if len(values) == 0:
        return float("inf")
    mean = abs(float(np.mean(values))) + offset
    if mean < 1e-12:
        return float("inf")
    return float(np.std(values) / mean)


def is_finite(*values: float) -> bool:
    return all(math.isfinite(v) for v in values)
