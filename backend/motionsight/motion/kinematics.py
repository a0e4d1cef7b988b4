"""Discrete-signal helpers over one projected property. No engine imports.

Positions are the projected property values, times are sample timestamps in
ms. Everything here is total: short or degenerate inputs return the
documented neutral value instead of raising.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
from numpy.typing import NDArray

from motionsight.models.samples import Sample, VelocityPoint

# |end − start| below this is "no net movement" for overshoot purposes.
_MIN_TRAVEL = 0.01
# Peak amplitudes at or below this cannot anchor a decay ratio.
_MIN_PEAK_AMPLITUDE = 0.001


def project(samples: Sequence[Sample], prop: str) -> NDArray[np.float64]:
    return np.array([s.value(prop) for s in samples], dtype=np.float64)


def times_of(samples: Sequence[Sample]) -> NDArray[np.float64]:
    return np.array([s.time for s in samples], dtype=np.float64)


def compute_velocities(positions: NDArray[np.float64], times: NDArray[np.float64]) -> list[VelocityPoint]:
    """Per-pair velocity (units/ms) and acceleration. Pairs with Δt = 0 are skipped."""
    points: list[VelocityPoint] = []
    for i in range(1, len(positions)):
        dt = float(times[i] - times[i - 1])
        if dt == 0:
            continue
        velocity = float(positions[i] - positions[i - 1]) / dt
        prev_velocity = points[-1].velocity if points else velocity
        points.append(
            VelocityPoint(
                time=float(times[i]),
                velocity=velocity,
                acceleration=(velocity - prev_velocity) / dt,
                position=float(positions[i]),
            )
        )
    return points


def velocity_array(points: Sequence[VelocityPoint]) -> NDArray[np.float64]:
    return np.array([p.velocity for p in points], dtype=np.float64)


def detect_overshoot(positions: NDArray[np.float64]) -> bool:
    """True if any interior position passes the final value, away from the start."""
    if len(positions) < 3:
        return False
    start, end = float(positions[0]), float(positions[-1])
    direction = end - start
    if abs(direction) < _MIN_TRAVEL:
        return False
    interior = positions[1:-1]
    if direction > 0:
        return bool(np.any(interior > end))
    return bool(np.any(interior < end))


def _sides(positions: NDArray[np.float64]) -> NDArray[np.int8]:
    """+1 strictly above the final value, −1 otherwise."""
    end = positions[-1]
    return np.where(positions > end, 1, -1).astype(np.int8)


def count_oscillations(positions: NDArray[np.float64]) -> int:
    """Sign changes of (position − final), halved and floored."""
    if len(positions) < 4:
        return 0
    sides = _sides(positions)
    crossings = int(np.count_nonzero(sides[1:] != sides[:-1]))
    return crossings // 2


def zero_crossing_times(positions: NDArray[np.float64], times: NDArray[np.float64]) -> list[float]:
    """Timestamps where (position − final) crosses or lands on zero."""
    if len(positions) < 2:
        return []
    offsets = positions - positions[-1]
    crossings: list[float] = []
    for i in range(1, len(offsets)):
        prev, curr = offsets[i - 1], offsets[i]
        if (prev > 0 and curr <= 0) or (prev < 0 and curr >= 0):
            crossings.append(float(times[i]))
    return crossings


def peak_amplitudes(positions: NDArray[np.float64]) -> list[float]:
    """|peak − final| for each strict local maximum/minimum, in order."""
    if len(positions) < 3:
        return []
    end = positions[-1]
    prev, curr, nxt = positions[:-2], positions[1:-1], positions[2:]
    is_peak = ((curr > prev) & (curr > nxt)) | ((curr < prev) & (curr < nxt))
    return [float(abs(v - end)) for v in curr[is_peak]]


def decay_rate(positions: NDArray[np.float64], min_samples: int = 10) -> float:
    """Mean ratio of successive peak amplitudes. 0 when undeterminable."""
    if len(positions) < min_samples:
        return 0.0
    peaks = peak_amplitudes(positions)
    if len(peaks) < 2:
        return 0.0
    total = 0.0
    for prev, curr in zip(peaks, peaks[1:]):
        if prev > _MIN_PEAK_AMPLITUDE:
            total += curr / prev
    return total / (len(peaks) - 1)


def slow_start(velocities: NDArray[np.float64], ratio: float = 0.5) -> bool:
    first, last = _quarter_means(velocities)
    if first is None or last is None:
        return False
    return first < last * ratio


def slow_end(velocities: NDArray[np.float64], ratio: float = 0.5) -> bool:
    first, last = _quarter_means(velocities)
    if first is None or last is None:
        return False
    return last < first * ratio


def _quarter_means(velocities: NDArray[np.float64]) -> tuple[float | None, float | None]:
    if len(velocities) < 4:
        return None, None
    quarter = len(velocities) // 4
    speeds = np.abs(velocities)
    return float(np.mean(speeds[:quarter])), float(np.mean(speeds[-quarter:]))


# Unit weights making px, degrees and unit-interval properties comparable.
_PROPERTY_WEIGHTS: dict[str, float] = {
    "x": 1.0,
    "y": 1.0,
    "rotation": 1.0,
    "scale": 100.0,
    "opacity": 100.0,
}


def dominant_property(samples: Sequence[Sample], default: str = "y") -> str:
    """Property with the widest weighted range across the samples."""
    if len(samples) < 2:
        return default
    best, best_span = default, 0.0
    for prop, weight in _PROPERTY_WEIGHTS.items():
        values = project(samples, prop)
        span = float(values.max() - values.min()) * weight
        if span > best_span:
            best, best_span = prop, span
    return best
