"""Easing classification — sampled curve → easing family + confidence.

Decision table, first match wins:

1. overshoot or ≥ 1 oscillation  → spring        min(0.95, 0.6 + 0.1·n)
2. velocity CV < 0.2             → linear        clamp(1 − CV, 0.5, 0.95)
3. slow start and slow end       → ease-in-out   0.75
4. slow start                    → ease-in       0.7
5. slow end                      → ease-out      0.7
6. otherwise                     → custom        0.5

Fewer than 3 samples short-circuits to ease-out @ 0.3. Nothing here raises.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from motionsight.engine.config import EngineConfig
from motionsight.models.analysis import (
    AnalysisMetadata,
    EasingFamily,
    MotionAnalysis,
)
from motionsight.models.samples import Sample, VelocityPoint
from motionsight.motion.kinematics import (
    compute_velocities,
    count_oscillations,
    decay_rate,
    detect_overshoot,
    project,
    slow_end,
    slow_start,
    times_of,
    velocity_array,
)
from motionsight.motion.spring import estimate_spring
from motionsight.utils.math_helpers import clamp, coefficient_of_variation

logger = logging.getLogger(__name__)

_MIN_SAMPLES = 3
_DEFAULT_CONFIDENCE = 0.3

# Equivalent CSS timing function per family.
CURVES: dict[EasingFamily, str] = {
    EasingFamily.LINEAR: "linear",
    EasingFamily.EASE_IN: "cubic-bezier(0.4, 0, 1, 1)",
    EasingFamily.EASE_OUT: "cubic-bezier(0, 0, 0.2, 1)",
    EasingFamily.EASE_IN_OUT: "cubic-bezier(0.4, 0, 0.2, 1)",
    EasingFamily.SPRING: "cubic-bezier(0.175, 0.885, 0.32, 1.275)",
    EasingFamily.CUSTOM: "ease",
}


def default_analysis() -> MotionAnalysis:
    """Result for insufficient data."""
    return MotionAnalysis(family=EasingFamily.EASE_OUT, confidence=_DEFAULT_CONFIDENCE)


def is_linear(points: Sequence[VelocityPoint], threshold: float = 0.2) -> bool:
    if len(points) < 3:
        return False
    velocities = velocity_array(points)
    if abs(float(velocities.mean())) < 0.001:
        return False
    return coefficient_of_variation(velocities) < threshold


def linear_confidence(points: Sequence[VelocityPoint]) -> float:
    if len(points) < 3:
        return 0.5
    cv = coefficient_of_variation(velocity_array(points), offset=0.001)
    return clamp(1 - cv, 0.5, 0.95)


def analyze(
    samples: Sequence[Sample],
    prop: str = "y",
    config: EngineConfig | None = None,
) -> MotionAnalysis:
    """Classify the motion of ``prop`` across ``samples``."""
    if len(samples) < _MIN_SAMPLES:
        return default_analysis()
    config = config or EngineConfig()

    positions = project(samples, prop)
    times = times_of(samples)
    points = compute_velocities(positions, times)
    velocities = velocity_array(points)

    has_overshoot = detect_overshoot(positions)
    oscillations = count_oscillations(positions)
    peak_velocity = float(abs(velocities).max()) if len(velocities) else 0.0

    spring = None
    decay = 0.0
    starts_slow = slow_start(velocities, config.slow_ratio)
    ends_slow = slow_end(velocities, config.slow_ratio)

    if has_overshoot or oscillations > 0:
        family = EasingFamily.SPRING
        spring = estimate_spring(positions, points, times)
        decay = decay_rate(positions)
        confidence = min(0.95, 0.6 + 0.1 * oscillations)
    elif is_linear(points, config.linear_cv_threshold):
        family = EasingFamily.LINEAR
        confidence = linear_confidence(points)
    elif starts_slow and ends_slow:
        family = EasingFamily.EASE_IN_OUT
        confidence = 0.75
    elif starts_slow:
        family = EasingFamily.EASE_IN
        confidence = 0.7
    elif ends_slow:
        family = EasingFamily.EASE_OUT
        confidence = 0.7
    else:
        family = EasingFamily.CUSTOM
        confidence = 0.5

    logger.debug(
        "analyze(%s): %d samples → %s (%.2f), overshoot=%s oscillations=%d",
        prop,
        len(samples),
        family.value,
        confidence,
        has_overshoot,
        oscillations,
    )

    return MotionAnalysis(
        family=family,
        spring=spring,
        curve=CURVES[family],
        confidence=confidence,
        metadata=AnalysisMetadata(
            has_overshoot=has_overshoot,
            oscillation_count=oscillations,
            peak_velocity=peak_velocity,
            decay_rate=decay,
        ),
    )


def estimate_duration(samples: Sequence[Sample]) -> float:
    """Seconds, clamped to [0.1, 2]. 0.3 when there is no span to measure."""
    if len(samples) < 2:
        return 0.3
    span_ms = samples[-1].time - samples[0].time
    return clamp(span_ms / 1000, 0.1, 2.0)
