"""Spring parameter estimation — damped harmonic oscillator fit.

Model::

    x(t) = A · e^(−ζ·ωₙ·t) · cos(ω_d·t + φ)
    ζ  = c / (2·√(k·m))
    ωₙ = √(k / m)

The fit is best-effort under a one-mass model: the period comes from the
spacing of zero crossings around the settled value, the damping ratio from
the decay of successive peak amplitudes. Mass is fixed at 1. Results are
clamped to ranges that replay plausibly.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np
from numpy.typing import NDArray

from motionsight.models.analysis import SpringParameters
from motionsight.models.samples import VelocityPoint
from motionsight.motion.kinematics import decay_rate, zero_crossing_times
from motionsight.utils.math_helpers import clamp, clamp_round, round_to

STIFFNESS_RANGE = (50.0, 500.0)
DAMPING_RANGE = (5.0, 40.0)
MASS_RANGE = (0.5, 5.0)

_MIN_POSITIONS = 10
_MIN_VELOCITIES = 5
# ωₙ used when no period could be measured.
_FALLBACK_FREQUENCY = 10.0
# ζ used when the decay rate is outside (0, 1).
_FALLBACK_DAMPING_RATIO = 0.3
_MASS = 1.0

DEFAULT_SPRING = SpringParameters(
    stiffness=100.0,
    damping=10.0,
    mass=1.0,
    initial_velocity=0.0,
    bounce=0.25,
)


def estimate_period(positions: NDArray[np.float64], times: NDArray[np.float64]) -> float:
    """Full oscillation period in ms: 2 × mean half-period. 0 if < 2 crossings."""
    if len(positions) < _MIN_POSITIONS:
        return 0.0
    crossings = zero_crossing_times(positions, times)
    if len(crossings) < 2:
        return 0.0
    return float(np.mean(np.diff(crossings))) * 2


def damping_ratio_from_decay(decay: float) -> float:
    if 0 < decay < 1:
        return -math.log(decay) / (2 * math.pi)
    return _FALLBACK_DAMPING_RATIO


def estimate_spring(
    positions: NDArray[np.float64],
    velocities: Sequence[VelocityPoint],
    times: NDArray[np.float64],
) -> SpringParameters:
    if len(positions) < _MIN_POSITIONS or len(velocities) < _MIN_VELOCITIES:
        return DEFAULT_SPRING

    period = estimate_period(positions, times)
    decay = decay_rate(positions)

    natural_frequency = (2 * math.pi) / period if period > 0 else _FALLBACK_FREQUENCY
    zeta = damping_ratio_from_decay(decay)

    stiffness = natural_frequency**2 * _MASS
    damping = 2 * zeta * math.sqrt(stiffness * _MASS)
    # per-ms → per-second
    initial_velocity = velocities[0].velocity * 1000 if velocities else 0.0
    bounce = clamp(1 - zeta, 0.0, 1.0)

    return SpringParameters(
        stiffness=clamp_round(stiffness, *STIFFNESS_RANGE),
        damping=clamp_round(damping, *DAMPING_RANGE),
        mass=clamp_round(_MASS, *MASS_RANGE),
        initial_velocity=initial_velocity if math.isfinite(initial_velocity) else 0.0,
        bounce=round_to(bounce, 2),
    )
