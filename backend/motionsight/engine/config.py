"""Engine configuration — analysis thresholds."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class EngineConfig:
    """Thresholds shared by the classifier, frame thinning and state bags."""

    # Easing classification
    linear_cv_threshold: float = 0.2  # velocity CV below this = constant speed
    slow_ratio: float = 0.5  # quarter mean |v| below ratio × other quarter = "slow"

    # Frame thinning (keypoint selection)
    keypoint_velocity_jump: float = 0.5  # units/ms between adjacent pairs
    keypoint_stride: int = 5  # keep every Nth frame for context

    # State bag epsilons: property included only if it differs from neutral by more
    position_epsilon: float = 0.1
    scale_epsilon: float = 0.01
    rotation_epsilon: float = 0.1  # degrees
    opacity_epsilon: float = 0.01

    # Descriptor duration bounds (seconds)
    min_duration_s: float = 0.1
    max_duration_s: float = 2.0
