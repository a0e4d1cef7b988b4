"""Transition synthesis — spring when a fit exists, tween otherwise."""

from __future__ import annotations

from motionsight.engine.config import EngineConfig
from motionsight.models.analysis import EasingFamily, SpringParameters
from motionsight.models.descriptor import SpringTransition, Transition, TweenTransition
from motionsight.utils.math_helpers import clamp, round_to

# Authoring-engine curve token per family; anything else falls back to easeOut.
CURVE_TOKENS: dict[EasingFamily, str] = {
    EasingFamily.LINEAR: "linear",
    EasingFamily.EASE_IN: "easeIn",
    EasingFamily.EASE_OUT: "easeOut",
    EasingFamily.EASE_IN_OUT: "easeInOut",
}
FALLBACK_CURVE = "easeOut"


def build_transition(
    family: EasingFamily | None,
    spring: SpringParameters | None,
    duration_ms: float,
    config: EngineConfig | None = None,
) -> Transition:
    config = config or EngineConfig()
    if family == EasingFamily.SPRING and spring is not None:
        return SpringTransition(
            stiffness=spring.stiffness,
            damping=spring.damping,
            mass=spring.mass,
            bounce=spring.bounce,
        )

    duration = clamp(duration_ms / 1000, config.min_duration_s, config.max_duration_s)
    return TweenTransition(
        duration=round_to(duration, 2),
        curve=CURVE_TOKENS.get(family, FALLBACK_CURVE) if family is not None else FALLBACK_CURVE,
    )


def transition_props(transition: Transition) -> dict[str, object]:
    """Authoring-engine prop dict (``ease`` rather than ``curve``)."""
    if isinstance(transition, SpringTransition):
        return {
            "type": "spring",
            "stiffness": transition.stiffness,
            "damping": transition.damping,
            "mass": transition.mass,
            "bounce": transition.bounce,
        }
    return {"type": "tween", "duration": transition.duration, "ease": transition.curve}
