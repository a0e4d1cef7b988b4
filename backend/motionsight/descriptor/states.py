"""State bags — minimal diffs of a sample against neutral defaults."""

from __future__ import annotations

from collections.abc import Iterable

from motionsight.engine.config import EngineConfig
from motionsight.models.descriptor import StateBag, StateValue
from motionsight.models.samples import Sample
from motionsight.utils.colors import canonical_color
from motionsight.utils.math_helpers import round_to

# State key → (sample attribute, decimals)
NUMERIC_KEYS: dict[str, tuple[str, int]] = {
    "x": ("x", 1),
    "y": ("y", 1),
    "scale": ("scale", 3),
    "rotate": ("rotation", 1),
    "opacity": ("opacity", 2),
}


def tidy_number(value: float, decimals: int = 1) -> StateValue:
    """Round, and drop the fractional part when it is zero (100.0 → 100)."""
    rounded = round_to(value, decimals)
    if rounded == int(rounded):
        return int(rounded)
    return rounded


def build_state(
    sample: Sample,
    config: EngineConfig | None = None,
    include: Iterable[str] = (),
) -> StateBag:
    """Only properties that differ from their neutral value are included.

    Keys in ``include`` are emitted even at their neutral value, so a target
    bag can name every property its initial bag moved away from neutral.
    """
    config = config or EngineConfig()
    forced = set(include)
    state: StateBag = {}

    epsilons = {
        "x": abs(sample.x) > config.position_epsilon,
        "y": abs(sample.y) > config.position_epsilon,
        "scale": abs(sample.scale - 1) > config.scale_epsilon,
        "rotate": abs(sample.rotation) > config.rotation_epsilon,
        "opacity": abs(sample.opacity - 1) > config.opacity_epsilon,
    }
    for key, (attr, decimals) in NUMERIC_KEYS.items():
        if epsilons[key] or key in forced:
            state[key] = tidy_number(getattr(sample, attr), decimals)

    background = canonical_color(sample.background_color)
    if background is not None:
        state["backgroundColor"] = background
    color = canonical_color(sample.color)
    if color is not None:
        state["color"] = color

    return state
