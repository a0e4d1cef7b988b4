"""Animation candidate scan — one subtree pass with an allow-list heuristic.

False positives are fine: candidates whose samples never vary are dropped
later by the sampler.
"""

from __future__ import annotations

from motionsight.trigger.element import Element, class_string, has_attribute, iter_subtree
from motionsight.trigger.infer import has_transition

ANIMATION_CLASS_PATTERNS: tuple[str, ...] = (
    "animate",
    "motion",
    "fade",
    "slide",
    "zoom",
    "bounce",
    "pulse",
    "spin",
    "aos",
    "wow",
    "gsap",
    "tween",
    "framer",
)

MARKER_ATTRIBUTES: tuple[str, ...] = ("data-aos", "data-animate", "data-motion", "data-scroll")


def is_likely_animated(element: Element) -> bool:
    if element.style("animation-name").strip().lower() not in ("", "none"):
        return True
    if has_transition(element):
        return True
    if element.style("transform").strip().lower() not in ("", "none"):
        return True
    if element.style("will-change").strip().lower() not in ("", "auto"):
        return True
    classes = class_string(element)
    if any(pattern in classes for pattern in ANIMATION_CLASS_PATTERNS):
        return True
    return any(has_attribute(element, attr) for attr in MARKER_ATTRIBUTES)


def collect_animation_candidates(root: Element) -> list[Element]:
    return [node for node in iter_subtree(root) if is_likely_animated(node)]
