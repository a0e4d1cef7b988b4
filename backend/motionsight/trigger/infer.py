"""Passive trigger inference — static inspection of one element.

Ordered guards, first match wins:

1. hover affordance (pointer cursor or a non-trivial transition) → hover
2. class tokens from the scroll-animation vocabulary              → scroll
3. click affordance (onclick / data-click / role=button)           → click
4. natively focusable or explicit tabindex                         → focus
5. declared or running keyframe animation                          → load
6. nothing matched                                                 → scroll

The scroll default is a deliberate bias: most captured content is
scroll-revealed marketing pages.
"""

from __future__ import annotations

import logging

from motionsight.models.trigger import TriggerContext, TriggerKind, TriggerMetadata
from motionsight.trigger.element import Element, class_string, has_attribute
from motionsight.trigger.selector import synthesize_key

logger = logging.getLogger(__name__)

SCROLL_PATTERNS: tuple[str, ...] = (
    "scroll",
    "reveal",
    "fade-in",
    "animate-on-scroll",
    "aos",
    "wow",
    "inview",
)

# Transition values that mean "no transition declared".
TRIVIAL_TRANSITIONS = frozenset({"", "none", "all 0s ease 0s", "all 0s", "0s"})

FOCUSABLE_TAGS = frozenset({"input", "textarea", "button", "select"})


def has_transition(element: Element) -> bool:
    return element.style("transition").strip().lower() not in TRIVIAL_TRANSITIONS


def has_hover_affordance(element: Element) -> bool:
    return element.style("cursor").strip().lower() == "pointer" or has_transition(element)


def has_scroll_class(element: Element) -> bool:
    classes = class_string(element)
    return any(pattern in classes for pattern in SCROLL_PATTERNS)


def has_click_affordance(element: Element) -> bool:
    return (
        has_attribute(element, "onclick")
        or has_attribute(element, "data-click")
        or (element.get_attribute("role") or "").lower() == "button"
    )


def is_focusable(element: Element) -> bool:
    return element.tag in FOCUSABLE_TAGS or bool(element.get_attribute("tabindex"))


def has_running_animation(element: Element) -> bool:
    name = element.style("animation-name").strip().lower()
    play_state = element.style("animation-play-state").strip().lower()
    return name not in ("", "none") or play_state == "running"


def infer(element: Element) -> TriggerKind:
    if has_hover_affordance(element):
        return TriggerKind.HOVER
    if has_scroll_class(element):
        return TriggerKind.SCROLL
    if has_click_affordance(element):
        return TriggerKind.CLICK
    if is_focusable(element):
        return TriggerKind.FOCUS
    if has_running_animation(element):
        return TriggerKind.LOAD
    return TriggerKind.SCROLL


def classify(element: Element) -> TriggerContext:
    """Passive inference wrapped in a TriggerContext for the element."""
    kind = infer(element)
    key = synthesize_key(element)
    logger.debug("Inferred %s trigger for %s", kind.value, key)
    return TriggerContext(
        kind=kind,
        target_key=key,
        metadata=TriggerMetadata(is_style_driven=has_hover_affordance(element)),
    )
