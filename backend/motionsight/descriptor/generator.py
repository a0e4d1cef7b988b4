"""Descriptor generation — Recording → phase-keyed descriptor + two serializations.

Phase placement is fixed per trigger; exactly one phase is populated:

    load                  → animate
    hover                 → while-hovering   (rest state = initial)
    scroll / intersection → while-in-view    + viewport {once, -100px, 0.3}
    click                 → while-pressed
    focus                 → while-focused

Both serializations derive from the same AnimationDescriptor:
``compact`` (short keys, single-line JSON for a data attribute) and
``code`` (an authoring-syntax motion component).
"""

from __future__ import annotations

import json
import logging
import re

from motionsight.descriptor.states import build_state
from motionsight.descriptor.transition import build_transition, transition_props
from motionsight.engine.config import EngineConfig
from motionsight.models.analysis import MotionAnalysis
from motionsight.models.descriptor import (
    AnimationDescriptor,
    DescriptorOutput,
    Phase,
    StateBag,
    VisibilityPolicy,
)
from motionsight.models.samples import Recording
from motionsight.models.trigger import TriggerKind
from motionsight.motion.easing import analyze
from motionsight.motion.kinematics import dominant_property

logger = logging.getLogger(__name__)

PHASE_FOR_TRIGGER: dict[TriggerKind, Phase] = {
    TriggerKind.LOAD: Phase.ANIMATE,
    TriggerKind.HOVER: Phase.WHILE_HOVERING,
    TriggerKind.SCROLL: Phase.WHILE_IN_VIEW,
    TriggerKind.INTERSECTION: Phase.WHILE_IN_VIEW,
    TriggerKind.CLICK: Phase.WHILE_PRESSED,
    TriggerKind.FOCUS: Phase.WHILE_FOCUSED,
}

# Compact-form keys.
COMPACT_KEYS: dict[Phase, str] = {
    Phase.ANIMATE: "a",
    Phase.WHILE_HOVERING: "h",
    Phase.WHILE_IN_VIEW: "v",
    Phase.WHILE_PRESSED: "t",
    Phase.WHILE_FOCUSED: "f",
}

# Authoring-syntax prop names.
PROP_NAMES: dict[Phase, str] = {
    Phase.ANIMATE: "animate",
    Phase.WHILE_HOVERING: "whileHover",
    Phase.WHILE_IN_VIEW: "whileInView",
    Phase.WHILE_PRESSED: "whileTap",
    Phase.WHILE_FOCUSED: "whileFocus",
}

NO_ANIMATION_CODE = "// No animation detected"
COMPONENT_MARKER = "Animated"
_MAX_COMPONENT_NAME = 30
_NAME_SPLIT_RE = re.compile(r"[^A-Za-z0-9]+")


def empty_output() -> DescriptorOutput:
    return DescriptorOutput(descriptor=AnimationDescriptor(), compact="{}", code=NO_ANIMATION_CODE)


def place_phases(
    initial: StateBag,
    target: StateBag,
    trigger: TriggerKind,
) -> tuple[dict[Phase, StateBag], VisibilityPolicy | None]:
    phases: dict[Phase, StateBag] = {p: {} for p in Phase}
    phase = PHASE_FOR_TRIGGER.get(trigger, Phase.ANIMATE)
    phases[phase] = target
    viewport = VisibilityPolicy() if phase == Phase.WHILE_IN_VIEW else None
    return phases, viewport


def build_descriptor(
    recording: Recording,
    analysis: MotionAnalysis | None = None,
    config: EngineConfig | None = None,
) -> AnimationDescriptor:
    config = config or EngineConfig()
    first, last = recording.first, recording.last
    if first is None or last is None:
        return AnimationDescriptor()
    initial = build_state(first, config)
    target = build_state(last, config, include=initial)

    if analysis is None:
        analysis = analyze(recording.samples, dominant_property(recording.samples), config)

    transition = build_transition(recording.easing, analysis.spring, recording.total_duration_ms, config)
    phases, viewport = place_phases(initial, target, recording.trigger)
    return AnimationDescriptor(initial=initial, phases=phases, transition=transition, viewport=viewport)


def generate(
    recording: Recording,
    analysis: MotionAnalysis | None = None,
    config: EngineConfig | None = None,
) -> DescriptorOutput:
    """Build the descriptor for one recording and serialize it both ways."""
    if len(recording.samples) < 2:
        logger.debug("generate(%s): < 2 samples, empty descriptor", recording.element_key)
        return empty_output()

    descriptor = build_descriptor(recording, analysis, config)
    return DescriptorOutput(
        descriptor=descriptor,
        compact=to_compact(descriptor),
        code=to_code(descriptor, recording),
    )


# ── serializations ──


def _tidy(value: object) -> object:
    """Integral floats → int, recursively, so 100.0 prints as 100."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, dict):
        return {k: _tidy(v) for k, v in value.items()}
    return value


def to_compact(descriptor: AnimationDescriptor) -> str:
    compact: dict[str, object] = {}
    if descriptor.initial:
        compact["i"] = descriptor.initial
    for phase, key in COMPACT_KEYS.items():
        bag = descriptor.phase(phase)
        if bag:
            compact[key] = bag
    if descriptor.viewport is not None:
        compact["vp"] = descriptor.viewport.model_dump()
    compact["tr"] = transition_props(descriptor.transition)
    return json.dumps(_tidy(compact), separators=(",", ":"))


def _format_value(value: object) -> str:
    value = _tidy(value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return f'"{value}"'
    if isinstance(value, dict):
        return _format_object(value)
    return str(value)


def _format_object(obj: dict) -> str:
    entries = [f"{k}: {_format_value(v)}" for k, v in obj.items() if v is not None]
    return "{ " + ", ".join(entries) + " }"


def component_name(element_key: str) -> str:
    parts = [p for p in _NAME_SPLIT_RE.split(element_key) if p]
    name = "".join(p[0].upper() + p[1:] for p in parts)
    if not name:
        return f"{COMPONENT_MARKER}Component"
    if not name[0].isalpha():
        name = COMPONENT_MARKER + name
    if COMPONENT_MARKER not in name:
        name = COMPONENT_MARKER + name
    return name[:_MAX_COMPONENT_NAME]


def prop_lines(descriptor: AnimationDescriptor, indent: str = "      ") -> list[str]:
    lines: list[str] = []
    if descriptor.initial:
        lines.append(f"{indent}initial={{{_format_object(descriptor.initial)}}}")
    for phase, prop in PROP_NAMES.items():
        bag = descriptor.phase(phase)
        if bag:
            lines.append(f"{indent}{prop}={{{_format_object(bag)}}}")
    if descriptor.viewport is not None:
        lines.append(f"{indent}viewport={{{_format_object(descriptor.viewport.model_dump())}}}")
    lines.append(f"{indent}transition={{{_format_object(transition_props(descriptor.transition))}}}")
    return lines


def to_code(descriptor: AnimationDescriptor, recording: Recording) -> str:
    name = component_name(recording.element_key)
    props = "\n".join(prop_lines(descriptor))
    duration = _format_value(round(recording.total_duration_ms))
    return (
        "import { motion } from 'framer-motion';\n"
        "\n"
        "/**\n"
        " * Generated animation component\n"
        f" * Trigger: {recording.trigger.value}\n"
        f" * Easing: {recording.easing.value}\n"
        f" * Duration: {duration}ms\n"
        " */\n"
        f"export function {name}({{ children, className }}: "
        "{ children?: React.ReactNode; className?: string }) {\n"
        "  return (\n"
        "    <motion.div\n"
        "      className={className}\n"
        f"{props}\n"
        "    >\n"
        "      {children}\n"
        "    </motion.div>\n"
        "  );\n"
        "}"
    )
