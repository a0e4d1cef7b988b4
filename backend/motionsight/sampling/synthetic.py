"""Synthetic frame source — drives a virtual element along a known curve.

Used for offline replays and tests: progress p(t) ∈ [0, 1] (overshooting
for springs) blends each property from ``start`` to ``end``, and the
snapshot renders the blend the way a browser reports resolved style
(``matrix(...)`` transform, numeric opacity).

Curves:
 - ``linear``
 - CSS cubic-bezier families (``ease-in``, ``ease-out``, ``ease-in-out``)
 - ``spring``: m·x'' + c·x' + k·x = 0 from x(0) = 1, v(0) = 0, integrated
   with explicit Euler at the source frame rate; progress = 1 − x.
"""

from __future__ import annotations

import math
from collections.abc import Mapping

from motionsight.models.analysis import EasingFamily, SpringParameters
from motionsight.sampling.frame_source import StyleBag

# Control points (x1, y1, x2, y2) of the CSS keyword curves.
BEZIER_CURVES: dict[EasingFamily, tuple[float, float, float, float]] = {
    EasingFamily.EASE_IN: (0.42, 0.0, 1.0, 1.0),
    EasingFamily.EASE_OUT: (0.0, 0.0, 0.58, 1.0),
    EasingFamily.EASE_IN_OUT: (0.42, 0.0, 0.58, 1.0),
}

NEUTRAL: dict[str, float] = {"x": 0.0, "y": 0.0, "scale": 1.0, "rotation": 0.0, "opacity": 1.0}

_BEZIER_ITERATIONS = 30


def cubic_bezier(x1: float, y1: float, x2: float, y2: float, t: float) -> float:
    """y for a given x = ``t`` on the unit cubic bezier (bisection on x)."""
    if t <= 0.0:
        return 0.0
    if t >= 1.0:
        return 1.0

    def coord(a: float, b: float, s: float) -> float:
        return 3 * a * s * (1 - s) ** 2 + 3 * b * s * s * (1 - s) + s**3

    lo, hi = 0.0, 1.0
    s = t
    for _ in range(_BEZIER_ITERATIONS):
        s = (lo + hi) / 2
        if coord(x1, x2, s) < t:
            lo = s
        else:
            hi = s
    return coord(y1, y2, s)


def spring_progress(
    spring: SpringParameters,
    fps: int = 60,
    max_ms: float = 2000,
    settle_epsilon: float = 0.001,
) -> list[float]:
    """Progress per frame for a damped spring released from full displacement."""
    if fps <= 0:
        raise ValueError("fps must be > 0")

    k, c, m = spring.stiffness, spring.damping, spring.mass
    x, v = 1.0, spring.initial_velocity
    dt = 1.0 / fps
    t = 0.0
    progress = [0.0]

    while t * 1000 < max_ms:
        a = -(c / m) * v - (k / m) * x
        v += a * dt
        x += v * dt
        t += dt
        progress.append(1.0 - x)
        if abs(x) < settle_epsilon and abs(v) < settle_epsilon:
            break

    progress[-1] = 1.0
    return progress


class SyntheticFrameSource:
    """Frames at a fixed rate; holds ``end`` once the curve completes."""

    def __init__(
        self,
        start: Mapping[str, float],
        end: Mapping[str, float],
        curve: EasingFamily = EasingFamily.LINEAR,
        duration_ms: float = 300,
        fps: int = 60,
        spring: SpringParameters | None = None,
        colors: Mapping[str, str] | None = None,
    ) -> None:
        if fps <= 0:
            raise ValueError("fps must be > 0")
        self.start = {**NEUTRAL, **start}
        self.end = {**NEUTRAL, **end}
        self.curve = curve
        self.duration_ms = duration_ms
        self.interval_ms = 1000 / fps
        self.colors = dict(colors or {})
        self._frame = 0

        self._spring_track: list[float] | None = None
        if curve == EasingFamily.SPRING:
            self._spring_track = spring_progress(spring or SpringParameters(), fps)

    def progress(self, frame: int) -> float:
        if self._spring_track is not None:
            return self._spring_track[min(frame, len(self._spring_track) - 1)]
        if self.duration_ms <= 0:
            return 1.0
        t = min(1.0, frame * self.interval_ms / self.duration_ms)
        control = BEZIER_CURVES.get(self.curve)
        if control is None:
            return t
        return cubic_bezier(*control, t)

    def values(self, frame: int) -> dict[str, float]:
        p = self.progress(frame)
        blended = {k: self.start[k] + (self.end[k] - self.start[k]) * p for k in NEUTRAL}
        blended["opacity"] = min(1.0, max(0.0, blended["opacity"]))
        return blended

    def now(self) -> float:
        return self._frame * self.interval_ms

    def snapshot(self) -> StyleBag:
        values = self.values(self._frame)
        bag: StyleBag = {"transform": render_matrix(values), "opacity": values["opacity"]}
        bag.update(self.colors)
        return bag

    def advance(self) -> None:
        self._frame += 1


def render_matrix(values: Mapping[str, float]) -> str:
    """Resolved-style ``transform`` for translate + uniform scale + z rotation."""
    s, angle = values["scale"], math.radians(values["rotation"])
    x, y = values["x"], values["y"]
    if s == 1.0 and angle == 0.0 and x == 0.0 and y == 0.0:
        return "none"
    a, b = s * math.cos(angle), s * math.sin(angle)
    return f"matrix({a:.6f}, {b:.6f}, {-b:.6f}, {a:.6f}, {x:.6f}, {y:.6f})"
