"""Motion sampler — per-frame capture from a Frame Source into a Recording.

Each ``capture()`` reads one snapshot, decomposes the transform and keeps
the frame only when something moved by more than the velocity threshold
(scale and opacity use threshold × 0.01). Unchanged frames count as
settled; once ``min_frames`` samples exist and ``settle_frames`` settled
frames have passed in a row, the sampler stops itself. Recording also ends
on ``max_duration_ms`` or when the source raises ``FrameSourceError``.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from motionsight.config import Settings, settings as default_settings
from motionsight.engine.config import EngineConfig
from motionsight.models.samples import Recording, RecordingMetadata, Sample
from motionsight.models.transform import MotionComponents
from motionsight.models.trigger import TriggerKind
from motionsight.motion.easing import analyze
from motionsight.motion.kinematics import dominant_property
from motionsight.sampling.frame_source import FrameSource, FrameSourceError, StyleBag
from motionsight.transform.decompose import decompose_string
from motionsight.utils.colors import is_transparent

logger = logging.getLogger(__name__)


@dataclass
class SamplerOptions:
    element_key: str = "element"
    trigger: TriggerKind = TriggerKind.LOAD
    max_duration_ms: float = 5000
    velocity_threshold: float = 0.1
    min_frames: int = 10
    settle_frames: int = 10
    include_colors: bool = True
    auto_stop: bool = True

    @classmethod
    def from_settings(cls, settings: Settings | None = None, **overrides) -> SamplerOptions:
        settings = settings or default_settings
        values = {
            "max_duration_ms": settings.max_duration_ms,
            "velocity_threshold": settings.velocity_threshold,
            "min_frames": settings.min_frames,
            "settle_frames": settings.settle_frames,
        }
        values.update(overrides)
        return cls(**values)


@dataclass(frozen=True)
class SamplerState:
    is_recording: bool
    frame_count: int
    duration_ms: float
    trigger: TriggerKind


def _parse_opacity(value: object) -> float:
    try:
        opacity = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 1.0
    return min(1.0, max(0.0, opacity))


class MotionSampler:
    """Records one element. Owns its sample buffer; not shared across threads."""

    def __init__(
        self,
        source: FrameSource,
        options: SamplerOptions | None = None,
        config: EngineConfig | None = None,
    ) -> None:
        self._source = source
        self.options = options or SamplerOptions.from_settings()
        self.config = config or EngineConfig()
        self._samples: list[Sample] = []
        self._recording = False
        self._start_time = 0.0
        self._last: tuple[MotionComponents, float] | None = None
        self._settled = 0

    @property
    def recording(self) -> bool:
        return self._recording

    @property
    def samples(self) -> tuple[Sample, ...]:
        return tuple(self._samples)

    @property
    def state(self) -> SamplerState:
        return SamplerState(
            is_recording=self._recording,
            frame_count=len(self._samples),
            duration_ms=self._samples[-1].time if self._samples else 0.0,
            trigger=self.options.trigger,
        )

    def start(self) -> None:
        if self._recording:
            logger.warning("Sampler for %s already recording", self.options.element_key)
            return
        self._samples = []
        self._last = None
        self._settled = 0
        self._recording = True
        try:
            self._start_time = self._source.now()
        except FrameSourceError as exc:
            self._abort(exc)
            return
        logger.info("Recording started: %s (%s)", self.options.element_key, self.options.trigger.value)
        self.capture()

    def capture(self) -> bool:
        """Take one frame. Returns whether the sampler is still recording."""
        if not self._recording:
            return False

        try:
            elapsed = self._source.now() - self._start_time
            if elapsed > self.options.max_duration_ms:
                logger.info("Max duration reached: %s", self.options.element_key)
                self._recording = False
                return False
            bag = self._source.snapshot()
        except FrameSourceError as exc:
            self._abort(exc)
            return False

        components = decompose_string(str(bag.get("transform", "none")))
        opacity = _parse_opacity(bag.get("opacity", 1.0))

        if not self._samples or self._is_significant(components, opacity):
            self._samples.append(self._to_sample(round(elapsed), components, opacity, bag))
            self._last = (components, opacity)
            self._settled = 0
        else:
            self._settled += 1

        if (
            self.options.auto_stop
            and self._settled >= self.options.settle_frames
            and len(self._samples) >= self.options.min_frames
        ):
            logger.info("Animation settled: %s after %d frames", self.options.element_key, len(self._samples))
            self._recording = False
            return False
        return True

    def run(self) -> Recording:
        """Capture until settled, out of time, or the source fails; then stop."""
        if not self._recording:
            self.start()
        while self._recording:
            try:
                self._source.advance()
            except FrameSourceError as exc:
                self._abort(exc)
                break
            self.capture()
        return self.stop()

    def stop(self) -> Recording:
        self._recording = False
        recording = build_recording(
            self._samples,
            self.options.element_key,
            self.options.trigger,
            self.config,
        )
        logger.info(
            "Recording stopped: %s, %d frames, %.0fms",
            self.options.element_key,
            len(recording.samples),
            recording.total_duration_ms,
        )
        return recording

    def _abort(self, exc: FrameSourceError) -> None:
        logger.warning(
            "Frame source failed for %s after %d frames: %s",
            self.options.element_key,
            len(self._samples),
            exc,
        )
        self._recording = False

    def _is_significant(self, components: MotionComponents, opacity: float) -> bool:
        if self._last is None:
            return True
        last, last_opacity = self._last
        threshold = self.options.velocity_threshold
        fine = threshold * 0.01
        return (
            abs(components.translate_x - last.translate_x) > threshold
            or abs(components.translate_y - last.translate_y) > threshold
            or abs(components.translate_z - last.translate_z) > threshold
            or abs(components.scale_x - last.scale_x) > fine
            or abs(components.scale_y - last.scale_y) > fine
            or abs(components.rotate_z - last.rotate_z) > threshold
            or abs(opacity - last_opacity) > fine
        )

    def _to_sample(self, time: float, components: MotionComponents, opacity: float, bag: StyleBag) -> Sample:
        background = color = None
        if self.options.include_colors:
            raw_background = bag.get("backgroundColor")
            if isinstance(raw_background, str) and raw_background and not is_transparent(raw_background):
                background = raw_background
            raw_color = bag.get("color")
            if isinstance(raw_color, str) and raw_color:
                color = raw_color
        return Sample(
            time=time,
            x=components.translate_x,
            y=components.translate_y,
            scale=components.average_scale,
            rotation=components.rotate_z,
            opacity=opacity,
            background_color=background,
            color=color,
        )


def average_fps(samples: Sequence[Sample]) -> int:
    if len(samples) < 2:
        return 0
    span = samples[-1].time - samples[0].time
    if span == 0:
        return 0
    return round(len(samples) / span * 1000)


def build_recording(
    samples: Sequence[Sample],
    element_key: str,
    trigger: TriggerKind = TriggerKind.LOAD,
    config: EngineConfig | None = None,
) -> Recording:
    """Thin raw frames into keypoints, classify them and freeze the result."""
    config = config or EngineConfig()
    kept = optimize_frames(samples, config)
    analysis = analyze(kept, dominant_property(kept), config)

    deltas: dict[str, tuple[float, float]] = {}
    total = 0.0
    if kept:
        first, last = kept[0], kept[-1]
        deltas = {p: (first.value(p), last.value(p)) for p in ("x", "y", "scale", "opacity", "rotation")}
        total = last.time - first.time

    return Recording(
        element_key=element_key,
        trigger=trigger,
        easing=analysis.family,
        total_duration_ms=total,
        samples=tuple(kept),
        metadata=RecordingMetadata(
            sample_count=len(kept),
            average_fps=average_fps(samples),
            has_overshoot=analysis.metadata.has_overshoot,
            deltas=deltas,
        ),
    )


# ── frame thinning ──


def _direction_changed(prev: float, curr: float, nxt: float) -> bool:
    before = (curr > prev) - (curr < prev)
    after = (nxt > curr) - (nxt < curr)
    return before != 0 and after != 0 and before != after


def is_direction_change(prev: Sample, curr: Sample, nxt: Sample) -> bool:
    return any(
        _direction_changed(prev.value(p), curr.value(p), nxt.value(p)) for p in ("y", "x", "scale")
    )


def is_velocity_jump(prev: Sample, curr: Sample, nxt: Sample, jump: float = 0.5) -> bool:
    dt1 = (curr.time - prev.time) or 1
    dt2 = (nxt.time - curr.time) or 1
    v1 = (curr.y - prev.y) / dt1
    v2 = (nxt.y - curr.y) / dt2
    return abs(v2 - v1) > jump


def optimize_frames(samples: Sequence[Sample], config: EngineConfig | None = None) -> list[Sample]:
    """Keep first/last, direction changes, velocity jumps and every Nth frame.

    ``prev`` is always the last *kept* frame, so a run of dropped frames is
    judged against the keypoint before it.
    """
    if len(samples) < 3:
        return list(samples)
    config = config or EngineConfig()

    kept = [samples[0]]
    for i in range(1, len(samples) - 1):
        prev, curr, nxt = kept[-1], samples[i], samples[i + 1]
        if (
            is_direction_change(prev, curr, nxt)
            or is_velocity_jump(prev, curr, nxt, config.keypoint_velocity_jump)
            or i % config.keypoint_stride == 0
        ):
            kept.append(curr)
    kept.append(samples[-1])
    return kept
