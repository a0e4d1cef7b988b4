"""Sample / Recording data model — what the Frame Source produces per element."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict, Field

from motionsight.models.analysis import EasingFamily
from motionsight.models.trigger import TriggerKind

# Properties the classifier can project out of a Sample.
SAMPLE_PROPERTIES: tuple[str, ...] = ("x", "y", "scale", "opacity", "rotation")


class Sample(BaseModel):
    """One timestamped observation. ``time`` is ms from recording start."""

    model_config = ConfigDict(frozen=True)

    time: float
    x: float = 0.0
    y: float = 0.0
    scale: float = 1.0
    rotation: float = 0.0
    opacity: float = Field(default=1.0, ge=0.0, le=1.0)
    background_color: str | None = None
    color: str | None = None

    def value(self, prop: str) -> float:
        if prop not in SAMPLE_PROPERTIES:
            prop = "y"
        return float(getattr(self, prop))


@dataclass(frozen=True)
class VelocityPoint:
    """Derived per consecutive-sample pair. Never persisted."""

    time: float
    velocity: float
    acceleration: float
    position: float


class RecordingMetadata(BaseModel):
    model_config = ConfigDict(frozen=True)

    sample_count: int = 0
    average_fps: int = 0
    has_overshoot: bool = False
    # property → (start, end)
    deltas: dict[str, tuple[float, float]] = Field(default_factory=dict)


class Recording(BaseModel):
    """One element's samples across one animation run. Immutable once built."""

    model_config = ConfigDict(frozen=True)

    element_key: str
    trigger: TriggerKind = TriggerKind.LOAD
    easing: EasingFamily = EasingFamily.EASE_OUT
    total_duration_ms: float = 0.0
    samples: tuple[Sample, ...] = ()
    metadata: RecordingMetadata | None = None

    @property
    def first(self) -> Sample | None:
        return self.samples[0] if self.samples else None

    @property
    def last(self) -> Sample | None:
        return self.samples[-1] if self.samples else None
