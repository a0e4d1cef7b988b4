"""Animation descriptor — the portable, phase-keyed output model."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

StateValue = Union[int, float, str]
StateBag = dict[str, StateValue]


class Phase(str, Enum):
    ANIMATE = "animate"
    WHILE_HOVERING = "while-hovering"
    WHILE_IN_VIEW = "while-in-view"
    WHILE_PRESSED = "while-pressed"
    WHILE_FOCUSED = "while-focused"


class TweenTransition(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["tween"] = "tween"
    duration: float = 0.3
    curve: str = "easeOut"


class SpringTransition(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["spring"] = "spring"
    stiffness: float
    damping: float
    mass: float
    bounce: float


Transition = Annotated[Union[TweenTransition, SpringTransition], Field(discriminator="type")]


class VisibilityPolicy(BaseModel):
    model_config = ConfigDict(frozen=True)

    once: bool = True
    margin: str = "-100px"
    amount: float = 0.3


class AnimationDescriptor(BaseModel):
    model_config = ConfigDict(frozen=True)

    initial: StateBag = Field(default_factory=dict)
    phases: dict[Phase, StateBag] = Field(default_factory=lambda: {p: {} for p in Phase})
    transition: Transition = Field(default_factory=TweenTransition)
    viewport: VisibilityPolicy | None = None

    def phase(self, phase: Phase) -> StateBag:
        return self.phases.get(phase, {})

    @property
    def active_phase(self) -> Phase | None:
        for phase in Phase:
            if self.phases.get(phase):
                return phase
        return None


class DescriptorOutput(BaseModel):
    model_config = ConfigDict(frozen=True)

    descriptor: AnimationDescriptor
    compact: str
    code: str


class ManifestEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    trigger: str
    easing: str
    duration_ms: float = Field(alias="durationMs")
    sample_count: int = Field(alias="sampleCount")
    states: dict[str, StateBag]
    code: str


class AnimationManifest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    schema_version: str = Field(alias="schemaVersion")
    generator_tag: str = Field(alias="generatorTag")
    timestamp: str
    animations: dict[str, ManifestEntry] = Field(default_factory=dict)
