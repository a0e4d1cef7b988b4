"""Motion analysis output — easing family, spring fit, confidence."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class EasingFamily(str, Enum):
    LINEAR = "linear"
    EASE_IN = "ease-in"
    EASE_OUT = "ease-out"
    EASE_IN_OUT = "ease-in-out"
    SPRING = "spring"
    CUSTOM = "custom"


class SpringParameters(BaseModel):
    model_config = ConfigDict(frozen=True)

    stiffness: float = Field(default=100.0, ge=50.0, le=500.0)
    damping: float = Field(default=10.0, ge=5.0, le=40.0)
    mass: float = Field(default=1.0, ge=0.5, le=5.0)
    initial_velocity: float = 0.0
    bounce: float = Field(default=0.25, ge=0.0, le=1.0)


class AnalysisMetadata(BaseModel):
    model_config = ConfigDict(frozen=True)

    has_overshoot: bool = False
    oscillation_count: int = 0
    peak_velocity: float = 0.0
    decay_rate: float = 0.0


class MotionAnalysis(BaseModel):
    model_config = ConfigDict(frozen=True)

    family: EasingFamily
    spring: SpringParameters | None = None
    curve: str | None = None
    confidence: float = Field(ge=0.0, le=1.0)
    metadata: AnalysisMetadata = Field(default_factory=AnalysisMetadata)
