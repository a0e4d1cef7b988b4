"""AnalysisContext — the mutable state one recording carries through the stages."""

from __future__ import annotations

from dataclasses import dataclass, field

from motionsight.engine.config import EngineConfig
from motionsight.models.analysis import MotionAnalysis
from motionsight.models.descriptor import DescriptorOutput
from motionsight.models.samples import Recording, RecordingMetadata, Sample
from motionsight.models.trigger import TriggerContext


@dataclass
class AnalysisContext:
    recording: Recording
    config: EngineConfig = field(default_factory=EngineConfig)
    trigger: TriggerContext | None = None

    # Capture
    samples: list[Sample] = field(default_factory=list)  # thinned keypoints
    metadata: RecordingMetadata | None = None

    # Kinematics
    prop: str = "y"
    analysis: MotionAnalysis | None = None

    # Synthesis
    output: DescriptorOutput | None = None

    # Run bookkeeping
    completed_stages: set[str] = field(default_factory=set)
    errors: dict[str, str] = field(default_factory=dict)
    timings: dict[str, float] = field(default_factory=dict)  # stage id → ms

    @property
    def element_key(self) -> str:
        return self.recording.element_key
