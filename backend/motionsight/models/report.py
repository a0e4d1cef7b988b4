"""Per-recording analysis report returned by the engine."""

from __future__ import annotations

from pydantic import BaseModel, Field

from motionsight.models.analysis import MotionAnalysis
from motionsight.models.descriptor import DescriptorOutput
from motionsight.models.samples import RecordingMetadata
from motionsight.models.trigger import TriggerKind


class RecordingReport(BaseModel):
    element_key: str
    trigger: TriggerKind
    prop: str
    sample_count: int
    analysis: MotionAnalysis | None = None
    metadata: RecordingMetadata | None = None
    output: DescriptorOutput | None = None
    completed_stages: list[str] = Field(default_factory=list)
    errors: dict[str, str] = Field(default_factory=dict)
    timings: dict[str, float] = Field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors
