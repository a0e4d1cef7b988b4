"""A0.02 — Recording Metadata.

Sample count, average fps, start/end deltas per property and overshoot on
the dominant property. Sampler-built recordings keep their own metadata.
"""

from __future__ import annotations

from motionsight.engine.context import AnalysisContext
from motionsight.engine.registry import Stage, stage
from motionsight.models.samples import SAMPLE_PROPERTIES, RecordingMetadata
from motionsight.motion.kinematics import detect_overshoot, dominant_property, project
from motionsight.sampling.sampler import average_fps


@stage(
    id="A0.02",
    layer=Stage.CAPTURE,
    dependencies=["A0.01"],
    description="Summarise sample count, fps and per-property deltas",
)
def recording_metadata(ctx: AnalysisContext) -> None:
    if ctx.recording.metadata is not None:
        ctx.metadata = ctx.recording.metadata
        return

    samples = ctx.samples
    deltas: dict[str, tuple[float, float]] = {}
    overshoot = False
    if samples:
        first, last = samples[0], samples[-1]
        deltas = {p: (first.value(p), last.value(p)) for p in SAMPLE_PROPERTIES}
        overshoot = detect_overshoot(project(samples, dominant_property(samples)))

    ctx.metadata = RecordingMetadata(
        sample_count=len(samples),
        average_fps=average_fps(ctx.recording.samples),
        has_overshoot=overshoot,
        deltas=deltas,
    )
