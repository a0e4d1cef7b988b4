"""A0.01 — Frame Thinning.

Reduce raw frames to keypoints: first/last, direction changes, velocity
jumps and every Nth frame. Recordings that already carry metadata came out
of the sampler thinned, so their samples pass through unchanged.
"""

from __future__ import annotations

from motionsight.engine.context import AnalysisContext
from motionsight.engine.registry import Stage, stage
from motionsight.sampling.sampler import optimize_frames


@stage(
    id="A0.01",
    layer=Stage.CAPTURE,
    description="Thin raw frames to keypoints",
)
def frame_thinning(ctx: AnalysisContext) -> None:
    samples = ctx.recording.samples
    if ctx.recording.metadata is not None:
        ctx.samples = list(samples)
        return
    ctx.samples = optimize_frames(samples, ctx.config)
