"""A2.01 — Descriptor Synthesis.

Phase-keyed descriptor plus compact and code serializations. The
recording's own easing family decides spring vs tween; the analysis only
supplies spring parameters.
"""

from __future__ import annotations

from motionsight.descriptor.generator import generate
from motionsight.engine.context import AnalysisContext
from motionsight.engine.registry import Stage, stage


@stage(
    id="A2.01",
    layer=Stage.SYNTHESIS,
    dependencies=["A0.01", "A1.02"],
    description="Generate the animation descriptor and its serializations",
)
def descriptor_synthesis(ctx: AnalysisContext) -> None:
    recording = ctx.recording
    if len(ctx.samples) != len(recording.samples):
        recording = recording.model_copy(update={"samples": tuple(ctx.samples)})
    ctx.output = generate(recording, ctx.analysis, ctx.config)
