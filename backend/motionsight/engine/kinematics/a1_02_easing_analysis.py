"""A1.02 — Easing Analysis.

Classify the selected property's curve into an easing family, with a
spring fit when it overshoots or oscillates.
"""

from __future__ import annotations

from motionsight.engine.context import AnalysisContext
from motionsight.engine.registry import Stage, stage
from motionsight.motion.easing import analyze


@stage(
    id="A1.02",
    layer=Stage.KINEMATICS,
    dependencies=["A1.01"],
    description="Classify easing family and estimate spring parameters",
)
def easing_analysis(ctx: AnalysisContext) -> None:
    ctx.analysis = analyze(ctx.samples, ctx.prop, ctx.config)
