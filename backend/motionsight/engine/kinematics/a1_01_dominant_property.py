"""A1.01 — Dominant Property.

Pick the property the classifier analyses: widest weighted range, y on ties
or when nothing moves.
"""

from __future__ import annotations

from motionsight.engine.context import AnalysisContext
from motionsight.engine.registry import Stage, stage
from motionsight.motion.kinematics import dominant_property


@stage(
    id="A1.01",
    layer=Stage.KINEMATICS,
    dependencies=["A0.01"],
    description="Select the property with the widest weighted range",
)
def dominant_property_selection(ctx: AnalysisContext) -> None:
    ctx.prop = dominant_property(ctx.samples)
