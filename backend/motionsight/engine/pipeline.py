"""Pipeline orchestrator — runs registered stages over one recording in dependency order."""

from __future__ import annotations

import importlib
import logging
import pkgutil
import time

from motionsight.engine.config import EngineConfig
from motionsight.engine.context import AnalysisContext
from motionsight.engine.registry import StageRegistry, get_registry
from motionsight.models.report import RecordingReport
from motionsight.models.samples import Recording
from motionsight.models.trigger import TriggerContext

logger = logging.getLogger(__name__)

STAGE_PACKAGES = ("capture", "kinematics", "synthesis")


def register_stages() -> None:
    """Import every stage module so the @stage decorators fire."""
    for layer_name in STAGE_PACKAGES:
        package_name = f"motionsight.engine.{layer_name}"
        package = importlib.import_module(package_name)
        for _, module_name, _ in pkgutil.iter_modules(package.__path__):
            importlib.import_module(f"{package_name}.{module_name}")


class Pipeline:
    def __init__(self, registry: StageRegistry | None = None) -> None:
        self.registry = registry or get_registry()

    def run(self, ctx: AnalysisContext, stages: set[str] | None = None) -> AnalysisContext:
        """Run ``stages`` (plus their dependencies; all when ``None``) on ``ctx``.

        A stage that raises is recorded in ``ctx.errors``; later stages
        still run and must tolerate missing inputs.
        """
        start = time.perf_counter()
        ordered = self.registry.resolve_order(stages)
        logger.info("Pipeline[%s]: %d stages queued", ctx.element_key, len(ordered))

        for spec in ordered:
            t0 = time.perf_counter()
            try:
                spec.fn(ctx)
                ctx.completed_stages.add(spec.id)
            except Exception as e:
                ctx.errors[spec.id] = str(e)
                logger.warning("  %s FAILED: %s", spec.id, e)
            finally:
                ctx.timings[spec.id] = round((time.perf_counter() - t0) * 1000, 3)
            logger.debug("  %s finished in %.1fms", spec.id, ctx.timings[spec.id])

        logger.info(
            "Pipeline[%s] complete: %d/%d stages in %.0fms",
            ctx.element_key,
            len(ctx.completed_stages),
            len(ordered),
            (time.perf_counter() - start) * 1000,
        )
        return ctx


def to_report(ctx: AnalysisContext) -> RecordingReport:
    return RecordingReport(
        element_key=ctx.element_key,
        trigger=ctx.recording.trigger,
        prop=ctx.prop,
        sample_count=len(ctx.samples),
        analysis=ctx.analysis,
        metadata=ctx.metadata,
        output=ctx.output,
        completed_stages=sorted(ctx.completed_stages),
        errors=dict(ctx.errors),
        timings=dict(ctx.timings),
    )


def analyze_recording(
    recording: Recording,
    trigger: TriggerContext | None = None,
    config: EngineConfig | None = None,
    pipeline: Pipeline | None = None,
) -> RecordingReport:
    """Thin, classify and describe one recording through the default stages."""
    if pipeline is None:
        register_stages()
        pipeline = Pipeline()
    ctx = AnalysisContext(recording=recording, config=config or EngineConfig(), trigger=trigger)
    return to_report(pipeline.run(ctx))
