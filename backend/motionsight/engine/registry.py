"""Stage registry — analysis stages are plain functions registered by decorator.

    @stage(id="A1.02", layer=Stage.KINEMATICS, dependencies=["A1.01"])
    def easing_analysis(ctx: AnalysisContext) -> None:
        ctx.analysis = analyze(ctx.samples, ctx.prop)

A new stage is one module under the matching layer package.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from motionsight.engine.context import AnalysisContext

logger = logging.getLogger(__name__)

StageFn = Callable[["AnalysisContext"], None]


class Stage(enum.IntEnum):
    CAPTURE = 0
    KINEMATICS = 1
    SYNTHESIS = 2


@dataclass
class StageSpec:
    id: str
    layer: Stage
    fn: StageFn
    dependencies: list[str] = field(default_factory=list)
    description: str = ""


class StageRegistry:
    def __init__(self) -> None:
        self._stages: dict[str, StageSpec] = {}

    def register(self, spec: StageSpec) -> None:
        if spec.id in self._stages:
            raise ValueError(f"Duplicate stage ID: {spec.id}")
        self._stages[spec.id] = spec
        logger.debug("Registered stage %s (%s)", spec.id, spec.layer.name)

    def get(self, stage_id: str) -> StageSpec:
        return self._stages[stage_id]

    def get_layer(self, layer: Stage) -> list[StageSpec]:
        return sorted((s for s in self._stages.values() if s.layer == layer), key=lambda s: s.id)

    def all(self) -> list[StageSpec]:
        return sorted(self._stages.values(), key=lambda s: (s.layer, s.id))

    def _with_dependencies(self, requested: set[str]) -> dict[str, StageSpec]:
        closure: set[str] = set()
        pending = list(requested)
        while pending:
            sid = pending.pop()
            if sid in closure:
                continue
            closure.add(sid)
            spec = self._stages.get(sid)
            if spec is not None:
                pending.extend(spec.dependencies)
        return {sid: spec for sid, spec in self._stages.items() if sid in closure}

    def resolve_order(self, requested: set[str] | None = None) -> list[StageSpec]:
        """Dependency order (Kahn, ties broken by ID). ``None`` means every stage."""
        pool = self._stages if requested is None else self._with_dependencies(requested)

        waiting = {sid: sum(1 for dep in spec.dependencies if dep in pool) for sid, spec in pool.items()}
        ready = sorted(sid for sid, n in waiting.items() if n == 0)
        ordered: list[StageSpec] = []

        while ready:
            sid = ready.pop(0)
            ordered.append(pool[sid])
            for other in pool.values():
                if sid in other.dependencies:
                    waiting[other.id] -= 1
                    if waiting[other.id] == 0:
                        ready.append(other.id)
            ready.sort()

        if len(ordered) != len(pool):
            stuck = sorted(set(pool) - {s.id for s in ordered})
            raise ValueError(f"Circular dependency among stages: {stuck}")
        return ordered

    @property
    def count(self) -> int:
        return len(self._stages)


_registry = StageRegistry()


def get_registry() -> StageRegistry:
    return _registry


def stage(
    *,
    id: str,
    layer: Stage,
    dependencies: list[str] | None = None,
    description: str = "",
):
    """Register the decorated function in the default registry."""

    def decorator(fn: StageFn) -> StageFn:
        _registry.register(
            StageSpec(id=id, layer=layer, fn=fn, dependencies=dependencies or [], description=description)
        )
        return fn

    return decorator
