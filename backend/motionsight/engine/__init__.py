"""MotionSight analysis engine."""

from motionsight.engine.config import EngineConfig
from motionsight.engine.context import AnalysisContext
from motionsight.engine.registry import Stage, StageRegistry, get_registry, stage

__all__ = [
    "EngineConfig",
    "AnalysisContext",
    "Stage",
    "StageRegistry",
    "get_registry",
    "stage",
]
