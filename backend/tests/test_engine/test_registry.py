"""Tests for the stage registry."""

import pytest

from motionsight.engine.context import AnalysisContext
from motionsight.engine.registry import Stage, StageRegistry, StageSpec


def _noop(ctx: AnalysisContext) -> None:
    pass


def test_register_and_get():
    reg = StageRegistry()
    spec = StageSpec(id="A0.01", layer=Stage.CAPTURE, fn=_noop)
    reg.register(spec)
    assert reg.get("A0.01") is spec
    assert reg.count == 1


def test_duplicate_id_rejected():
    reg = StageRegistry()
    reg.register(StageSpec(id="A0.01", layer=Stage.CAPTURE, fn=_noop))
    with pytest.raises(ValueError, match="Duplicate"):
        reg.register(StageSpec(id="A0.01", layer=Stage.KINEMATICS, fn=_noop))


def test_get_layer():
    reg = StageRegistry()
    reg.register(StageSpec(id="A1.01", layer=Stage.KINEMATICS, fn=_noop))
    reg.register(StageSpec(id="A0.01", layer=Stage.CAPTURE, fn=_noop))
    layer0 = reg.get_layer(Stage.CAPTURE)
    assert [s.id for s in layer0] == ["A0.01"]
    assert [s.id for s in reg.all()] == ["A0.01", "A1.01"]


def test_resolve_order_with_deps():
    reg = StageRegistry()
    reg.register(StageSpec(id="A0.01", layer=Stage.CAPTURE, fn=_noop))
    reg.register(StageSpec(id="A0.02", layer=Stage.CAPTURE, fn=_noop))
    reg.register(StageSpec(id="A1.02", layer=Stage.KINEMATICS, fn=_noop, dependencies=["A0.02"]))
    order = reg.resolve_order({"A1.02"})
    assert [s.id for s in order] == ["A0.02", "A1.02"]


def test_resolve_order_all():
    reg = StageRegistry()
    for i in range(5):
        reg.register(StageSpec(id=f"A0.0{i+1}", layer=Stage.CAPTURE, fn=_noop))
    order = reg.resolve_order(None)
    assert len(order) == 5


def test_dependency_beats_id_order():
    reg = StageRegistry()
    reg.register(StageSpec(id="A0.01", layer=Stage.CAPTURE, fn=_noop, dependencies=["A0.02"]))
    reg.register(StageSpec(id="A0.02", layer=Stage.CAPTURE, fn=_noop))
    assert [s.id for s in reg.resolve_order()] == ["A0.02", "A0.01"]


def test_cycle_detected():
    reg = StageRegistry()
    reg.register(StageSpec(id="A0.01", layer=Stage.CAPTURE, fn=_noop, dependencies=["A0.02"]))
    reg.register(StageSpec(id="A0.02", layer=Stage.CAPTURE, fn=_noop, dependencies=["A0.01"]))
    with pytest.raises(ValueError, match="Circular"):
        reg.resolve_order()
