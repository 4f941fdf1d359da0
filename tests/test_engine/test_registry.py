"""Tests for the stage registry."""

import pytest

from shapesight.engine.context import DetectionContext
from shapesight.engine.registry import Layer, StageRegistry, StageSpec, get_registry


def _noop(ctx: DetectionContext) -> None:
    pass


def test_register_and_list():
    reg = StageRegistry()
    spec = StageSpec(id="S0.01", layer=Layer.SEGMENTATION, fn=_noop)
    reg.register(spec)
    assert reg.all() == [spec]
    assert reg.count == 1


def test_duplicate_id_rejected():
    reg = StageRegistry()
    reg.register(StageSpec(id="S0.01", layer=Layer.SEGMENTATION, fn=_noop))
    with pytest.raises(ValueError, match="Duplicate"):
        reg.register(StageSpec(id="S0.01", layer=Layer.SEGMENTATION, fn=_noop))


def test_get_layer():
    reg = StageRegistry()
    s0 = StageSpec(id="S0.01", layer=Layer.SEGMENTATION, fn=_noop)
    s1 = StageSpec(id="S1.01", layer=Layer.OUTLINE, fn=_noop)
    reg.register(s0)
    reg.register(s1)
    layer0 = reg.get_layer(Layer.SEGMENTATION)
    assert len(layer0) == 1
    assert layer0[0].id == "S0.01"


def test_resolve_order_with_deps():
    reg = StageRegistry()
    s1 = StageSpec(id="S0.03", layer=Layer.SEGMENTATION, fn=_noop)
    s2 = StageSpec(id="S1.01", layer=Layer.OUTLINE, fn=_noop, dependencies=["S0.03"])
    reg.register(s1)
    reg.register(s2)
    ids = [s.id for s in reg.resolve_order()]
    assert ids.index("S0.03") < ids.index("S1.01")


def test_resolve_order_skips_stages():
    reg = StageRegistry()
    reg.register(StageSpec(id="S1.01", layer=Layer.OUTLINE, fn=_noop))
    reg.register(StageSpec(id="S1.02", layer=Layer.OUTLINE, fn=_noop, dependencies=["S1.01"]))
    reg.register(
        StageSpec(id="S1.04", layer=Layer.OUTLINE, fn=_noop, dependencies=["S1.01", "S1.02"])
    )
    ids = [s.id for s in reg.resolve_order({"S1.02"})]
    # a skipped dependency counts as satisfied and is not pulled back in
    assert ids == ["S1.01", "S1.04"]


def test_resolve_order_all():
    reg = StageRegistry()
    for i in range(5):
        reg.register(StageSpec(id=f"S0.0{i+1}", layer=Layer.SEGMENTATION, fn=_noop))
    order = reg.resolve_order(None)
    assert len(order) == 5


def test_resolve_order_detects_cycles():
    reg = StageRegistry()
    reg.register(StageSpec(id="S2.01", layer=Layer.FEATURES, fn=_noop, dependencies=["S2.02"]))
    reg.register(StageSpec(id="S2.02", layer=Layer.FEATURES, fn=_noop, dependencies=["S2.01"]))
    with pytest.raises(ValueError, match="Circular"):
        reg.resolve_order()


def test_all_stages_registered():
    reg = get_registry()
    assert reg.count == 13
    assert len(reg.get_layer(Layer.SEGMENTATION)) == 3
    assert len(reg.get_layer(Layer.OUTLINE)) == 4
    assert len(reg.get_layer(Layer.FEATURES)) == 4
    assert len(reg.get_layer(Layer.CLASSIFICATION)) == 2


def test_full_order_respects_every_dependency():
    order = [s.id for s in get_registry().resolve_order()]
    for spec in get_registry().all():
        for dep in spec.dependencies:
            assert order.index(dep) < order.index(spec.id)
    assert order[0] == "S0.01"
    assert order[-1] == "S3.02"
