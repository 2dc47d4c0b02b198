"""Tests for the stage registry and dependency resolution."""

from __future__ import annotations

import pytest

from chartengine.engine.kinds import Event, Input
from chartengine.engine.pipeline import create_pipeline
from chartengine.engine.registry import StageRegistry, get_registry, stage


def _noop(ctx):
    return None


@pytest.fixture
def registry():
    reg = StageRegistry()
    stage(id="theme", inputs={Input.THEME}, registry=reg)(_noop)
    stage(id="layout", inputs={Input.VIEWPORT}, registry=reg)(_noop)
    stage(id="scales", dependencies=["layout"], inputs={Input.DATASET}, registry=reg)(_noop)
    stage(id="geometry", dependencies=["scales"], registry=reg)(_noop)
    stage(id="paint", dependencies=["geometry", "theme"], registry=reg)(_noop)
    return reg


def test_register_and_count(registry):
    assert registry.count == 5
    assert registry.get("paint").dependencies == ["geometry", "theme"]


def test_duplicate_id_rejected(registry):
    with pytest.raises(ValueError):
        stage(id="theme", registry=registry)(_noop)


def test_resolve_order_respects_dependencies(registry):
    order = [s.id for s in registry.resolve_order()]
    assert order.index("layout") < order.index("scales") < order.index("geometry") < order.index("paint")
    assert order.index("theme") < order.index("paint")


def test_resolve_order_pulls_in_dependencies(registry):
    order = [s.id for s in registry.resolve_order({"geometry"})]
    assert order == ["layout", "scales", "geometry"]


def test_resolve_order_without_dependencies(registry):
    order = [s.id for s in registry.resolve_order({"geometry", "paint"}, include_dependencies=False)]
    assert order == ["geometry", "paint"]


def test_affected_by_theme(registry):
    assert registry.affected_by({Input.THEME}) == {"theme", "paint"}


def test_affected_by_viewport(registry):
    assert registry.affected_by({Input.VIEWPORT}) == {"layout", "scales", "geometry", "paint"}


def test_cycle_detected():
    reg = StageRegistry()
    stage(id="a", dependencies=["b"], registry=reg)(_noop)
    stage(id="b", dependencies=["a"], registry=reg)(_noop)
    with pytest.raises(ValueError, match="Circular"):
        reg.resolve_order()


class TestBuiltinStages:
    def setup_method(self):
        create_pipeline()
        self.registry = get_registry()

    def test_all_stages_registered(self):
        ids = {s.id for s in self.registry.all()}
        assert ids == {"theme", "layout", "scales", "geometry", "axes", "paint", "legend", "labels"}

    def test_theme_event_skips_scales_and_geometry(self):
        affected = self.registry.affected_by(Event.THEME.changed_inputs)
        assert "scales" not in affected
        assert "geometry" not in affected
        assert {"theme", "paint", "legend", "labels"} <= affected

    def test_resize_reaches_every_derived_stage(self):
        affected = self.registry.affected_by(Event.RESIZE.changed_inputs)
        assert affected == {"layout", "scales", "geometry", "axes", "paint", "legend", "labels"}

    def test_dataset_event_keeps_layout(self):
        affected = self.registry.affected_by(Event.DATASET.changed_inputs)
        assert "layout" not in affected
        assert {"scales", "geometry", "axes", "paint", "labels"} == affected
