"""Tests for derivation passes through the built-in stages."""

from __future__ import annotations

import pytest

from chartengine.data.models import Dataset
from chartengine.engine.context import ChartOptions, RenderContext
from chartengine.engine.kinds import ChartKind, Event
from chartengine.engine.pipeline import Pipeline, create_pipeline
from chartengine.engine.theme import ThemeSelector, resolve_theme
from chartengine.errors import InvalidDomainError
from chartengine.geometry.primitives import Arc, Bar, PathSegment
from tests.conftest import MONTHS, ZERO_ROWS


def _context(kind: ChartKind, dataset: Dataset, metric: str | None = None, width: float = 1200) -> RenderContext:
    return RenderContext(ChartOptions.for_kind(kind, metric), dataset=dataset, viewport_width=width)


@pytest.fixture
def pipeline() -> Pipeline:
    return create_pipeline()


class TestInitialPass:
    def test_runs_every_stage(self, pipeline, sample_dataset):
        ctx = pipeline.run(_context(ChartKind.BAR, sample_dataset))
        assert set(ctx.completed_stages) == {
            "theme", "layout", "scales", "geometry", "axes", "paint", "legend", "labels",
        }
        assert ctx.skipped_stages == []
        assert ctx.generation == 1

    def test_input_context_is_not_modified(self, pipeline, sample_dataset):
        base = _context(ChartKind.BAR, sample_dataset)
        pipeline.run(base)
        assert base.primitives == ()
        assert base.generation == 0

    def test_bar_frame(self, pipeline, sample_dataset):
        frame = pipeline.run(_context(ChartKind.BAR, sample_dataset, "revenue")).to_frame()
        bars = [p for p in frame.primitives if isinstance(p, Bar)]
        assert [b.label for b in bars] == MONTHS
        assert frame.baseline_y == pytest.approx(370)
        assert all(b.y + b.height == pytest.approx(370) for b in bars)
        # Jun revenue 300 on a 0-400 axis over 330px
        assert bars[-1].y == pytest.approx(370 - 300 / 400 * 330)
        assert {b.color for b in bars} == {resolve_theme("light").bar_gradient[0]}
        assert [e.label for e in frame.legend] == ["Monthly Revenue"]
        assert [label.text for label in frame.labels] == ["150", "100", "250", "200", "350", "300"]
        y_ticks = [t.value for t in frame.ticks if t.axis == "y"]
        assert y_ticks[0] == 0 and y_ticks[-1] == 400

    def test_line_frame(self, pipeline, sample_dataset):
        frame = pipeline.run(_context(ChartKind.LINE, sample_dataset)).to_frame()
        paths = [p for p in frame.primitives if isinstance(p, PathSegment)]
        assert [p.id for p in paths] == ["line-sales", "line-revenue"]
        assert len(frame.markers) == 12
        assert [p.color for p in paths] == ["#3498db", "#e74c3c"]
        xs = [x for x, _ in paths[0].points]
        assert all(a < b for a, b in zip(xs, xs[1:]))
        assert [e.label for e in frame.legend] == ["Sales", "Revenue"]

    def test_pie_frame(self, pipeline, sample_dataset):
        frame = pipeline.run(_context(ChartKind.PIE, sample_dataset)).to_frame()
        arcs = [p for p in frame.primitives if isinstance(p, Arc)]
        assert [a.label for a in arcs] == ["Sales", "Revenue"]
        assert [a.value for a in arcs] == [1400, 1350]
        assert [label.text for label in frame.labels] == ["51%", "49%"]
        assert arcs[0].outer_radius == pytest.approx(175)

    def test_breakdown_pie_frame(self, pipeline, sample_dataset):
        frame = pipeline.run(_context(ChartKind.BREAKDOWN_PIE, sample_dataset, "revenue")).to_frame()
        arcs = [p for p in frame.primitives if isinstance(p, Arc)]
        assert [a.label for a in arcs] == MONTHS
        assert arcs[0].id == "arc-revenue-0"
        assert arcs[0].outer_radius == pytest.approx(320 / 2.3 - 5)
        assert frame.legend == ()
        assert [label.text for label in frame.labels] == MONTHS
        # Revenue uses the alternate category scheme
        assert arcs[0].color == resolve_theme("light").alt_category_colors[0]


class TestIncrementalPasses:
    def test_theme_event_repaints_without_geometry(self, pipeline, sample_dataset):
        first = pipeline.run(_context(ChartKind.LINE, sample_dataset))
        nxt = first.fork()
        nxt.theme = ThemeSelector.DARK
        second = pipeline.run(nxt, Event.THEME)

        assert "scales" not in second.completed_stages
        assert "geometry" not in second.completed_stages
        assert {"theme", "paint", "legend", "labels"} <= set(second.completed_stages)
        assert second.x_scale is first.x_scale
        assert [p.points for p in second.primitives] == [p.points for p in first.primitives]
        assert [p.color for p in second.primitives] == ["#1f78b4", "#d62728"]
        assert second.generation == 2

    def test_dataset_event_keeps_layout(self, pipeline, sample_dataset):
        first = pipeline.run(_context(ChartKind.BAR, sample_dataset, "sales"))
        nxt = first.fork()
        nxt.dataset = sample_dataset.filter(lambda p: p.value("sales") >= 200)
        second = pipeline.run(nxt, Event.DATASET)
        assert "layout" not in second.completed_stages
        assert second.area is first.area
        assert [p.label for p in second.primitives] == ["Feb", "Apr", "May", "Jun"]

    def test_resize_rebuilds_scales(self, pipeline, sample_dataset):
        first = pipeline.run(_context(ChartKind.BAR, sample_dataset))
        nxt = first.fork()
        nxt.viewport_width = 900
        second = pipeline.run(nxt, Event.RESIZE)
        assert second.viewport.width == pytest.approx(600)
        assert second.primitives[0].width < first.primitives[0].width
        assert "theme" not in second.completed_stages


class TestErrors:
    def test_empty_dataset_publishes_placeholder(self, pipeline):
        ctx = pipeline.run(_context(ChartKind.BAR, Dataset()))
        frame = ctx.to_frame()
        assert frame.is_placeholder
        assert frame.placeholder.text == "No data to display"
        assert frame.primitives == ()
        assert {"geometry", "axes", "paint", "labels"} <= set(ctx.skipped_stages)
        assert {"theme", "layout", "legend"} <= set(ctx.completed_stages)

    def test_all_zero_pie_publishes_placeholder(self, pipeline):
        ctx = pipeline.run(_context(ChartKind.PIE, Dataset.from_records(ZERO_ROWS)))
        assert ctx.to_frame().is_placeholder
        assert "geometry" in ctx.skipped_stages

    def test_all_zero_bars_still_draw(self, pipeline):
        frame = pipeline.run(_context(ChartKind.BAR, Dataset.from_records(ZERO_ROWS))).to_frame()
        assert not frame.is_placeholder
        assert all(b.height == 0 for b in frame.primitives)

    def test_placeholder_cleared_when_data_returns(self, pipeline, sample_dataset):
        empty = pipeline.run(_context(ChartKind.LINE, Dataset()))
        nxt = empty.fork()
        nxt.dataset = sample_dataset
        ctx = pipeline.run(nxt, Event.DATASET)
        assert ctx.placeholder is None
        assert len(ctx.primitives) == 2

    def test_invalid_layout_aborts_pass(self, pipeline, sample_dataset):
        first = pipeline.run(_context(ChartKind.BAR, sample_dataset))
        nxt = first.fork()
        nxt.viewport_width = -1
        with pytest.raises(InvalidDomainError):
            pipeline.run(nxt, Event.RESIZE)
        assert first.viewport.width == 800
