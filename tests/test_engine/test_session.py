"""Tests for chart sessions, resize subscriptions and dashboard views."""

from __future__ import annotations

import random
from datetime import datetime

import pytest

from chartengine.data.models import DataPoint
from chartengine.data.source import revenue_at_least
from chartengine.engine.context import ChartOptions
from chartengine.engine.kinds import ChartKind
from chartengine.engine.session import ChartSession, Dashboard, ViewportEvents
from chartengine.engine.theme import ThemeSelector
from chartengine.errors import InvalidDomainError
from chartengine.geometry.primitives import Bar
from tests.conftest import MONTHS


def _bar_session(source, **kwargs) -> ChartSession:
    return ChartSession(ChartOptions.for_kind(ChartKind.BAR, "revenue"), source=source, **kwargs)


class TestViewportEvents:
    def test_subscribe_emit_cancel(self):
        events = ViewportEvents(1200)
        seen = []
        sub = events.on_resize(seen.append)
        events.emit(800)
        sub.cancel()
        events.emit(600)
        assert seen == [800]
        assert events.handler_count == 0
        assert not sub.active

    def test_cancel_twice_is_harmless(self):
        events = ViewportEvents()
        sub = events.on_resize(lambda w: None)
        sub.cancel()
        sub.cancel()
        assert events.handler_count == 0


class TestChartSession:
    def test_render_publishes_frame(self, source):
        session = _bar_session(source)
        frame = session.render()
        assert frame is session.frame
        assert [p.label for p in frame.primitives] == MONTHS
        assert frame.generation == 1

    def test_mount_twice_keeps_one_handler(self, source):
        events = ViewportEvents(1200)
        session = _bar_session(source)
        session.mount(events)
        session.mount(events)
        assert events.handler_count == 1
        assert session.is_mounted

    def test_unmount_deregisters(self, source):
        events = ViewportEvents(1200)
        session = _bar_session(source)
        session.mount(events)
        session.unmount()
        assert events.handler_count == 0
        assert not session.is_mounted
        generation = session.frame.generation
        events.emit(600)
        assert session.frame.generation == generation

    def test_resize_event_rerenders(self, source):
        events = ViewportEvents(1200)
        session = _bar_session(source)
        session.mount(events)
        events.emit(600)
        assert session.frame.viewport.width == pytest.approx(400)

    def test_listeners_receive_frames(self, source):
        session = _bar_session(source)
        frames = []
        unsubscribe = session.subscribe(frames.append)
        session.render()
        session.toggle_theme()
        unsubscribe()
        session.toggle_theme()
        assert len(frames) == 2
        assert frames[1].palette.name == "dark"

    def test_theme_toggle_keeps_geometry(self, source):
        session = _bar_session(source)
        before = session.render()
        after = session.toggle_theme()
        assert session.theme is ThemeSelector.DARK
        assert [(b.x, b.y, b.height) for b in after.primitives] == [(b.x, b.y, b.height) for b in before.primitives]
        assert "geometry" not in session.context.completed_stages

    def test_filter_and_append(self, source):
        session = _bar_session(source)
        session.render()
        frame = session.filter(revenue_at_least(200))
        assert [p.label for p in frame.primitives] == ["Mar", "Apr", "May", "Jun"]
        frame = session.append_point(DataPoint(category="Jul", metrics={"sales": 10, "revenue": 420}))
        assert frame.primitives[-1].label == "Jul"

    def test_filter_to_empty_shows_placeholder(self, source):
        session = _bar_session(source)
        session.render()
        frame = session.filter(revenue_at_least(10_000))
        assert frame.is_placeholder
        assert session.last_error is None

    def test_synthesize_point(self, source):
        session = _bar_session(source)
        session.render()
        frame = session.synthesize_point(now=datetime(2024, 8, 2), rng=random.Random(0))
        assert frame.primitives[-1].label == "Aug"

    @pytest.mark.parametrize("width", [320, 300])
    @pytest.mark.parametrize("kind", list(ChartKind))
    def test_phone_width_renders_every_kind(self, source, kind, width):
        session = ChartSession(ChartOptions.for_kind(kind), source=source, viewport_width=width)
        frame = session.render()
        assert session.last_error is None
        assert frame is not None
        assert frame.primitives
        assert frame.viewport.width <= 800

    def test_failed_pass_keeps_previous_frame(self, source):
        session = _bar_session(source)
        good = session.render()
        kept = session.on_resize(-1)
        assert kept is good
        assert isinstance(session.last_error, InvalidDomainError)
        # The next event re-derives everything from the latest inputs
        recovered = session.on_resize(1200)
        assert recovered is not good
        assert session.last_error is None
        assert recovered.viewport.width == 800

    def test_stale_session_rederives_everything(self, source):
        session = _bar_session(source)
        good = session.render()
        session.on_resize(-1)
        # The theme pass re-runs layout too, which still fails at this width
        assert session.toggle_theme() is good
        assert session.theme is ThemeSelector.DARK
        frame = session.on_resize(1200)
        assert frame.palette.name == "dark"
        assert "theme" in session.context.completed_stages
        assert "layout" in session.context.completed_stages

    def test_unknown_metric_fails_first_pass(self, source):
        session = ChartSession(ChartOptions.for_kind(ChartKind.BAR, "profit"), source=source)
        assert session.render() is None
        assert session.last_error is not None

    def test_pointer_move_and_leave(self, source):
        session = _bar_session(source)
        frame = session.render()
        bar = next(p for p in frame.primitives if isinstance(p, Bar))
        cx, top = bar.top_center
        tip = session.pointer_move(cx, top + 1)
        assert tip.visible
        assert tip.content == "Jan\nRevenue: $150"
        assert session.hover_state.target_id == bar.id
        session.pointer_leave("bar-revenue-5")
        assert session.tooltip.visible
        session.pointer_leave(bar.id)
        assert not session.tooltip.visible

    def test_pointer_move_before_render(self, source):
        session = _bar_session(source)
        assert not session.pointer_move(10, 10).visible


class TestDashboard:
    def test_default_view(self, source):
        events = ViewportEvents(1200)
        dash = Dashboard(events, source=source)
        assert dash.view == "sales"
        assert len(dash.sessions) == 1
        assert events.handler_count == 1

    def test_switching_views_replaces_handlers(self, source):
        events = ViewportEvents(1200)
        dash = Dashboard(events, source=source)
        old = dash.sessions[0]
        sessions = dash.show("pie")
        assert len(sessions) == 2
        assert events.handler_count == 2
        assert not old.is_mounted
        assert [s.options.metrics for s in sessions] == [("sales",), ("revenue",)]
        assert all(s.kind is ChartKind.BREAKDOWN_PIE for s in sessions)

    def test_resize_reaches_active_sessions(self, source):
        events = ViewportEvents(1200)
        dash = Dashboard(events, source=source, view="line")
        events.emit(600)
        assert dash.sessions[0].frame.viewport.width == pytest.approx(400)

    def test_unknown_view(self, source):
        dash = Dashboard(ViewportEvents(), source=source)
        with pytest.raises(KeyError):
            dash.show("scatter")
