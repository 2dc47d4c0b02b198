"""Interaction controller — hit testing, tooltip derivation and the hover state machine.

State machine: Idle -> Hovering(target) -> Idle. Transitions happen only on
pointer enter/leave; the last event wins, so entering B while hovering A goes
straight to Hovering(B). No timers, no queued transitions.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, replace

import numpy as np
from shapely.geometry import Point, box

from chartengine.engine.config import ChartConfig
from chartengine.engine.kinds import ChartKind
from chartengine.engine.layout import ViewportState
from chartengine.geometry.pie import arc_centroid
from chartengine.geometry.primitives import Arc, Bar, GeometryPrimitive, PathSegment
from chartengine.utils.formatting import format_currency
from chartengine.utils.geometry import clamp, clockwise_angle, distance

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Hit:
    """A hovered primitive. ``index`` is the data point index for path hits."""

    primitive: GeometryPrimitive
    index: int | None = None

    @property
    def target_id(self) -> str:
        if self.index is None:
            return self.primitive.id
        return f"{self.primitive.id}:{self.index}"


@dataclass(frozen=True)
class TooltipState:
    visible: bool = False
    x: float = 0.0
    y: float = 0.0
    content: str = ""


HIDDEN = TooltipState()


# ── Hit testing ──


def _arc_contains(arc: Arc, pointer: tuple[float, float]) -> bool:
    r = distance(pointer, arc.center)
    if r < arc.inner_radius or r > arc.outer_radius:
        return False
    if arc.span <= 0:
        return False
    angle = clockwise_angle(pointer, arc.center)
    return arc.start_angle <= angle < arc.end_angle


def _bar_contains(bar: Bar, pointer: tuple[float, float]) -> bool:
    if bar.width <= 0 or bar.height <= 0:
        return False
    return box(*bar.bounds).covers(Point(pointer))


def _nearest_path_point(
    paths: Sequence[PathSegment],
    pointer: tuple[float, float],
    tolerance: float,
) -> Hit | None:
    best: tuple[float, float, Hit] | None = None
    px, py = pointer
    for path in paths:
        if not path.points:
            continue
        pts = np.asarray(path.points, dtype=np.float64)
        dx = np.abs(pts[:, 0] - px)
        i = int(np.argmin(dx))
        if dx[i] > tolerance:
            continue
        key = (float(dx[i]), abs(float(pts[i, 1]) - py))
        if best is None or key < best[:2]:
            best = (key[0], key[1], Hit(path, i))
    return best[2] if best else None


def hit_test(
    pointer: tuple[float, float],
    primitives: Sequence[GeometryPrimitive],
    *,
    tolerance: float = 24.0,
) -> Hit | None:
    """Topmost primitive under the pointer.

    Arcs use a sector test, bars a box test. Lines render as thin strokes, so
    paths resolve to the data point nearest in x (within ``tolerance`` px).
    """
    paths: list[PathSegment] = []
    for prim in reversed(primitives):
        if isinstance(prim, Arc):
            if _arc_contains(prim, pointer):
                return Hit(prim)
        elif isinstance(prim, Bar):
            if _bar_contains(prim, pointer):
                return Hit(prim)
        elif isinstance(prim, PathSegment):
            paths.append(prim)
    if paths:
        return _nearest_path_point(paths, pointer, tolerance)
    return None


# ── Tooltip content and position ──


def tooltip_content(hit: Hit, kind: ChartKind | None = None) -> str:
    """Tooltip text. Breakdown slices put the value on its own line."""
    prim = hit.primitive
    if isinstance(prim, Arc):
        if kind is ChartKind.BREAKDOWN_PIE:
            return f"{prim.label}\nValue: {format_currency(prim.value)}"
        return f"{prim.label}: {format_currency(prim.value)}"
    if isinstance(prim, PathSegment):
        i = hit.index or 0
        label = prim.labels[i] if i < len(prim.labels) else ""
        value = prim.values[i] if i < len(prim.values) else 0.0
        return _series_line(label, prim.name, value)
    return _series_line(prim.label, prim.name, prim.value)


def _series_line(category: str, metric: str, value: float) -> str:
    if not metric:
        return f"{category}: {format_currency(value)}"
    return f"{category}\n{metric.title()}: {format_currency(value)}"


def _anchor(hit: Hit, pointer: tuple[float, float] | None) -> tuple[str, tuple[float, float]]:
    prim = hit.primitive
    if isinstance(prim, Arc):
        return "arc", pointer if pointer is not None else arc_centroid(prim)
    if isinstance(prim, PathSegment):
        return "path", prim.points[hit.index or 0]
    return "bar", prim.top_center


def on_hover(
    hit: Hit,
    pointer: tuple[float, float] | None = None,
    *,
    offset: tuple[float, float] | None = None,
    anchor: tuple[float, float] | None = None,
    kind: ChartKind | None = None,
    config: ChartConfig | None = None,
) -> TooltipState:
    """Visible tooltip for ``hit``. ``anchor`` overrides the per-kind anchor point."""
    config = config or ChartConfig()
    anchor_kind, default_anchor = _anchor(hit, pointer)
    ax, ay = anchor if anchor is not None else default_anchor
    dx, dy = offset if offset is not None else config.tooltip_offsets.get(anchor_kind, (0.0, 0.0))
    return TooltipState(visible=True, x=ax + dx, y=ay + dy, content=tooltip_content(hit, kind))


def on_unhover() -> TooltipState:
    return HIDDEN


def clamp_tooltip(
    state: TooltipState,
    viewport: ViewportState,
    box_size: tuple[float, float],
) -> TooltipState:
    """Keep a tooltip box of ``box_size`` inside the viewport. Opt-in via ChartConfig.tooltip_clamp."""
    if not state.visible:
        return state
    w, h = box_size
    return replace(
        state,
        x=clamp(state.x, 0.0, viewport.width - w),
        y=clamp(state.y, 0.0, viewport.height - h),
    )


# ── State machine ──


@dataclass(frozen=True)
class HoverState:
    target_id: str | None = None

    @property
    def is_hovering(self) -> bool:
        return self.target_id is not None


IDLE = HoverState()


class HoverController:
    """Owns TooltipState; mutated only by enter/leave events."""

    def __init__(self, config: ChartConfig | None = None, kind: ChartKind | None = None) -> None:
        self.config = config or ChartConfig()
        self.kind = kind
        self.state: HoverState = IDLE
        self.tooltip: TooltipState = HIDDEN
        self.viewport: ViewportState | None = None

    def enter(self, hit: Hit, pointer: tuple[float, float] | None = None) -> TooltipState:
        tooltip = on_hover(hit, pointer, kind=self.kind, config=self.config)
        if self.config.tooltip_clamp and self.viewport is not None:
            tooltip = clamp_tooltip(tooltip, self.viewport, self.config.tooltip_box)
        if self.state.target_id != hit.target_id:
            logger.debug("Hover %s -> %s", self.state.target_id or "idle", hit.target_id)
        self.state = HoverState(hit.target_id)
        self.tooltip = tooltip
        return tooltip

    def leave(self, target_id: str | None = None) -> TooltipState:
        """Return to Idle. A leave for a target other than the current one is stale and ignored."""
        if target_id is not None and target_id != self.state.target_id:
            logger.debug("Ignoring stale leave for %s (hovering %s)", target_id, self.state.target_id)
            return self.tooltip
        self.state = IDLE
        self.tooltip = on_unhover()
        return self.tooltip

    def pointer_move(
        self,
        pointer: tuple[float, float],
        primitives: Sequence[GeometryPrimitive],
    ) -> TooltipState:
        """Resolve the pointer to a primitive and emit the matching enter/leave."""
        hit = hit_test(pointer, primitives, tolerance=self.config.line_hit_tolerance)
        if hit is None:
            if self.state.is_hovering:
                return self.leave()
            return self.tooltip
        return self.enter(hit, pointer)

    def reset(self) -> None:
        self.state = IDLE
        self.tooltip = HIDDEN
