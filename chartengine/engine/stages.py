"""Derivation stages, registered in dependency order.

    theme ──────────────┬──────────────┬────────────┐
    layout ── scales ── geometry ── paint      labels     legend
                 └────── axes    └──────────────┘          (layout)

Colour is orthogonal to shape: geometry emits uncoloured primitives and
``paint`` assigns colours, so a theme toggle never re-runs scales or geometry.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from chartengine.engine.context import RenderContext
from chartengine.engine.kinds import ChartKind, Input
from chartengine.engine.layout import compute_margins, layout_legend, plot_area, resolve_dimensions
from chartengine.engine.registry import stage
from chartengine.engine.scales import build_categorical_scale, build_linear_scale
from chartengine.engine.theme import ThemePalette, resolve_theme
from chartengine.errors import EmptySeriesError
from chartengine.geometry.bars import compute_bars
from chartengine.geometry.line import compute_line_path
from chartengine.geometry.pie import arc_centroid, compute_pie, percent_labels
from chartengine.geometry.primitives import Arc, AxisTick, Bar, Marker, PathSegment, TextLabel
from chartengine.utils.formatting import format_number

logger = logging.getLogger(__name__)


def _require(value, name: str):
    if value is None:
        raise RuntimeError(f"Stage input {name!r} has not been derived yet")
    return value


@stage(id="theme", inputs={Input.THEME}, description="Resolve theme palette")
def theme_stage(ctx: RenderContext) -> None:
    ctx.palette = resolve_theme(ctx.theme)


@stage(id="layout", inputs={Input.VIEWPORT}, description="Responsive size, margins and plot area")
def layout_stage(ctx: RenderContext) -> None:
    ctx.viewport = resolve_dimensions(ctx.viewport_width, ctx.kind, ctx.config)
    ctx.margins = compute_margins(ctx.kind)
    ctx.area = plot_area(ctx.viewport, ctx.margins)


@stage(
    id="scales",
    dependencies=["layout"],
    inputs={Input.DATASET},
    description="Categorical and value scales over the plot area",
)
def scales_stage(ctx: RenderContext) -> None:
    ctx.placeholder = None
    ctx.clear_geometry()
    if not ctx.dataset:
        raise EmptySeriesError("Dataset is empty")
    if ctx.kind.is_radial:
        return

    area = _require(ctx.area, "area")
    cfg = ctx.config
    if ctx.kind is ChartKind.BAR:
        kind, padding = "band", cfg.band_padding
    else:
        kind, padding = "point", cfg.point_padding
    ctx.x_scale = build_categorical_scale(ctx.dataset.categories, area.left, area.right, padding, kind)

    # Headroom above the largest value; all-zero data still needs a positive span.
    top = ctx.dataset.max_value(ctx.options.metrics) * cfg.value_headroom
    if top <= 0:
        top = 1.0
    ctx.y_scale = build_linear_scale(0.0, top, area.bottom, area.top, nice=True)
    ctx.baseline_y = ctx.y_scale(0.0)


def _pie_geometry(ctx: RenderContext) -> None:
    area = _require(ctx.area, "area")
    values = [(m.title(), ctx.dataset.total(m)) for m in ctx.options.metrics]
    radius = min(area.width, area.height) / 2
    ctx.primitives = compute_pie(values, outer_radius=radius, center=area.center, id_prefix="arc")


def _breakdown_pie_geometry(ctx: RenderContext) -> None:
    area = _require(ctx.area, "area")
    viewport = _require(ctx.viewport, "viewport")
    metric = ctx.options.metrics[0]
    values = [(p.category, p.value(metric)) for p in ctx.dataset]
    radius = min(viewport.width, viewport.height) / ctx.config.breakdown_radius_divisor
    outer = max(radius - ctx.config.breakdown_radius_gap, 0.0)
    ctx.primitives = compute_pie(values, outer_radius=outer, center=area.center, id_prefix=f"arc-{metric}")


def _line_geometry(ctx: RenderContext) -> None:
    x_scale = _require(ctx.x_scale, "x_scale")
    y_scale = _require(ctx.y_scale, "y_scale")
    categories = ctx.dataset.categories
    paths: list[PathSegment] = []
    markers: list[Marker] = []
    for i, metric in enumerate(ctx.options.metrics):
        values = ctx.dataset.series(metric)
        points = [(x_scale(c), y_scale(v)) for c, v in zip(categories, values)]
        paths.append(
            compute_line_path(
                points,
                ctx.config.curve_kind,
                labels=categories,
                values=values,
                name=metric,
                series=i,
                id=f"line-{metric}",
            )
        )
        markers.extend(Marker(x, y, ctx.config.marker_radius, "", series=i) for x, y in points)
    ctx.primitives = tuple(paths)
    ctx.markers = tuple(markers)


def _bar_geometry(ctx: RenderContext) -> None:
    x_scale = _require(ctx.x_scale, "x_scale")
    y_scale = _require(ctx.y_scale, "y_scale")
    bars: list[Bar] = []
    for i, metric in enumerate(ctx.options.metrics):
        points = list(zip(ctx.dataset.categories, ctx.dataset.series(metric)))
        bars.extend(
            compute_bars(
                points,
                x_scale,
                y_scale,
                ctx.baseline_y if ctx.baseline_y is not None else y_scale(0.0),
                name=metric,
                series=i,
                id_prefix=f"bar-{metric}",
            )
        )
    ctx.primitives = tuple(bars)


_GEOMETRY = {
    ChartKind.PIE: _pie_geometry,
    ChartKind.BREAKDOWN_PIE: _breakdown_pie_geometry,
    ChartKind.LINE: _line_geometry,
    ChartKind.BAR: _bar_geometry,
}


@stage(id="geometry", dependencies=["scales"], description="Arcs, paths and bars")
def geometry_stage(ctx: RenderContext) -> None:
    _GEOMETRY[ctx.kind](ctx)


@stage(id="axes", dependencies=["scales"], description="Axis tick descriptors")
def axes_stage(ctx: RenderContext) -> None:
    if ctx.x_scale is None or ctx.y_scale is None:
        ctx.ticks = ()
        return
    area = _require(ctx.area, "area")
    ticks = [AxisTick("x", c, c, ctx.x_scale(c), area.bottom) for c in ctx.x_scale.categories]
    ticks.extend(
        AxisTick("y", v, format_number(v), area.left, ctx.y_scale(v))
        for v in ctx.y_scale.ticks(ctx.config.y_tick_count)
    )
    ctx.ticks = tuple(ticks)


def _series_color(ctx: RenderContext, palette: ThemePalette, series: int) -> str:
    if ctx.kind is ChartKind.BREAKDOWN_PIE:
        scheme = palette.alt_category_colors if ctx.options.alternate_scheme else palette.category_colors
        return scheme[series % len(scheme)]
    if ctx.kind is ChartKind.BAR:
        return palette.bar_gradient[0]
    return palette.series_colors[series % len(palette.series_colors)]


@stage(id="paint", dependencies=["geometry", "theme"], description="Assign palette colours")
def paint_stage(ctx: RenderContext) -> None:
    palette = _require(ctx.palette, "palette")
    ctx.primitives = tuple(replace(p, color=_series_color(ctx, palette, p.series)) for p in ctx.primitives)
    ctx.markers = tuple(replace(m, color=_series_color(ctx, palette, m.series)) for m in ctx.markers)


@stage(id="legend", dependencies=["layout", "theme"], description="Legend slots")
def legend_stage(ctx: RenderContext) -> None:
    palette = _require(ctx.palette, "palette")
    if ctx.kind is ChartKind.BREAKDOWN_PIE:
        # Slices carry their own category labels.
        ctx.legend = ()
        return
    metrics = ctx.options.metrics
    if ctx.kind is ChartKind.BAR:
        labels = [f"Monthly {m.title()}" for m in metrics]
    else:
        labels = [m.title() for m in metrics]
    colors = [_series_color(ctx, palette, i) for i in range(len(labels))]
    ctx.legend = layout_legend(
        labels,
        colors,
        _require(ctx.viewport, "viewport"),
        _require(ctx.margins, "margins"),
        ctx.config,
    )


@stage(id="labels", dependencies=["geometry", "theme"], description="Slice and bar data labels")
def labels_stage(ctx: RenderContext) -> None:
    palette = _require(ctx.palette, "palette")
    arcs = [p for p in ctx.primitives if isinstance(p, Arc)]
    labels: list[TextLabel] = []
    if ctx.kind is ChartKind.PIE:
        for arc, text in zip(arcs, percent_labels(arcs)):
            x, y = arc_centroid(arc)
            labels.append(TextLabel(text, x, y, color=palette.text))
    elif ctx.kind is ChartKind.BREAKDOWN_PIE:
        for arc in arcs:
            if arc.span <= 0:
                continue
            x, y = arc_centroid(arc)
            labels.append(TextLabel(arc.label, x, y, color=palette.slice_stroke))
    elif ctx.kind is ChartKind.BAR:
        for bar in ctx.primitives:
            if isinstance(bar, Bar):
                cx, top = bar.top_center
                labels.append(
                    TextLabel(format_number(bar.value), cx, top - ctx.config.bar_label_gap, color=palette.text)
                )
    ctx.labels = tuple(labels)
