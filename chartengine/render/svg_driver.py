"""Reference render driver: RenderFrame -> SVG markup.

The engine never draws; this driver is one binding of the frame contract
(primitives + ticks + legend + labels) to a concrete surface.
"""

from __future__ import annotations

import logging
import math
from typing import Any

from chartengine.engine.context import RenderFrame
from chartengine.engine.kinds import ChartKind
from chartengine.geometry.line import path_d
from chartengine.geometry.primitives import Arc, AxisTick, Bar, PathSegment
from chartengine.render.serializer import serialize_svg
from chartengine.utils.geometry import TAU, polar_to_cartesian

logger = logging.getLogger(__name__)

BAR_GRADIENT_ID = "bar-gradient"

# Arcs within this many radians of a full turn are drawn as two half circles;
# a single SVG arc command cannot close on its own start point.
_FULL_CIRCLE_EPS = 1e-9

_STROKE_WIDTH = "2"
_TICK_SIZE = 6.0
_LEGEND_TEXT_DX = 20.0
_LEGEND_TEXT_DY = 12.0


def _fmt(v: float) -> str:
    return f"{v:.2f}"


def arc_path_d(arc: Arc) -> str:
    """SVG path for a pie slice (inner_radius 0) or annular sector."""
    r0, r1 = arc.inner_radius, arc.outer_radius
    cx, cy = arc.center
    a0, a1 = arc.start_angle, arc.end_angle

    if arc.span >= TAU - _FULL_CIRCLE_EPS:
        mid = a0 + math.pi
        ox0, oy0 = polar_to_cartesian(a0, r1, arc.center)
        ox1, oy1 = polar_to_cartesian(mid, r1, arc.center)
        d = (
            f"M{_fmt(ox0)},{_fmt(oy0)}"
            f"A{_fmt(r1)},{_fmt(r1)},0,1,1,{_fmt(ox1)},{_fmt(oy1)}"
            f"A{_fmt(r1)},{_fmt(r1)},0,1,1,{_fmt(ox0)},{_fmt(oy0)}Z"
        )
        if r0 > 0:
            ix0, iy0 = polar_to_cartesian(a0, r0, arc.center)
            ix1, iy1 = polar_to_cartesian(mid, r0, arc.center)
            d += (
                f"M{_fmt(ix0)},{_fmt(iy0)}"
                f"A{_fmt(r0)},{_fmt(r0)},0,1,0,{_fmt(ix1)},{_fmt(iy1)}"
                f"A{_fmt(r0)},{_fmt(r0)},0,1,0,{_fmt(ix0)},{_fmt(iy0)}Z"
            )
        return d

    large = 1 if arc.span > math.pi else 0
    sx, sy = polar_to_cartesian(a0, r1, arc.center)
    ex, ey = polar_to_cartesian(a1, r1, arc.center)
    d = f"M{_fmt(sx)},{_fmt(sy)}A{_fmt(r1)},{_fmt(r1)},0,{large},1,{_fmt(ex)},{_fmt(ey)}"
    if r0 > 0:
        ix, iy = polar_to_cartesian(a1, r0, arc.center)
        jx, jy = polar_to_cartesian(a0, r0, arc.center)
        d += f"L{_fmt(ix)},{_fmt(iy)}A{_fmt(r0)},{_fmt(r0)},0,{large},0,{_fmt(jx)},{_fmt(jy)}Z"
    else:
        d += f"L{_fmt(cx)},{_fmt(cy)}Z"
    return d


class SvgRenderDriver:
    """Draws frames as standalone SVG documents."""

    def __init__(self, font_size: str = "0.9rem") -> None:
        self.font_size = font_size

    def render(self, frame: RenderFrame) -> str:
        defs = self._defs(frame)
        elements = self.elements(frame)
        svg = serialize_svg(
            elements,
            frame.viewport.width,
            frame.viewport.height,
            title=frame.title,
            background=frame.palette.background,
            defs=defs,
        )
        logger.debug("Rendered %s frame %d: %d elements", frame.kind.value, frame.generation, len(elements))
        return svg

    def elements(self, frame: RenderFrame) -> list[dict[str, Any]]:
        out: list[dict[str, Any]] = []
        if frame.ticks:
            out.extend(self._axes(frame))
        for prim in frame.primitives:
            elem = self._primitive(frame, prim)
            if elem is not None:
                out.append(elem)
        for m in frame.markers:
            out.append({"tag": "circle", "cx": _fmt(m.x), "cy": _fmt(m.y), "r": _fmt(m.radius), "fill": m.color})
        for label in frame.labels:
            out.append(self._text(label.text, label.x, label.y, label.color, anchor=label.anchor, bold=True))
        if frame.legend:
            out.append(self._legend(frame))
        if frame.placeholder is not None:
            p = frame.placeholder
            out.append(self._text(p.text, p.x, p.y, p.color, anchor="middle", css_class="placeholder"))
        return out

    # ── Pieces ──

    def _defs(self, frame: RenderFrame) -> list[dict[str, Any]]:
        if frame.kind is not ChartKind.BAR:
            return []
        top, bottom = frame.palette.bar_gradient
        return [
            {
                "tag": "linearGradient",
                "id": BAR_GRADIENT_ID,
                "x1": "0%",
                "x2": "0%",
                "y1": "0%",
                "y2": "100%",
                "children": [
                    {"tag": "stop", "offset": "0%", "stop-color": top},
                    {"tag": "stop", "offset": "100%", "stop-color": bottom},
                ],
            }
        ]

    def _primitive(self, frame: RenderFrame, prim) -> dict[str, Any] | None:
        if isinstance(prim, Arc):
            elem = {"tag": "path", "class": "slice", "id": prim.id, "d": arc_path_d(prim), "fill": prim.color}
            if frame.kind is ChartKind.BREAKDOWN_PIE:
                elem["stroke"] = frame.palette.slice_stroke
                elem["stroke-width"] = _STROKE_WIDTH
            return elem
        if isinstance(prim, PathSegment):
            return {
                "tag": "path",
                "class": "line",
                "id": prim.id,
                "d": path_d(prim.commands),
                "fill": "none",
                "stroke": prim.color,
                "stroke-width": _STROKE_WIDTH,
            }
        if isinstance(prim, Bar):
            fill = f"url(#{BAR_GRADIENT_ID})" if frame.kind is ChartKind.BAR else prim.color
            return {
                "tag": "rect",
                "class": "bar",
                "id": prim.id,
                "x": _fmt(prim.x),
                "y": _fmt(prim.y),
                "width": _fmt(prim.width),
                "height": _fmt(prim.height),
                "fill": fill,
            }
        return None

    def _axes(self, frame: RenderFrame) -> list[dict[str, Any]]:
        color = frame.palette.axis
        x_ticks = [t for t in frame.ticks if t.axis == "x"]
        y_ticks = [t for t in frame.ticks if t.axis == "y"]
        groups = []
        if x_ticks:
            groups.append({"tag": "g", "class": "x-axis", "children": self._tick_marks(x_ticks, color, frame)})
        if y_ticks:
            groups.append({"tag": "g", "class": "y-axis", "children": self._tick_marks(y_ticks, color, frame)})
        return groups

    def _tick_marks(self, ticks: list[AxisTick], color: str, frame: RenderFrame) -> list[dict[str, Any]]:
        children: list[dict[str, Any]] = []
        for t in ticks:
            if t.axis == "x":
                x2, y2 = t.x, t.y + _TICK_SIZE
                tx, ty, anchor = t.x, t.y + _TICK_SIZE * 3, "middle"
            else:
                x2, y2 = t.x - _TICK_SIZE, t.y
                tx, ty, anchor = t.x - _TICK_SIZE * 1.5, t.y + 4, "end"
            children.append(
                {"tag": "line", "x1": _fmt(t.x), "y1": _fmt(t.y), "x2": _fmt(x2), "y2": _fmt(y2), "stroke": color}
            )
            children.append(self._text(t.label, tx, ty, frame.palette.text, anchor=anchor, bold=True))
        return children

    def _legend(self, frame: RenderFrame) -> dict[str, Any]:
        children: list[dict[str, Any]] = []
        for entry in frame.legend:
            fill = f"url(#{BAR_GRADIENT_ID})" if frame.kind is ChartKind.BAR else entry.color
            children.append(
                {
                    "tag": "rect",
                    "x": _fmt(entry.x),
                    "y": _fmt(entry.y),
                    "width": _fmt(entry.swatch_size),
                    "height": _fmt(entry.swatch_size),
                    "fill": fill,
                }
            )
            children.append(
                self._text(
                    entry.label,
                    entry.x + _LEGEND_TEXT_DX,
                    entry.y + _LEGEND_TEXT_DY,
                    frame.palette.text,
                    anchor="start",
                    bold=True,
                )
            )
        return {"tag": "g", "class": "legend", "children": children}

    def _text(
        self,
        text: str,
        x: float,
        y: float,
        color: str,
        *,
        anchor: str = "middle",
        bold: bool = False,
        css_class: str | None = None,
    ) -> dict[str, Any]:
        style = f"font-size: {self.font_size};" + (" font-weight: bold;" if bold else "")
        return {
            "tag": "text",
            "class": css_class,
            "x": _fmt(x),
            "y": _fmt(y),
            "text-anchor": anchor,
            "fill": color,
            "style": style,
            "text": text,
        }
