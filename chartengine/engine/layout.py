"""Layout engine — responsive chart size, margins, plot area and legend slots.

Margins are always subtracted before any scale is built; scales only ever
see the PlotArea.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from chartengine.engine.config import ChartConfig
from chartengine.engine.kinds import ChartKind
from chartengine.errors import InvalidDomainError
from chartengine.geometry.primitives import LegendEntry


@dataclass(frozen=True)
class ViewportState:
    width: float
    height: float


@dataclass(frozen=True)
class Margins:
    top: float
    right: float
    bottom: float
    left: float


@dataclass(frozen=True)
class PlotArea:
    """Inner rectangle left after margins: x grows right, y grows down."""

    left: float
    top: float
    right: float
    bottom: float

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top

    @property
    def center(self) -> tuple[float, float]:
        return ((self.left + self.right) / 2, (self.top + self.bottom) / 2)


_MARGINS: dict[ChartKind, Margins] = {
    ChartKind.LINE: Margins(top=60, right=50, bottom=60, left=60),
    ChartKind.BAR: Margins(top=40, right=40, bottom=80, left=80),
    # Pies reserve the top band for the legend.
    ChartKind.PIE: Margins(top=40, right=10, bottom=10, left=10),
    ChartKind.BREAKDOWN_PIE: Margins(top=10, right=10, bottom=10, left=10),
}


def _full_size(kind: ChartKind, config: ChartConfig) -> tuple[float, float]:
    if kind is ChartKind.PIE:
        return (config.pie_size, config.pie_size)
    if kind is ChartKind.BREAKDOWN_PIE:
        return (config.breakdown_pie_size, config.breakdown_pie_size)
    return (config.cartesian_width, config.cartesian_width * config.cartesian_aspect)


def _min_size(kind: ChartKind, config: ChartConfig) -> tuple[float, float]:
    """Smallest viewport that still leaves ``min_plot_size`` inside the margins."""
    m = _MARGINS[kind]
    min_w = m.left + m.right + config.min_plot_size
    min_h = m.top + m.bottom + config.min_plot_size
    if kind.is_radial:
        side = max(min_w, min_h)
        return (side, side)
    return (min_w, min_h)


def resolve_dimensions(
    viewport_width: float,
    kind: ChartKind,
    config: ChartConfig | None = None,
) -> ViewportState:
    """Full size at or above the breakpoint; proportionally smaller below it.

    Narrow viewports are floored at the size that keeps a usable plot area,
    so the result is monotonic non-decreasing in viewport_width and
    continuous at the breakpoint.
    """
    config = config or ChartConfig()
    if viewport_width < 0:
        raise InvalidDomainError(f"Viewport width must be >= 0, got {viewport_width}")

    kind = ChartKind(kind)
    full_w, full_h = _full_size(kind, config)
    if viewport_width >= config.breakpoint_width:
        return ViewportState(full_w, full_h)
    factor = viewport_width / config.breakpoint_width
    min_w, min_h = _min_size(kind, config)
    return ViewportState(min(full_w, max(full_w * factor, min_w)), min(full_h, max(full_h * factor, min_h)))


def compute_margins(kind: ChartKind) -> Margins:
    return _MARGINS[ChartKind(kind)]


def plot_area(viewport: ViewportState, margins: Margins) -> PlotArea:
    area = PlotArea(
        left=margins.left,
        top=margins.top,
        right=viewport.width - margins.right,
        bottom=viewport.height - margins.bottom,
    )
    if area.width <= 0 or area.height <= 0:
        raise InvalidDomainError(
            f"Viewport {viewport.width:.0f}x{viewport.height:.0f} leaves no room inside margins"
        )
    return area


def layout_legend(
    labels: Sequence[str],
    colors: Sequence[str],
    viewport: ViewportState,
    margins: Margins,
    config: ChartConfig | None = None,
) -> tuple[LegendEntry, ...]:
    """Left-to-right fixed-width slots, centred horizontally above the plot area."""
    config = config or ChartConfig()
    total = len(labels) * config.legend_slot_width
    x0 = viewport.width / 2 - total / 2
    y = margins.top - config.legend_offset
    return tuple(
        LegendEntry(
            label=label,
            color=colors[i % len(colors)] if colors else "",
            x=x0 + i * config.legend_slot_width,
            y=y,
            swatch_size=config.legend_swatch_size,
            series=i,
        )
        for i, label in enumerate(labels)
    )
