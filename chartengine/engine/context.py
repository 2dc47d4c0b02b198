"""RenderContext — the working state one derivation pass flows through.

Inputs (dataset, viewport width, theme selector) are set by the session;
everything else is derived by stages. A pass works on a fork of the last
good context and is published as an immutable RenderFrame only when it
completes.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from chartengine.data.models import Dataset
from chartengine.data.sample import METRICS
from chartengine.engine.config import ChartConfig
from chartengine.engine.kinds import ChartKind
from chartengine.engine.layout import Margins, PlotArea, ViewportState
from chartengine.engine.scales import CategoricalScale, LinearScale
from chartengine.engine.theme import ThemePalette, ThemeSelector
from chartengine.geometry.primitives import (
    AxisTick,
    GeometryPrimitive,
    LegendEntry,
    Marker,
    TextLabel,
)


@dataclass(frozen=True)
class ChartOptions:
    """What a chart shows: which metrics, and which colour scheme for category slices."""

    kind: ChartKind
    metrics: tuple[str, ...] = METRICS
    alternate_scheme: bool = False
    title: str = ""

    @classmethod
    def for_kind(cls, kind: ChartKind | str, metric: str | None = None) -> ChartOptions:
        kind = ChartKind(kind)
        if kind is ChartKind.BAR:
            metric = metric or "revenue"
            return cls(kind, (metric,), title=f"Monthly {metric.title()} Chart")
        if kind is ChartKind.BREAKDOWN_PIE:
            metric = metric or "sales"
            return cls(
                kind,
                (metric,),
                alternate_scheme=metric != "sales",
                title=f"{metric.title()} Distribution",
            )
        if kind is ChartKind.LINE:
            return cls(kind, title="Monthly Sales & Revenue Line Chart")
        return cls(kind, title="Sales vs Revenue Distribution")


@dataclass(frozen=True)
class RenderFrame:
    """Consistent snapshot of one successful pass; what the render driver draws."""

    kind: ChartKind
    generation: int
    viewport: ViewportState
    margins: Margins
    palette: ThemePalette
    primitives: tuple[GeometryPrimitive, ...]
    markers: tuple[Marker, ...]
    ticks: tuple[AxisTick, ...]
    legend: tuple[LegendEntry, ...]
    labels: tuple[TextLabel, ...]
    placeholder: TextLabel | None = None
    title: str = ""
    baseline_y: float | None = None

    @property
    def is_placeholder(self) -> bool:
        return self.placeholder is not None


@dataclass
class RenderContext:
    """Shared state flowing through the derivation stages."""

    options: ChartOptions
    config: ChartConfig = field(default_factory=ChartConfig)

    # --- Inputs ---
    dataset: Dataset = field(default_factory=Dataset)
    viewport_width: float = 1200.0
    theme: ThemeSelector = ThemeSelector.LIGHT

    # --- Derived by stages ---
    palette: ThemePalette | None = None
    viewport: ViewportState | None = None
    margins: Margins | None = None
    area: PlotArea | None = None
    x_scale: CategoricalScale | None = None
    y_scale: LinearScale | None = None
    baseline_y: float | None = None
    primitives: tuple[GeometryPrimitive, ...] = ()
    markers: tuple[Marker, ...] = ()
    ticks: tuple[AxisTick, ...] = ()
    legend: tuple[LegendEntry, ...] = ()
    labels: tuple[TextLabel, ...] = ()
    placeholder: str | None = None

    # --- Pass metadata ---
    generation: int = 0
    completed_stages: list[str] = field(default_factory=list)
    skipped_stages: list[str] = field(default_factory=list)

    @property
    def kind(self) -> ChartKind:
        return self.options.kind

    def fork(self) -> RenderContext:
        """Working copy for the next pass. Derived values are immutable, so a shallow copy suffices."""
        return replace(self, completed_stages=[], skipped_stages=[])

    def clear_geometry(self) -> None:
        self.x_scale = None
        self.y_scale = None
        self.baseline_y = None
        self.primitives = ()
        self.markers = ()
        self.ticks = ()
        self.labels = ()

    def to_frame(self) -> RenderFrame:
        if self.palette is None or self.viewport is None or self.margins is None:
            raise RuntimeError("Context has not completed a pass with theme and layout")
        placeholder = None
        if self.placeholder is not None:
            cx = self.viewport.width / 2
            cy = self.viewport.height / 2
            placeholder = TextLabel(self.placeholder, cx, cy, color=self.palette.text, role="placeholder")
        return RenderFrame(
            kind=self.kind,
            generation=self.generation,
            viewport=self.viewport,
            margins=self.margins,
            palette=self.palette,
            primitives=self.primitives,
            markers=self.markers,
            ticks=self.ticks,
            legend=self.legend,
            labels=self.labels,
            placeholder=placeholder,
            title=self.options.title,
            baseline_y=self.baseline_y,
        )
