"""Geometry primitives — drawable shape descriptors independent of any renderer.

All primitives are frozen; a theme change swaps colours with
``dataclasses.replace`` rather than mutating shapes.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

PathCommand = tuple  # ("M", x, y) | ("L", x, y) | ("C", x1, y1, x2, y2, x, y)


@dataclass(frozen=True)
class Arc:
    id: str
    start_angle: float
    end_angle: float
    inner_radius: float
    outer_radius: float
    color: str
    label: str
    value: float
    center: tuple[float, float] = (0.0, 0.0)
    series: int = 0

    @property
    def span(self) -> float:
        return self.end_angle - self.start_angle


@dataclass(frozen=True)
class PathSegment:
    id: str
    points: tuple[tuple[float, float], ...]
    curve_kind: str
    color: str
    commands: tuple[PathCommand, ...] = ()
    labels: tuple[str, ...] = ()
    values: tuple[float, ...] = ()
    name: str = ""
    series: int = 0

    @property
    def has_visible_segment(self) -> bool:
        return len(self.points) >= 2


@dataclass(frozen=True)
class Bar:
    id: str
    x: float
    y: float
    width: float
    height: float
    color: str
    label: str
    value: float
    name: str = ""
    series: int = 0

    @property
    def bounds(self) -> tuple[float, float, float, float]:
        return (self.x, self.y, self.x + self.width, self.y + self.height)

    @property
    def top_center(self) -> tuple[float, float]:
        return (self.x + self.width / 2, self.y)


GeometryPrimitive = Union[Arc, PathSegment, Bar]


# --- Auxiliary render descriptors ---


@dataclass(frozen=True)
class Marker:
    """Data point dot drawn on a line."""

    x: float
    y: float
    radius: float
    color: str
    series: int = 0


@dataclass(frozen=True)
class AxisTick:
    axis: str  # "x" or "y"
    value: float | str
    label: str
    x: float
    y: float


@dataclass(frozen=True)
class LegendEntry:
    label: str
    color: str
    x: float
    y: float
    swatch_size: float
    series: int = 0


@dataclass(frozen=True)
class TextLabel:
    text: str
    x: float
    y: float
    anchor: str = "middle"
    color: str = ""
    role: str = "data"  # "data" | "placeholder"
