"""Pie geometry — proportional arcs clockwise from 12 o'clock."""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence

import numpy as np

from chartengine.errors import EmptySeriesError, InvalidDomainError
from chartengine.geometry.primitives import Arc
from chartengine.utils.geometry import cumulative_angles, polar_to_cartesian

PieValue = tuple[str, float] | Mapping[str, object]


def _label_value(item: PieValue) -> tuple[str, float]:
    if isinstance(item, Mapping):
        return str(item["label"]), float(item["value"])  # type: ignore[arg-type]
    label, value = item
    return str(label), float(value)


def compute_pie(
    values: Sequence[PieValue],
    *,
    colors: Sequence[str] = (),
    inner_radius: float = 0.0,
    outer_radius: float = 1.0,
    center: tuple[float, float] = (0.0, 0.0),
    id_prefix: str = "arc",
) -> tuple[Arc, ...]:
    """One arc per {label, value}, in input order, spans proportional to value / sum.

    Raises EmptySeriesError when the values sum to zero.
    """
    pairs = [_label_value(v) for v in values]
    vals = np.array([v for _, v in pairs], dtype=np.float64)

    if np.any(vals < 0):
        bad = [label for label, v in pairs if v < 0]
        raise InvalidDomainError(f"Pie values must be >= 0, got negatives for {bad}")
    if len(vals) == 0 or float(np.sum(vals)) == 0.0:
        raise EmptySeriesError("Pie values sum to zero; proportions are undefined")
    if inner_radius < 0 or outer_radius < inner_radius:
        raise InvalidDomainError(f"Bad pie radii: inner={inner_radius}, outer={outer_radius}")

    bounds = cumulative_angles(vals)
    arcs = []
    for i, (label, value) in enumerate(pairs):
        arcs.append(
            Arc(
                id=f"{id_prefix}-{i}",
                start_angle=float(bounds[i]),
                end_angle=float(bounds[i + 1]),
                inner_radius=inner_radius,
                outer_radius=outer_radius,
                color=colors[i % len(colors)] if colors else "",
                label=label,
                value=value,
                center=center,
                series=i,
            )
        )
    return tuple(arcs)


def arc_centroid(arc: Arc) -> tuple[float, float]:
    """Mid-angle, mid-radius point; where slice labels are anchored."""
    mid_angle = (arc.start_angle + arc.end_angle) / 2
    mid_radius = (arc.inner_radius + arc.outer_radius) / 2
    return polar_to_cartesian(mid_angle, mid_radius, arc.center)


def percent_labels(arcs: Sequence[Arc]) -> list[str]:
    """Whole-number share of each arc, e.g. ``"55%"``."""
    total = sum(a.value for a in arcs)
    if total == 0:
        return ["0%" for _ in arcs]
    return [f"{math.floor(a.value / total * 100 + 0.5)}%" for a in arcs]
