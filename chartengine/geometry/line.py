"""Line geometry — linear and monotone-X path commands.

Monotone curves are cubic Hermite splines whose tangents are limited
(Fritsch-Carlson) so the curve passes through every point and never leaves
the y-range of the two points it connects. Each Hermite piece is emitted as
one cubic Bezier command.
"""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
from numpy.typing import NDArray

from chartengine.errors import InvalidDomainError
from chartengine.geometry.primitives import PathCommand, PathSegment

CURVE_KINDS = ("linear", "monotone")


def _secant_slopes(xs: NDArray[np.float64], ys: NDArray[np.float64]) -> NDArray[np.float64]:
    h = np.diff(xs)
    dy = np.diff(ys)
    with np.errstate(divide="ignore", invalid="ignore"):
        s = np.where(h != 0, dy / h, 0.0)
    return s


def monotone_tangents(xs: NDArray[np.float64], ys: NDArray[np.float64]) -> NDArray[np.float64]:
    """Tangent at each point for a monotone-X cubic through (xs, ys). Needs >= 3 points."""
    h = np.diff(xs)
    s = _secant_slopes(xs, ys)

    h0, h1 = h[:-1], h[1:]
    s0, s1 = s[:-1], s[1:]
    with np.errstate(divide="ignore", invalid="ignore"):
        p = np.where(h0 + h1 != 0, (s0 * h1 + s1 * h0) / (h0 + h1), 0.0)
    # Zero at local extrema (opposite signs), otherwise bounded by both secants.
    interior = (np.sign(s0) + np.sign(s1)) * np.minimum(
        np.minimum(np.abs(s0), np.abs(s1)), 0.5 * np.abs(p)
    )

    t = np.empty(len(xs), dtype=np.float64)
    t[1:-1] = interior
    # One-sided end tangents from the neighbouring interior tangent.
    t[0] = _end_tangent(h[0], s[0], interior[0])
    t[-1] = _end_tangent(h[-1], s[-1], interior[-1])
    return t


def _end_tangent(h: float, secant: float, neighbour: float) -> float:
    if h == 0:
        return float(neighbour)
    return float((3 * secant - neighbour) / 2)


def _monotone_commands(pts: NDArray[np.float64]) -> list[PathCommand]:
    xs, ys = pts[:, 0], pts[:, 1]
    t = monotone_tangents(xs, ys)
    commands: list[PathCommand] = [("M", float(xs[0]), float(ys[0]))]
    for i in range(len(xs) - 1):
        dx = (xs[i + 1] - xs[i]) / 3
        commands.append(
            (
                "C",
                float(xs[i] + dx),
                float(ys[i] + dx * t[i]),
                float(xs[i + 1] - dx),
                float(ys[i + 1] - dx * t[i + 1]),
                float(xs[i + 1]),
                float(ys[i + 1]),
            )
        )
    return commands


def compute_line_path(
    points: Sequence[tuple[float, float]],
    curve_kind: str = "monotone",
    *,
    color: str = "",
    labels: Sequence[str] = (),
    values: Sequence[float] = (),
    name: str = "",
    series: int = 0,
    id: str = "path-0",
) -> PathSegment:
    """Path through (category_position, scaled_value) points in input order.

    A single point yields a move-only path with no visible segment.
    """
    if curve_kind not in CURVE_KINDS:
        raise InvalidDomainError(f"Unknown curve kind: {curve_kind!r}")
    if not points:
        raise InvalidDomainError("Line path needs at least one point")

    pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    if len(pts) == 1:
        commands: list[PathCommand] = [("M", float(pts[0, 0]), float(pts[0, 1]))]
    elif len(pts) == 2 or curve_kind == "linear":
        commands = [("M", float(pts[0, 0]), float(pts[0, 1]))]
        commands.extend(("L", float(x), float(y)) for x, y in pts[1:])
    else:
        commands = _monotone_commands(pts)

    return PathSegment(
        id=id,
        points=tuple((float(x), float(y)) for x, y in pts),
        curve_kind=curve_kind,
        color=color,
        commands=tuple(commands),
        labels=tuple(labels),
        values=tuple(float(v) for v in values),
        name=name,
        series=series,
    )


def path_d(commands: Sequence[PathCommand], precision: int = 2) -> str:
    """SVG ``d`` attribute for a command list."""
    parts = []
    for cmd in commands:
        op, *coords = cmd
        parts.append(op + ",".join(f"{c:.{precision}f}" for c in coords))
    return "".join(parts)
