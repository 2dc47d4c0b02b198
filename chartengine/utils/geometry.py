"""Leaf-node geometry helpers. No engine imports.

Angles follow the chart convention: 0 at 12 o'clock, increasing clockwise,
in an SVG coordinate system (y grows downward).
"""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray

TAU = 2 * math.pi


def polar_to_cartesian(
    angle: float,
    radius: float,
    center: tuple[float, float] = (0.0, 0.0),
) -> tuple[float, float]:
    """Point at ``radius`` from ``center``, ``angle`` radians clockwise from 12 o'clock."""
    cx, cy = center
    return (cx + radius * math.sin(angle), cy - radius * math.cos(angle))


def clockwise_angle(point: tuple[float, float], center: tuple[float, float]) -> float:
    """Inverse of polar_to_cartesian: angle in [0, 2π) of ``point`` around ``center``."""
    dx = point[0] - center[0]
    dy = point[1] - center[1]
    return math.atan2(dx, -dy) % TAU


def distance(a: tuple[float, float], b: tuple[float, float]) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])


def clamp(value: float, lo: float, hi: float) -> float:
    if hi < lo:
        return lo
    return max(lo, min(hi, value))


def cumulative_angles(values: NDArray[np.float64], start: float = 0.0) -> NDArray[np.float64]:
    """Angle boundaries for proportional slices: n values -> n + 1 boundaries.

    The last boundary is pinned to ``start + 2π`` so the slices close exactly.
    """
    total = float(np.sum(values))
    bounds = start + np.concatenate([[0.0], np.cumsum(values)]) * (TAU / total)
    bounds[-1] = start + TAU
    return bounds
