"""Geometry generators: pure functions from scaled data to shape primitives."""

from chartengine.geometry.bars import compute_bars
from chartengine.geometry.line import compute_line_path
from chartengine.geometry.pie import arc_centroid, compute_pie
from chartengine.geometry.primitives import Arc, Bar, GeometryPrimitive, PathSegment

__all__ = [
    "Arc",
    "Bar",
    "GeometryPrimitive",
    "PathSegment",
    "arc_centroid",
    "compute_bars",
    "compute_line_path",
    "compute_pie",
]
