"""Tests for line path commands and monotone tangents."""

from __future__ import annotations

import numpy as np
import pytest

from chartengine.errors import InvalidDomainError
from chartengine.geometry.line import compute_line_path, monotone_tangents, path_d


ZIGZAG = [(0, 100), (50, 20), (100, 80), (150, 10), (200, 90), (250, 40)]


def test_single_point_is_move_only():
    path = compute_line_path([(10, 20)])
    assert path.commands == (("M", 10.0, 20.0),)
    assert not path.has_visible_segment


def test_two_points_draw_straight_segment():
    path = compute_line_path([(0, 0), (100, 50)], "monotone")
    assert [c[0] for c in path.commands] == ["M", "L"]
    assert path.has_visible_segment


def test_linear_curve_uses_line_commands():
    path = compute_line_path(ZIGZAG, "linear")
    assert [c[0] for c in path.commands] == ["M"] + ["L"] * (len(ZIGZAG) - 1)


def test_monotone_passes_through_every_point():
    path = compute_line_path(ZIGZAG, "monotone")
    ops = [c[0] for c in path.commands]
    assert ops == ["M"] + ["C"] * (len(ZIGZAG) - 1)
    endpoints = [path.commands[0][1:]] + [c[5:] for c in path.commands[1:]]
    assert endpoints == [(float(x), float(y)) for x, y in ZIGZAG]


def test_monotone_control_points_stay_within_segment_bounds():
    path = compute_line_path(ZIGZAG, "monotone")
    for (x0, y0), (x1, y1), cmd in zip(ZIGZAG, ZIGZAG[1:], path.commands[1:]):
        _, c1x, c1y, c2x, c2y, _, _ = cmd
        lo, hi = min(y0, y1), max(y0, y1)
        assert lo - 1e-9 <= c1y <= hi + 1e-9
        assert lo - 1e-9 <= c2y <= hi + 1e-9
        assert x0 < c1x < c2x < x1


def test_tangent_is_zero_at_local_extremum():
    xs = np.array([0.0, 1.0, 2.0])
    ys = np.array([0.0, 5.0, 0.0])
    t = monotone_tangents(xs, ys)
    assert t[1] == pytest.approx(0.0)


def test_tangents_on_straight_line_match_slope():
    xs = np.array([0.0, 1.0, 2.0, 3.0])
    ys = np.array([0.0, 2.0, 4.0, 6.0])
    t = monotone_tangents(xs, ys)
    np.testing.assert_allclose(t, [2.0, 2.0, 2.0, 2.0])


def test_metadata_is_carried():
    path = compute_line_path(
        [(0, 10), (10, 20), (20, 5)],
        labels=["Jan", "Feb", "Mar"],
        values=[100, 200, 50],
        name="sales",
        series=1,
        id="line-sales",
    )
    assert path.id == "line-sales"
    assert path.labels == ("Jan", "Feb", "Mar")
    assert path.values == (100.0, 200.0, 50.0)
    assert path.series == 1


def test_unknown_curve_kind():
    with pytest.raises(InvalidDomainError):
        compute_line_path([(0, 0), (1, 1)], "cardinal")


def test_empty_points():
    with pytest.raises(InvalidDomainError):
        compute_line_path([])


def test_path_d_formatting():
    d = path_d([("M", 0, 0), ("L", 10.5, 20), ("C", 1, 2, 3, 4, 5, 6)])
    assert d == "M0.00,0.00L10.50,20.00C1.00,2.00,3.00,4.00,5.00,6.00"
