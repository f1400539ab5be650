from __future__ import annotations

import warnings

import numpy as np
import pytest

from bending.modeling.drawing2d import Arc2D, Line2D
from bending.modeling.fillet import compute_fillet, construction_segments, fillet_path

CORNERS = [
    ((100, 100), (400, 400), (700, 100), 100.0),
    ((700, 100), (400, 400), (100, 100), 100.0),
    ((0, 0), (10, 0), (10, 10), 2.0),
    ((3, -2), (0, 0), (5, 1), 0.5),
    ((-4, 7), (1, 1), (9, 3), 1.5),
    ((0, 0), (50, 5), (0, 10), 3.0),
    ((120, 40), (300, 260), (520, 250), 60.0),
]


def _theta(a, b, c) -> float:
    ba = np.subtract(a, b, dtype=float)
    bc = np.subtract(c, b, dtype=float)
    cos = np.dot(ba, bc) / (np.linalg.norm(ba) * np.linalg.norm(bc))
    return float(np.arccos(np.clip(cos, -1.0, 1.0)))


def test_right_angle_example():
    sol = compute_fillet((100, 100), (400, 400), (700, 100), 100.0)
    b = np.array([400.0, 400.0])

    assert not sol.is_degenerate
    assert np.isclose(sol.interior_angle, 90.0)
    assert np.isclose(sol.sweep_angle, 90.0)
    assert np.isclose(np.linalg.norm(sol.tangent_in - b), 100.0)
    assert np.isclose(np.linalg.norm(sol.tangent_out - b), 100.0)
    assert np.isclose(np.linalg.norm(sol.center - b), 100.0 * np.sqrt(2.0))
    assert np.allclose(sol.center, [400.0, 400.0 - 100.0 * np.sqrt(2.0)])
    assert np.allclose(sol.tangent_in, [400.0 - 50.0 * np.sqrt(2.0), 400.0 - 50.0 * np.sqrt(2.0)])
    assert np.allclose(sol.tangent_out, [400.0 + 50.0 * np.sqrt(2.0), 400.0 - 50.0 * np.sqrt(2.0)])
    # Positive turn: the arc starts at tangent_out.
    assert not sol.starts_at_tangent_in
    assert np.isclose(sol.start_angle, 45.0)
    assert np.isclose(sol.end_angle, 135.0)
    assert np.isclose(sol.tangent_distance, 100.0)
    assert np.isclose(sol.center_distance, 100.0 * np.sqrt(2.0))


@pytest.mark.parametrize("a,b,c,radius", CORNERS)
def test_tangent_points_are_equidistant_from_corner(a, b, c, radius):
    sol = compute_fillet(a, b, c, radius)
    expected = radius / np.tan(_theta(a, b, c) / 2.0)
    assert np.isclose(np.linalg.norm(sol.tangent_in - np.asarray(b)), expected)
    assert np.isclose(np.linalg.norm(sol.tangent_out - np.asarray(b)), expected)
    assert np.isclose(np.linalg.norm(sol.center - np.asarray(b)), radius / np.sin(_theta(a, b, c) / 2.0))


@pytest.mark.parametrize("a,b,c,radius", CORNERS)
def test_tangent_points_lie_on_circle(a, b, c, radius):
    sol = compute_fillet(a, b, c, radius)
    assert np.isclose(np.linalg.norm(sol.tangent_in - sol.center), radius)
    assert np.isclose(np.linalg.norm(sol.tangent_out - sol.center), radius)


@pytest.mark.parametrize("a,b,c,radius", CORNERS)
def test_radii_are_perpendicular_to_segments(a, b, c, radius):
    sol = compute_fillet(a, b, c, radius)
    ba = np.subtract(a, b, dtype=float)
    bc = np.subtract(c, b, dtype=float)
    ba /= np.linalg.norm(ba)
    bc /= np.linalg.norm(bc)
    assert np.isclose(np.dot(sol.tangent_in - sol.center, ba), 0.0, atol=1e-6)
    assert np.isclose(np.dot(sol.tangent_out - sol.center, bc), 0.0, atol=1e-6)


@pytest.mark.parametrize("a,b,c,radius", CORNERS)
def test_sweep_complements_interior_angle(a, b, c, radius):
    sol = compute_fillet(a, b, c, radius)
    assert np.isclose(sol.sweep_angle + np.degrees(_theta(a, b, c)), 180.0)
    assert np.isclose(sol.sweep_angle + sol.interior_angle, 180.0)


@pytest.mark.parametrize("a,b,c,radius", CORNERS)
def test_arc_runs_between_tangent_points_inside_corner(a, b, c, radius):
    sol = compute_fillet(a, b, c, radius)
    raw = sol.arc(from_tangent_in=False)
    first, second = (sol.tangent_in, sol.tangent_out) if sol.starts_at_tangent_in else (sol.tangent_out, sol.tangent_in)
    assert np.allclose(raw.start_point, first)
    assert np.allclose(raw.point_at(sol.start_angle + sol.sweep_angle), second)

    # The short arc bulges toward B; the long one would not.
    mid = raw.point_at(sol.start_angle + sol.sweep_angle / 2.0)
    assert np.isclose(np.linalg.norm(mid - np.asarray(b)), sol.center_distance - radius)

    chained = sol.arc()
    assert np.allclose(chained.start_point, sol.tangent_in)
    assert np.allclose(chained.end_point, sol.tangent_out)
    assert np.isclose(chained.span_deg(), sol.sweep_angle)


@pytest.mark.parametrize("a,b,c,radius", CORNERS)
def test_swapping_ends_mirrors_solution(a, b, c, radius):
    forward = compute_fillet(a, b, c, radius)
    backward = compute_fillet(c, b, a, radius)
    assert np.allclose(forward.center, backward.center)
    assert np.allclose(forward.tangent_in, backward.tangent_out)
    assert np.allclose(forward.tangent_out, backward.tangent_in)
    assert np.isclose(forward.sweep_angle, backward.sweep_angle)
    assert forward.starts_at_tangent_in != backward.starts_at_tangent_in


@pytest.mark.parametrize(
    "a,b,c",
    [
        ((0, 0), (100, 0), (200, 0)),
        ((0, 0), (0, 50), (0, 300)),
        ((10, 10), (10, 10), (50, 0)),
        ((0, 0), (40, 40), (40, 40)),
        ((200, 0), (0, 0), (100, 0)),
        ((0, 200), (0, 0), (0, 100)),
        ((0, 0), (3, 7), (1.5, 3.5)),
        ((0, 0), (3, 7), (6, 14)),
        ((-1.5, 2.25), (0.5, 0.75), (2.5, -0.75)),
        ((0.1, 0.3), (0.7, 2.1), (0.4, 1.2)),
    ],
)
def test_degenerate_corners(a, b, c):
    sol = compute_fillet(a, b, c, 25.0)
    assert sol.is_degenerate
    assert not np.all(np.isfinite(sol.center))
    with pytest.raises(ValueError):
        sol.arc()


def test_off_axis_collinear_corner_falls_back_to_segments():
    path = fillet_path((0, 0), (3, 7), (1.5, 3.5), 10.0)
    assert all(isinstance(seg, Line2D) for seg in path.segments)
    assert construction_segments((3, 7), compute_fillet((0, 0), (3, 7), (1.5, 3.5), 10.0)) == []


def test_degenerate_corner_emits_no_warnings():
    with warnings.catch_warnings():
        warnings.simplefilter("error")
        sol = compute_fillet((0, 0), (100, 0), (200, 0), 100.0)
    assert sol.is_degenerate


def test_nearly_straight_corner_is_not_degenerate():
    sol = compute_fillet((0, 0), (100, 0), (200, 1e-3), 10.0)
    assert not sol.is_degenerate
    assert sol.sweep_angle < 1e-3


@pytest.mark.parametrize("radius", [0.0, -5.0, float("nan"), float("inf")])
def test_invalid_radius(radius):
    with pytest.raises(ValueError):
        compute_fillet((0, 0), (1, 0), (1, 1), radius)


def test_invalid_points():
    with pytest.raises(ValueError):
        compute_fillet((0, 0, 0), (1, 0), (1, 1), 1.0)
    with pytest.raises(ValueError):
        compute_fillet((0, 0), (float("nan"), 0), (1, 1), 1.0)


def test_fillet_path_rounds_corner():
    path = fillet_path((100, 100), (400, 400), (700, 100), 100.0)
    assert [type(seg) for seg in path.segments] == [Line2D, Arc2D, Line2D]
    pts = path.sample(segments_per_circle=128)
    assert np.allclose(pts[0], [100, 100])
    assert np.allclose(pts[-1], [700, 100])
    # Path is continuous: no consecutive gap larger than a chord of the arc.
    gaps = np.linalg.norm(np.diff(pts, axis=0), axis=1)
    assert gaps[1:-1].max() < 10.0
    expected = 2.0 * (300.0 * np.sqrt(2.0) - 100.0) + 100.0 * np.pi / 2.0
    assert np.isclose(path.length(), expected)


def test_fillet_path_falls_back_to_segments():
    path = fillet_path((0, 0), (100, 0), (200, 0), 100.0)
    assert len(path.segments) == 2
    assert all(isinstance(seg, Line2D) for seg in path.segments)
    assert np.allclose(path.segments[0].end, [100, 0])


def test_construction_segments():
    b = (400, 400)
    sol = compute_fillet((100, 100), b, (700, 100), 100.0)
    segments = construction_segments(b, sol)
    assert len(segments) == 5
    assert np.allclose(segments[0].end, sol.center)

    degenerate = compute_fillet((0, 0), (100, 0), (200, 0), 100.0)
    assert construction_segments((100, 0), degenerate) == []
