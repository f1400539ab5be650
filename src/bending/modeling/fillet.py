"""Corner fillet construction for a single A-B-C corner."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from .drawing2d import Arc2D, Line2D, Path2D, _require_vec2


_COLLINEAR_TOL = 1e-9


def _normalize(v: np.ndarray) -> np.ndarray:
    # Zero-length input yields NaN components, which mark the corner as degenerate.
    return v / np.linalg.norm(v)


def _cross_z(u: np.ndarray, v: np.ndarray) -> float:
    """Z component of the cross product of two xy-plane vectors."""
    return float(np.cross(np.append(u, 0.0), np.append(v, 0.0))[2])


def _require_radius(radius: float) -> float:
    r = float(radius)
    if not np.isfinite(r) or r <= 0:
        raise ValueError("radius must be positive.")
    return r


@dataclass(frozen=True)
class FilletSolution:
    """Arc tangent to B->A and B->C with a fixed radius.

    Angles are in degrees. The arc runs from ``start_angle`` to
    ``start_angle + sweep_angle`` by increasing ``atan2`` angle.
    """

    center: np.ndarray
    tangent_in: np.ndarray
    tangent_out: np.ndarray
    start_angle: float
    sweep_angle: float
    radius: float
    interior_angle: float
    is_degenerate: bool
    # Whether start_angle points at tangent_in (turn with negative cross product).
    starts_at_tangent_in: bool = False

    @property
    def end_angle(self) -> float:
        return self.start_angle + self.sweep_angle

    @property
    def tangent_distance(self) -> float:
        return self.radius / np.tan(np.radians(self.interior_angle) / 2.0)

    @property
    def center_distance(self) -> float:
        return self.radius / np.sin(np.radians(self.interior_angle) / 2.0)

    def arc(self, from_tangent_in: bool = True) -> Arc2D:
        """Return the fillet arc.

        With ``from_tangent_in`` the arc is oriented tangent_in -> tangent_out so it
        chains with A -> tangent_in. Otherwise it follows the raw start/sweep pair.
        """

        if self.is_degenerate:
            raise ValueError("Degenerate corner has no fillet arc.")
        if not from_tangent_in or self.starts_at_tangent_in:
            return Arc2D(
                center=self.center,
                radius=self.radius,
                start_angle_deg=self.start_angle,
                end_angle_deg=self.end_angle,
                clockwise=False,
            )
        return Arc2D(
            center=self.center,
            radius=self.radius,
            start_angle_deg=self.end_angle,
            end_angle_deg=self.start_angle,
            clockwise=True,
        )


def compute_fillet(
    a: Sequence[float],
    b: Sequence[float],
    c: Sequence[float],
    radius: float,
) -> FilletSolution:
    """Fillet the corner A-B-C with a circle of ``radius``.

    Collinear or coincident points never raise; the returned solution has
    ``is_degenerate`` set and non-finite center/angles instead.
    """

    a = _require_vec2(a, "a")
    b = _require_vec2(b, "b")
    c = _require_vec2(c, "c")
    r = _require_radius(radius)

    with np.errstate(divide="ignore", invalid="ignore"):
        nba = _normalize(a - b)
        nbc = _normalize(c - b)
        theta = float(np.arccos(np.clip(np.dot(nba, nbc), -1.0, 1.0)))
        nbd = _normalize((nba + nbc) / 2.0)

        center = b + (r / np.sin(theta / 2.0)) * nbd
        tangent_in = b + (r / np.tan(theta / 2.0)) * nba
        tangent_out = b + (r / np.tan(theta / 2.0)) * nbc

        turn = _cross_z(nba, nbc)
        if abs(turn) <= _COLLINEAR_TOL:
            # arccos is ill-conditioned near +-1; the cross product still sees a straight corner.
            center = np.full(2, np.nan)
        from_in = turn < 0
        ref = tangent_in if from_in else tangent_out
        direction = ref - center
        start = float(np.degrees(np.arctan2(direction[1], direction[0])))
        sweep = float(180.0 - np.degrees(theta))

    return FilletSolution(
        center=center,
        tangent_in=tangent_in,
        tangent_out=tangent_out,
        start_angle=start,
        sweep_angle=sweep,
        radius=r,
        interior_angle=float(np.degrees(theta)),
        is_degenerate=not bool(np.all(np.isfinite(center))),
        starts_at_tangent_in=from_in,
    )


def fillet_path(
    a: Sequence[float],
    b: Sequence[float],
    c: Sequence[float],
    radius: float,
) -> Path2D:
    """Open path A -> C with the corner at B rounded; plain A-B-C when degenerate."""

    solution = compute_fillet(a, b, c, radius)
    if solution.is_degenerate:
        return Path2D.from_points([a, b, c], closed=False)
    return Path2D(
        segments=[
            Line2D(a, solution.tangent_in),
            solution.arc(),
            Line2D(solution.tangent_out, c),
        ],
        closed=False,
    )


def construction_segments(b: Sequence[float], solution: FilletSolution) -> list[Line2D]:
    if solution.is_degenerate:
        return []
    return [
        Line2D(b, solution.center),
        Line2D(b, solution.tangent_in),
        Line2D(b, solution.tangent_out),
        Line2D(solution.center, solution.tangent_in),
        Line2D(solution.center, solution.tangent_out),
    ]


__all__ = [
    "FilletSolution",
    "compute_fillet",
    "construction_segments",
    "fillet_path",
]
