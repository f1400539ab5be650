from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Sequence

import numpy as np


def _require_vec2(value: Sequence[float], label: str) -> np.ndarray:
    try:
        arr = np.asarray(value, dtype=float).reshape(2)
    except Exception as exc:
        raise ValueError(f"{label} must be a 2D coordinate.") from exc
    if not np.all(np.isfinite(arr)):
        raise ValueError(f"{label} must be finite.")
    return arr


@dataclass(frozen=True)
class Line2D:
    start: np.ndarray
    end: np.ndarray

    def __post_init__(self) -> None:
        object.__setattr__(self, "start", _require_vec2(self.start, "start"))
        object.__setattr__(self, "end", _require_vec2(self.end, "end"))

    def length(self) -> float:
        return float(np.linalg.norm(self.end - self.start))

    def sample(self) -> np.ndarray:
        return np.vstack([self.start, self.end])


@dataclass(frozen=True)
class Arc2D:
    """Circular arc between two angles (degrees, measured with ``atan2(y, x)``).

    ``clockwise=False`` walks from start to end by increasing angle. In a y-down
    screen frame that walk is a clockwise sweep on screen.
    """

    center: np.ndarray
    radius: float
    start_angle_deg: float
    end_angle_deg: float
    clockwise: bool = False

    def __post_init__(self) -> None:
        object.__setattr__(self, "center", _require_vec2(self.center, "center"))
        if not np.isfinite(self.radius) or self.radius <= 0:
            raise ValueError("radius must be positive.")

    @classmethod
    def full_circle(cls, center: Sequence[float], radius: float) -> "Arc2D":
        return cls(center=center, radius=float(radius), start_angle_deg=0.0, end_angle_deg=360.0)

    def point_at(self, angle_deg: float) -> np.ndarray:
        angle = np.deg2rad(angle_deg)
        return self.center + self.radius * np.array([np.cos(angle), np.sin(angle)])

    @property
    def start_point(self) -> np.ndarray:
        return self.point_at(self.start_angle_deg)

    @property
    def end_point(self) -> np.ndarray:
        return self.point_at(self.end_angle_deg)

    def span_deg(self) -> float:
        start = self.start_angle_deg
        end = self.end_angle_deg
        if self.clockwise:
            if end > start:
                end -= 360.0
        else:
            if end < start:
                end += 360.0
        return abs(end - start)

    def sample(self, segments_per_circle: int) -> np.ndarray:
        if segments_per_circle < 3:
            raise ValueError("segments_per_circle must be >= 3.")
        start = np.deg2rad(self.start_angle_deg)
        end = np.deg2rad(self.end_angle_deg)
        if self.clockwise:
            if end > start:
                end -= 2 * np.pi
        else:
            if end < start:
                end += 2 * np.pi
        span = abs(end - start)
        steps = max(int(np.ceil(segments_per_circle * (span / (2 * np.pi)))), 2)
        angles = np.linspace(start, end, steps, endpoint=True)
        x = self.center[0] + self.radius * np.cos(angles)
        y = self.center[1] + self.radius * np.sin(angles)
        return np.column_stack([x, y])


Segment2D = Line2D | Arc2D


@dataclass
class Path2D:
    segments: List[Segment2D] = field(default_factory=list)
    closed: bool = False

    @classmethod
    def from_points(cls, points: Iterable[Sequence[float]], closed: bool = False) -> "Path2D":
        pts = [_require_vec2(p, "point") for p in points]
        if len(pts) < 2:
            raise ValueError("Path2D requires at least two points.")
        segments = [Line2D(pts[i], pts[i + 1]) for i in range(len(pts) - 1)]
        if closed and not np.allclose(pts[0], pts[-1]):
            segments.append(Line2D(pts[-1], pts[0]))
        return cls(segments=segments, closed=closed)

    def sample(self, segments_per_circle: int = 64) -> np.ndarray:
        if not self.segments:
            return np.zeros((0, 2), dtype=float)
        points = []
        for idx, segment in enumerate(self.segments):
            if isinstance(segment, Line2D):
                seg_points = segment.sample()
            else:
                seg_points = segment.sample(segments_per_circle)
            if idx > 0 and seg_points.shape[0] > 0:
                seg_points = seg_points[1:]
            points.append(seg_points)
        pts = np.vstack(points)
        if self.closed and pts.shape[0] > 0 and not np.allclose(pts[0], pts[-1]):
            pts = np.vstack([pts, pts[0]])
        return pts

    def length(self) -> float:
        total = 0.0
        for segment in self.segments:
            if isinstance(segment, Line2D):
                total += segment.length()
            else:
                total += np.deg2rad(segment.span_deg()) * segment.radius
        return float(total)


__all__ = [
    "Arc2D",
    "Line2D",
    "Path2D",
    "Segment2D",
]
