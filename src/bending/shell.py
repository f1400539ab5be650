"""Pointer-driven state for the three draggable corner points."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Mapping, Sequence

import numpy as np

from bending._config import DEFAULT_POINTS, DemoConfig
from bending.modeling.drawing2d import _require_vec2
from bending.modeling.fillet import FilletSolution, compute_fillet


class PointId(str, Enum):
    A = "A"
    B = "B"
    C = "C"


class MarkerState(str, Enum):
    IDLE = "idle"
    HOVER = "hover"
    DRAG = "drag"


class Cursor(str, Enum):
    DEFAULT = "default"
    HAND = "hand"


class PointerButton(str, Enum):
    PRIMARY = "primary"
    SECONDARY = "secondary"


class CornerPoints:
    """Exactly three named positions, iterated in A, B, C order."""

    def __init__(self, positions: Mapping[PointId | str, Sequence[float]] | None = None) -> None:
        source = dict(DEFAULT_POINTS)
        if positions is not None:
            source.update({PointId(key).value: value for key, value in positions.items()})
        self._slots = [_require_vec2(source[pid.value], pid.value) for pid in PointId]

    def get(self, point_id: PointId) -> np.ndarray:
        return self._slots[_index(point_id)].copy()

    def set(self, point_id: PointId, position: Sequence[float]) -> None:
        self._slots[_index(point_id)] = _require_vec2(position, PointId(point_id).value)

    def __iter__(self) -> Iterator[tuple[PointId, np.ndarray]]:
        for pid, pos in zip(PointId, self._slots):
            yield pid, pos.copy()

    def __len__(self) -> int:
        return len(self._slots)

    def as_tuple(self) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        return self.get(PointId.A), self.get(PointId.B), self.get(PointId.C)


def _index(point_id: PointId | str) -> int:
    return list(PointId).index(PointId(point_id))


@dataclass
class InteractionState:
    """Hover/drag bookkeeping. Every handler returns True when a redraw is due."""

    points: CornerPoints = field(default_factory=CornerPoints)
    config: DemoConfig = field(default_factory=DemoConfig)
    hover: PointId | None = None
    drag: PointId | None = None

    def hit_test(self, position: Sequence[float]) -> PointId | None:
        p = _require_vec2(position, "position")
        for pid, pos in self.points:
            if np.linalg.norm(p - pos) <= self.config.pick_radius:
                return pid
        return None

    def pointer_down(self, position: Sequence[float], button: PointerButton = PointerButton.PRIMARY) -> bool:
        if button == PointerButton.PRIMARY:
            self.hover = self.hit_test(position)
            self.drag = self.hover
        return True

    def pointer_up(self, button: PointerButton = PointerButton.PRIMARY) -> bool:
        if button == PointerButton.PRIMARY:
            self.drag = None
        return True

    def pointer_move(self, position: Sequence[float]) -> bool:
        if self.drag is not None:
            self.hover = self.drag
            self.points.set(self.drag, position)
        else:
            self.hover = self.hit_test(position)
        return True

    @property
    def cursor(self) -> Cursor:
        return Cursor.HAND if self.hover is not None else Cursor.DEFAULT

    def marker_state(self, point_id: PointId) -> MarkerState:
        if self.drag == point_id:
            return MarkerState.DRAG
        if self.hover == point_id:
            return MarkerState.HOVER
        return MarkerState.IDLE

    def solve(self) -> FilletSolution:
        a, b, c = self.points.as_tuple()
        return compute_fillet(a, b, c, self.config.radius)
