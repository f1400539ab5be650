"""Renderer-agnostic frame description for the fillet demo."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

import numpy as np

from bending._config import DemoConfig
from bending.modeling._color import RGB
from bending.modeling.drawing2d import Arc2D, Line2D
from bending.modeling.fillet import FilletSolution, construction_segments
from bending.shell import InteractionState, MarkerState, PointId

LINE = "line"
CONSTRUCTION = "construction"


@dataclass
class Stroke:
    points: np.ndarray
    role: str
    color: RGB
    width: float = 1.0

    def __post_init__(self) -> None:
        self.points = np.asarray(self.points, dtype=float).reshape(-1, 2).copy()


@dataclass(frozen=True)
class Marker:
    point_id: PointId
    position: np.ndarray
    state: MarkerState
    color: RGB
    size: float


@dataclass(frozen=True)
class Label:
    text: str
    position: np.ndarray
    color: RGB
    font_size: int


@dataclass
class Scene:
    solution: FilletSolution
    markers: List[Marker] = field(default_factory=list)
    labels: List[Label] = field(default_factory=list)
    strokes: List[Stroke] = field(default_factory=list)

    def strokes_with_role(self, role: str) -> List[Stroke]:
        return [stroke for stroke in self.strokes if stroke.role == role]


def _marker_color(config: DemoConfig, state: MarkerState) -> RGB:
    if state is MarkerState.DRAG:
        return config.drag_color
    if state is MarkerState.HOVER:
        return config.hover_color
    return config.point_color


def build_scene(state: InteractionState) -> Scene:
    """Solve the corner held by ``state`` and lay out everything to draw with its config."""

    config = state.config
    a, b, c = state.points.as_tuple()
    solution = state.solve()
    scene = Scene(solution=solution)

    offset = np.asarray(config.label_offset, dtype=float)
    for pid, pos in state.points:
        marker_state = state.marker_state(pid)
        scene.markers.append(
            Marker(
                point_id=pid,
                position=pos,
                state=marker_state,
                color=_marker_color(config, marker_state),
                size=config.point_size,
            )
        )
        scene.labels.append(
            Label(text=pid.value, position=pos - offset, color=config.label_color, font_size=config.font_size)
        )

    width = config.line_width
    if solution.is_degenerate:
        scene.strokes.append(Stroke(Line2D(a, b).sample(), LINE, config.line_color, width))
        scene.strokes.append(Stroke(Line2D(b, c).sample(), LINE, config.line_color, width))
        return scene

    if config.show_construction:
        for segment in construction_segments(b, solution):
            scene.strokes.append(Stroke(segment.sample(), CONSTRUCTION, config.construction_color, width))
        circle = Arc2D.full_circle(solution.center, solution.radius)
        scene.strokes.append(
            Stroke(circle.sample(config.segments_per_circle), CONSTRUCTION, config.construction_color, width)
        )

    scene.strokes.append(Stroke(Line2D(a, solution.tangent_in).sample(), LINE, config.line_color, width))
    scene.strokes.append(Stroke(Line2D(solution.tangent_out, c).sample(), LINE, config.line_color, width))
    scene.strokes.append(
        Stroke(solution.arc(from_tangent_in=False).sample(config.segments_per_circle), LINE, config.line_color, width)
    )
    return scene
