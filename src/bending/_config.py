from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Sequence, Tuple

from bending.modeling._color import normalize_color

DEFAULT_POINTS = {
    "A": (100.0, 100.0),
    "B": (400.0, 400.0),
    "C": (700.0, 100.0),
}

Color = Sequence[float] | str


@dataclass(frozen=True)
class DemoConfig:
    """Drawing resources and fixed constants, built once and passed to the renderer.

    Color fields accept anything ``normalize_color`` does and are stored as RGB floats.
    """

    radius: float = 100.0
    point_size: float = 6.0
    font_size: int = 12
    label_offset: Tuple[float, float] = (10.0, 30.0)
    window_size: Tuple[int, int] = (800, 500)
    show_construction: bool = True
    line_width: float = 1.0
    segments_per_circle: int = 128
    point_color: Color = "deepskyblue"
    hover_color: Color = "dodgerblue"
    drag_color: Color = "midnightblue"
    line_color: Color = "deeppink"
    construction_color: Color = "lightgray"
    label_color: Color = "slateblue"
    background_color: Color = "white"

    def __post_init__(self) -> None:
        if not self.radius > 0:
            raise ValueError("radius must be positive.")
        if not self.point_size > 0:
            raise ValueError("point_size must be positive.")
        for f in fields(self):
            if f.name.endswith("_color"):
                object.__setattr__(self, f.name, normalize_color(getattr(self, f.name)))

    @property
    def pick_radius(self) -> float:
        return self.point_size

    def with_overrides(self, **changes) -> "DemoConfig":
        return replace(self, **changes)


def get_demo_config() -> DemoConfig:
    """Return the default demo configuration."""

    return DemoConfig()
