from __future__ import annotations

from typing import Sequence, Tuple

import numpy as np
import pyvista as pv

RGB = Tuple[float, float, float]


def normalize_color(color: Sequence[float] | str) -> RGB:
    """Return an RGB float triple for a named color, hex string or 0-255/0-1 sequence."""

    if isinstance(color, str):
        try:
            col = pv.Color(color)
        except ValueError as exc:
            raise ValueError(f"Unknown color {color!r}.") from exc
        return tuple(float(c) for c in col.float_rgb)

    arr = np.asarray(color, dtype=float).flatten()
    if arr.size not in (3, 4):
        raise ValueError("Color must be RGB or RGBA.")
    if arr.max() > 1.0:
        arr = arr / 255.0
    return tuple(float(c) for c in arr[:3])
