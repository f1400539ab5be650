"""Modeling utilities: 2D drawing primitives and the corner fillet construction."""

from __future__ import annotations

from .drawing2d import Arc2D, Line2D, Path2D
from .fillet import FilletSolution, compute_fillet, construction_segments, fillet_path

__all__ = [
    "Arc2D",
    "Line2D",
    "Path2D",
    "FilletSolution",
    "compute_fillet",
    "construction_segments",
    "fillet_path",
]
