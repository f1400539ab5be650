from __future__ import annotations

from pathlib import Path
from typing import Callable

import numpy as np
from rich.console import Console

from bending._config import DemoConfig, get_demo_config
from bending.scene import Scene, build_scene
from bending.shell import Cursor, InteractionState, PointerButton

# vtkRenderWindow cursor shapes (VTK_CURSOR_DEFAULT, VTK_CURSOR_HAND).
_VTK_CURSORS = {Cursor.DEFAULT: 0, Cursor.HAND: 9}
_CAMERA_DISTANCE = 1000.0


class PreviewBackendError(RuntimeError):
    """Raised when a preview backend cannot run."""


def _to_xyz(points: np.ndarray) -> np.ndarray:
    points = np.asarray(points, dtype=float).reshape(-1, 2)
    return np.column_stack([points, np.zeros((points.shape[0], 1))])


class FilletPreviewer:
    """Draw the fillet demo with PyVista and route mouse events into the interaction state."""

    def __init__(self, console: Console | None, config: DemoConfig | None = None):
        self.console = console
        self.config = config or get_demo_config()
        self._pv = None

    def show(self, state: InteractionState, screenshot_path: Path | None = None) -> None:
        pv = self._ensure_backend()
        plotter = pv.Plotter(window_size=self.config.window_size, off_screen=screenshot_path is not None)
        self._configure_plotter(plotter)
        self.draw(plotter, build_scene(state))

        if screenshot_path is not None:
            screenshot_path.parent.mkdir(parents=True, exist_ok=True)
            plotter.show(title="Bending Preview", auto_close=True, screenshot=str(screenshot_path))
            plotter.close()
            return

        cleanup = self._install_pointer_observers(plotter, state)
        self._print("[cyan]Drag A, B or C with the left mouse button; press q to close.[/cyan]")
        try:
            plotter.show(title="Bending Preview", auto_close=False)
        finally:
            cleanup()
            plotter.close()

    def draw(self, plotter, scene: Scene) -> None:
        """Replace every actor in the plotter with the contents of ``scene``."""

        pv = self._ensure_backend()
        plotter.clear_actors()

        for index, stroke in enumerate(scene.strokes):
            plotter.add_mesh(
                pv.lines_from_points(_to_xyz(stroke.points)),
                name=f"stroke-{index}",
                color=stroke.color,
                line_width=stroke.width,
                reset_camera=False,
            )

        for marker in scene.markers:
            plotter.add_points(
                _to_xyz(marker.position),
                name=f"marker-{marker.point_id.value}",
                color=marker.color,
                point_size=marker.size * 2,
                render_points_as_spheres=False,
                reset_camera=False,
            )

        for label in scene.labels:
            plotter.add_point_labels(
                _to_xyz(label.position),
                [label.text],
                name=f"label-{label.text}",
                font_size=label.font_size,
                text_color=label.color,
                shape=None,
                show_points=False,
                always_visible=True,
                reset_camera=False,
            )

    # Internal helpers -----------------------------------------------------

    def _ensure_backend(self):
        if self._pv is None:
            try:
                import pyvista as pv
            except ImportError as exc:  # pragma: no cover - runtime dep
                raise PreviewBackendError(
                    "PyVista is required for previewing. Install bending with `pip install -e .`."
                ) from exc
            pv.set_plot_theme("document")
            self._pv = pv
        return self._pv

    def _print(self, message: str) -> None:
        if self.console is not None:
            self.console.print(message)

    def _configure_plotter(self, plotter) -> None:
        """Map world units to pixels with the origin top-left and y pointing down."""

        width, height = self.config.window_size
        plotter.set_background(self.config.background_color)
        plotter.enable_parallel_projection()
        cx, cy = width / 2.0, height / 2.0
        plotter.camera_position = [(cx, cy, -_CAMERA_DISTANCE), (cx, cy, 0.0), (0.0, -1.0, 0.0)]
        plotter.camera.parallel_scale = height / 2.0
        plotter.reset_camera_clipping_range()

    def _display_to_world(self, plotter, x: float, y: float) -> np.ndarray:
        renderer = plotter.renderer
        renderer.SetDisplayPoint(float(x), float(y), 0.0)
        renderer.DisplayToWorld()
        wx, wy, _, w = renderer.GetWorldPoint()
        if w:
            wx, wy = wx / w, wy / w
        return np.array([wx, wy], dtype=float)

    def _refresh(self, plotter, state: InteractionState) -> None:
        self.draw(plotter, build_scene(state))
        plotter.ren_win.SetCurrentCursor(_VTK_CURSORS[state.cursor])
        plotter.render()

    def _install_pointer_observers(self, plotter, state: InteractionState) -> Callable[[], None]:
        """Take over the left mouse button from the camera and feed the interaction state."""

        iren = getattr(plotter, "iren", None)
        if iren is None:
            raise PreviewBackendError("PyVista interactor unavailable; cannot attach mouse observers.")
        interactor = iren.interactor

        from vtkmodules.vtkInteractionStyle import vtkInteractorStyleUser

        interactor.SetInteractorStyle(vtkInteractorStyleUser())

        def position() -> np.ndarray:
            x, y = interactor.GetEventPosition()
            return self._display_to_world(plotter, x, y)

        def on_press(*_: object) -> None:
            if state.pointer_down(position(), PointerButton.PRIMARY):
                self._refresh(plotter, state)

        def on_release(*_: object) -> None:
            if state.pointer_up(PointerButton.PRIMARY):
                self._refresh(plotter, state)

        def on_move(*_: object) -> None:
            if state.pointer_move(position()):
                self._refresh(plotter, state)

        observer_ids = [
            interactor.AddObserver("LeftButtonPressEvent", on_press),
            interactor.AddObserver("LeftButtonReleaseEvent", on_release),
            interactor.AddObserver("MouseMoveEvent", on_move),
        ]

        def cleanup() -> None:
            for observer_id in observer_ids:
                interactor.RemoveObserver(observer_id)

        return cleanup
