from __future__ import annotations

import json
import pathlib

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from bending._config import DEFAULT_POINTS, get_demo_config
from bending.modeling.fillet import FilletSolution, compute_fillet
from bending.preview import FilletPreviewer, PreviewBackendError
from bending.shell import CornerPoints, InteractionState

console = Console()
app = typer.Typer(help="Round the corner of a two-segment polyline with a fixed-radius arc.")


def _format_point(value: tuple[float, float]) -> str:
    return f"{value[0]:g},{value[1]:g}"


def _parse_point(text: str, label: str) -> tuple[float, float]:
    parts = text.split(",")
    if len(parts) != 2:
        raise typer.BadParameter(f"{label} must be two comma-separated numbers, got {text!r}.")
    try:
        return float(parts[0]), float(parts[1])
    except ValueError as exc:
        raise typer.BadParameter(f"{label} must be two comma-separated numbers, got {text!r}.") from exc


def _solution_to_dict(solution: FilletSolution) -> dict[str, object]:
    if solution.is_degenerate:
        return {"degenerate": True, "radius": solution.radius}
    return {
        "degenerate": False,
        "radius": solution.radius,
        "center": [float(v) for v in solution.center],
        "tangent_in": [float(v) for v in solution.tangent_in],
        "tangent_out": [float(v) for v in solution.tangent_out],
        "start_angle": solution.start_angle,
        "sweep_angle": solution.sweep_angle,
        "interior_angle": solution.interior_angle,
    }


def _solution_table(solution: FilletSolution) -> Table:
    table = Table(title="Fillet solution", show_header=True, header_style="bold magenta")
    table.add_column("Field")
    table.add_column("Value", justify="right")
    table.add_row("radius", f"{solution.radius:.4g}")
    table.add_row("interior angle", f"{solution.interior_angle:.4f}°")
    table.add_row("center", f"({solution.center[0]:.4f}, {solution.center[1]:.4f})")
    table.add_row("tangent in", f"({solution.tangent_in[0]:.4f}, {solution.tangent_in[1]:.4f})")
    table.add_row("tangent out", f"({solution.tangent_out[0]:.4f}, {solution.tangent_out[1]:.4f})")
    table.add_row("start angle", f"{solution.start_angle:.4f}°")
    table.add_row("sweep angle", f"{solution.sweep_angle:.4f}°")
    return table


@app.command()
def solve(
    a: str = typer.Option(_format_point(DEFAULT_POINTS["A"]), "--a", help="Point A as X,Y."),
    b: str = typer.Option(_format_point(DEFAULT_POINTS["B"]), "--b", help="Corner point B as X,Y."),
    c: str = typer.Option(_format_point(DEFAULT_POINTS["C"]), "--c", help="Point C as X,Y."),
    radius: float = typer.Option(get_demo_config().radius, "--radius", "-r", help="Fillet radius."),
    as_json: bool = typer.Option(False, "--json", help="Print the solution as JSON."),
) -> None:
    """
    Compute the fillet arc for the corner A-B-C and print it.
    """

    points = [_parse_point(a, "A"), _parse_point(b, "B"), _parse_point(c, "C")]
    try:
        solution = compute_fillet(*points, radius=radius)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    if as_json:
        typer.echo(json.dumps(_solution_to_dict(solution), indent=2))
        return

    if solution.is_degenerate:
        console.print("[yellow]Corner is degenerate (collinear or coincident points); no fillet arc.[/yellow]")
        return
    console.print(_solution_table(solution))


@app.command()
def preview(
    radius: float = typer.Option(get_demo_config().radius, "--radius", "-r", help="Fillet radius."),
    construction: bool = typer.Option(
        True,
        "--show-construction/--hide-construction",
        help="Draw the bisector, tangent radii and fillet circle.",
    ),
    screenshot: pathlib.Path | None = typer.Option(
        None, "--screenshot", help="Render once off-screen and save a PNG instead of opening a window."
    ),
) -> None:
    """
    Open an interactive window: drag A, B or C and watch the fillet follow.
    """

    try:
        config = get_demo_config().with_overrides(radius=radius, show_construction=construction)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    console.rule("Bending Preview")
    console.print(f"[magenta]Fillet radius: {config.radius:g}[/magenta]")

    state = InteractionState(points=CornerPoints(), config=config)
    previewer = FilletPreviewer(console=console, config=config)
    try:
        previewer.show(state, screenshot_path=screenshot)
    except PreviewBackendError as exc:
        raise typer.BadParameter(str(exc)) from exc

    if screenshot is not None:
        console.print(
            Panel(
                f"Wrote preview to [green]{screenshot}[/green].",
                title="Screenshot saved",
                border_style="green",
            )
        )


def main() -> None:
    app()


if __name__ == "__main__":
    main()
