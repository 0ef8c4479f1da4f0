"""CLI application entry point for navmesh.

This module provides the main CLI interface using Typer.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, NoReturn

import typer

from navmesh import __version__
from navmesh.cli.output import (
    console,
    print_build_summary,
    print_error,
    print_header,
    print_on_land,
    print_route,
    print_saved,
    print_source_info,
    print_step,
)
from navmesh.config import LoggingConfig, NavmeshSettings
from navmesh.core import Map, MapBuilder
from navmesh.domain import Point
from navmesh.exceptions import IslandLoadError, MapSaveError, NavmeshError
from navmesh.io import IslandReader, MapWriter
from navmesh.utils import BuildStats, configure_logging

# Create the Typer app
app = typer.Typer(
    name="navmesh",
    help="Triangulate island outlines and plot courses around them.",
    add_completion=False,
    no_args_is_help=True,
)


@dataclass
class CliState:
    """Options shared by every command."""

    settings: NavmeshSettings
    quiet: bool


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Navmesh[/bold blue] v{__version__}")
        raise typer.Exit()


def parse_point(value: str) -> Point:
    """Parse an ``X,Y`` command line value.

    Raises:
        ValueError: If the value is not two comma separated numbers
    """
    parts = value.split(",")
    if len(parts) != 2:
        raise ValueError(f"expected X,Y but got '{value}'")
    try:
        return Point(float(parts[0]), float(parts[1]))
    except ValueError:
        raise ValueError(f"expected X,Y but got '{value}'") from None


@app.callback()
def main_callback(
    ctx: typer.Context,
    log_file: Annotated[
        Path | None,
        typer.Option(
            "--log-file",
            help="Write detailed logs to file",
        ),
    ] = None,
    log_level: Annotated[
        str,
        typer.Option(
            "--log-level",
            help="Logging level (DEBUG|INFO|WARNING|ERROR)",
        ),
    ] = "WARNING",
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
    _version: Annotated[  # noqa: ARG001
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
) -> None:
    """Triangulate island outlines and plot courses around them."""
    if log_level.upper() not in ("DEBUG", "INFO", "WARNING", "ERROR"):
        print_error(
            f"Invalid log level: {log_level}",
            details="Valid values: DEBUG, INFO, WARNING, ERROR",
        )
        raise typer.Exit(code=1)

    settings = NavmeshSettings(
        logging=LoggingConfig(
            log_file=log_file,
            log_level=log_level.upper(),
        ),
    )
    configure_logging(
        log_file=settings.logging.log_file,
        console_level=settings.logging.log_level,
        file_level=settings.logging.file_log_level,
        quiet=quiet,
    )
    ctx.obj = CliState(settings=settings, quiet=quiet)


def _load_map(path: Path, state: CliState) -> tuple[Map, BuildStats | None]:
    """Load an island file and build its map.

    Returns:
        Tuple of (map, build stats); stats are None for pre-triangulated files
    """
    if not path.exists():
        raise IslandLoadError(str(path), "file not found")
    if not path.is_file():
        raise IslandLoadError(str(path), "not a file")

    with IslandReader(path) as reader:
        triangulated = reader.is_triangulated
        point_lists = reader.point_lists

    if not state.quiet:
        print_source_info(str(path), len(point_lists), triangulated)

    if triangulated:
        return Map.from_triangles(point_lists, settings=state.settings), None

    builder = MapBuilder(state.settings)
    sea = builder.build(point_lists)
    return sea, builder.stats


def _fail(error: NavmeshError) -> NoReturn:
    if isinstance(error, IslandLoadError):
        print_error(f"Could not load islands: {error.reason}")
    elif isinstance(error, MapSaveError):
        print_error(f"Could not save map: {error.reason}")
    else:
        print_error(str(error))
    raise typer.Exit(code=1)


@app.command()
def triangulate(
    ctx: typer.Context,
    islands: Annotated[
        Path,
        typer.Argument(
            help="Path to JSON island file",
            show_default=False,
        ),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output path (default: {name}-triangulated.json)",
        ),
    ] = None,
) -> None:
    """Triangulate islands and write the map as JSON.

    Example:
        navmesh triangulate islands.json

    This will create islands-triangulated.json holding the triangles,
    boundary edges and corners of every island.
    """
    state: CliState = ctx.obj

    if not state.quiet:
        print_header(__version__)
        print_step("Building map")

    try:
        sea, stats = _load_map(islands, state)

        if not state.quiet:
            print_build_summary(
                stats,
                triangles=len(sea.triangles()),
                boundary_edges=len(sea.boundary_edges),
                corners=len(sea.corners),
            )

        output_path = output if output is not None else MapWriter.get_triangulated_path(islands)
        MapWriter(sea, output_path).save()

        if not state.quiet:
            print_saved(str(output_path))
    except NavmeshError as e:
        _fail(e)


@app.command()
def route(
    ctx: typer.Context,
    islands: Annotated[
        Path,
        typer.Argument(
            help="Path to JSON island file",
            show_default=False,
        ),
    ],
    start: Annotated[
        str,
        typer.Option(
            "--start",
            "-s",
            help="Start position as X,Y",
        ),
    ],
    end: Annotated[
        str,
        typer.Option(
            "--end",
            "-e",
            help="Destination as X,Y",
        ),
    ],
) -> None:
    """Plot a course between two points around the islands.

    Example:
        navmesh route islands.json --start 0,0 --end 120,0
    """
    state: CliState = ctx.obj
    try:
        position = parse_point(start)
        destination = parse_point(end)
    except ValueError as e:
        print_error(f"Invalid point: {e}")
        raise typer.Exit(code=1) from None

    try:
        sea, _ = _load_map(islands, state)
    except NavmeshError as e:
        _fail(e)

    print_route(sea.plot_course(position, destination))


@app.command("on-land")
def on_land(
    ctx: typer.Context,
    islands: Annotated[
        Path,
        typer.Argument(
            help="Path to JSON island file",
            show_default=False,
        ),
    ],
    x: Annotated[float, typer.Argument(help="X coordinate", show_default=False)],
    y: Annotated[float, typer.Argument(help="Y coordinate", show_default=False)],
) -> None:
    """Report whether a point lies on land or at sea."""
    state: CliState = ctx.obj
    point = Point(x, y)

    try:
        sea, _ = _load_map(islands, state)
    except NavmeshError as e:
        _fail(e)

    print_on_land(point, sea.on_land(point))


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
