"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with tables and formatted messages.
"""

from rich.console import Console
from rich.table import Table
from rich.text import Text

from navmesh.domain import Point
from navmesh.utils import BuildStats

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info


def format_point(point: Point) -> str:
    """Format a point as ``(x, y)`` with trailing zeros trimmed."""
    return f"({point.x:g}, {point.y:g})"


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]Navmesh[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_source_info(path: str, island_count: int, triangulated: bool) -> None:
    """Print information about a loaded island file.

    Args:
        path: Path to the island file
        island_count: Number of islands in the file
        triangulated: Whether the file held triangles rather than rings
    """
    kind = "pre-triangulated" if triangulated else "rings"
    line = Text("  ")
    line.append(path)
    line.append(f" ({kind})")
    console.print(line)
    console.print(f"  {island_count} islands")


def _format_time(seconds: float) -> str:
    """Format seconds into human-readable time string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    elif seconds < 60:
        return f"{seconds:.1f}s"
    else:
        mins = int(seconds // 60)
        secs = seconds % 60
        return f"{mins}m {secs:.1f}s"


def print_build_summary(
    stats: BuildStats | None,
    triangles: int,
    boundary_edges: int,
    corners: int,
) -> None:
    """Print map statistics after a build.

    Args:
        stats: Build statistics, or None for maps loaded pre-triangulated
        triangles: Number of triangles in the map
        boundary_edges: Number of outline edges
        corners: Number of outline corners
    """
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_row("Triangles", str(triangles))
    table.add_row("Boundary edges", str(boundary_edges))
    table.add_row("Corners", str(corners))

    if stats is not None:
        table.add_row("Diagonals", f"{stats.diagonals_applied} of {stats.diagonals_found}")
        warning_style = "yellow" if stats.warnings else "green"
        table.add_row("Warnings", f"[{warning_style}]{len(stats.warnings)}[/{warning_style}]")
        table.add_row("Time", _format_time(stats.duration_seconds))

    console.print(table)

    if stats is not None:
        for island_index, detail in stats.warnings:
            console.print(f"  [yellow]island {island_index}[/yellow] {SYM_DOT} {detail}")


def print_saved(output_path: str) -> None:
    """Print where the map was written."""
    line = Text(f"\n{SYM_OK} Saved ", style="bold green")
    line.append(output_path, style="bold")
    console.print(line)


def print_route(waypoints: list[Point]) -> None:
    """Print a route, one waypoint per line.

    Args:
        waypoints: Route from start to end; empty when there is none
    """
    if not waypoints:
        console.print(f"\n[bold yellow]{SYM_ERR} No path found[/bold yellow]")
        return

    console.print(f"\n[bold green]{SYM_OK} Route[/bold green] {SYM_DOT} {len(waypoints)} waypoints")
    for index, point in enumerate(waypoints):
        console.print(f"  {index:>3}  {format_point(point)}")


def print_on_land(point: Point, land: bool) -> None:
    """Print whether a point is on land."""
    verdict = "[bold]land[/bold]" if land else "[bold]sea[/bold]"
    console.print(f"{format_point(point)} is {verdict}")


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {message}")
    if details:
        console.print(f"  {details}")
