"""Rich console output helpers for the CLI.

This module provides user-friendly console output using Rich library
with progress bars, tables, and formatted messages.
"""

from rich.console import Console
from rich.markup import escape
from rich.progress import (
    BarColumn,
    Progress,
    TaskProgressColumn,
    TextColumn,
    TimeElapsedColumn,
)
from rich.table import Table
from rich.text import Text

from vispath.domain import PathResult, Segment, Vec2

console = Console()

# Unicode symbols for consistent visual language
SYM_STEP = "▸"  # Step indicator
SYM_OK = "✓"  # Success
SYM_ERR = "✗"  # Error
SYM_DOT = "·"  # Separator/secondary info
SYM_ARROW = "→"  # Path leg


def create_progress() -> Progress:
    """Create a rich progress bar for query answering.

    Returns:
        Configured Progress instance with bar and time elapsed.
    """
    return Progress(
        TextColumn("  "),
        BarColumn(bar_width=40, complete_style="green", finished_style="green"),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=console,
        transient=True,
    )


def print_header(version: str) -> None:
    """Print application header.

    Args:
        version: Application version string
    """
    console.print(f"\n[bold]Vispath[/bold] v{version}")
    console.print("─" * 44)


def print_step(message: str) -> None:
    """Print a processing step indicator.

    Args:
        message: Step description message
    """
    console.print(f"\n{SYM_STEP} {message}")


def print_scene_info(scene_path: str, obstacles: int, vertices: int, queries: int) -> None:
    """Print scene information.

    Args:
        scene_path: Path to the scene file
        obstacles: Number of obstacles
        vertices: Total obstacle vertex count
        queries: Number of queries
    """
    # Use Text to safely handle paths with special characters
    line = Text("  ")
    line.append(scene_path)
    console.print(line)
    console.print(
        f"  {obstacles:,} obstacles {SYM_DOT} {vertices:,} vertices {SYM_DOT} {queries:,} queries"
    )


def print_graph_info(nodes: int, edges: int) -> None:
    """Print visibility graph size."""
    console.print(f"  {nodes:,} nodes {SYM_DOT} {edges:,} edges")


def print_edges(edges: list[Segment]) -> None:
    """Print visibility graph edges as a table.

    Args:
        edges: Graph edges, each listed once
    """
    table = Table(show_header=True, header_style="bold", box=None, padding=(0, 2))
    table.add_column("#", justify="right")
    table.add_column("from")
    table.add_column("to")
    for index, edge in enumerate(edges):
        table.add_row(str(index), _format_point(edge.p0), _format_point(edge.p1))
    console.print(table)


def _format_point(point: Vec2) -> str:
    return f"({point.x:g}, {point.y:g})"


def print_path_result(index: int, result: PathResult, verbose: bool) -> None:
    """Print the answer to one query.

    Args:
        index: Query index in the scene
        result: Query result
        verbose: Whether to list every waypoint
    """
    query = result.query
    header = (
        f"  [{index}] {_format_point(query.start)} {SYM_ARROW} {_format_point(query.end)}"
    )
    if result.path is None or result.length is None:
        console.print(f"{header}  [red]{SYM_ERR} unreachable[/red]")
        return

    kind = "direct" if result.direct else f"{len(result.path)} waypoints"
    console.print(f"{header}  [green]{SYM_OK}[/green] {result.length:.3f} {SYM_DOT} {kind}")
    if verbose:
        console.print(f"      {' → '.join(_format_point(p) for p in result.path)}")


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


def print_success(
    total_time_s: float,
    found: int,
    unreachable: int,
    output_path: str | None = None,
    avg_time_ms: float | None = None,
) -> None:
    """Print success message with summary.

    Args:
        total_time_s: Total planning time in seconds
        found: Number of queries with a path
        unreachable: Number of queries without a path
        output_path: Path to the result file, if one was written
        avg_time_ms: Average time per query in milliseconds
    """
    time_str = _format_time(total_time_s)

    console.print(f"\n[bold green]{SYM_OK} Complete[/bold green] in {time_str}")

    if output_path is not None:
        line = Text("  ")
        line.append(output_path, style="bold")
        console.print(line)

    unreachable_style = "yellow" if unreachable > 0 else "green"
    console.print(
        f"  {found} paths {SYM_DOT} "
        f"[{unreachable_style}]{unreachable} unreachable[/{unreachable_style}]"
    )

    if avg_time_ms is not None:
        console.print(f"  {avg_time_ms:.2f}ms avg per query")


def print_written(output_path: str, obstacles: int, vertices: int) -> None:
    """Print confirmation for a written scene file."""
    console.print(f"\n[bold green]{SYM_OK} Written[/bold green]")
    line = Text("  ")
    line.append(output_path, style="bold")
    console.print(line)
    console.print(f"  {obstacles:,} obstacles {SYM_DOT} {vertices:,} vertices")


def print_error(message: str, details: str | None = None) -> None:
    """Print error message.

    Args:
        message: Main error message
        details: Optional detailed error information
    """
    console.print(f"\n[bold red]{SYM_ERR} Error:[/bold red] {escape(message)}")
    if details:
        console.print(f"  {escape(details)}")
