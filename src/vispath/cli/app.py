"""CLI application entry point for vispath.

This module provides the main CLI interface using Typer.
"""

import math
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError

from vispath import __version__
from vispath.cli.output import (
    console,
    create_progress,
    print_edges,
    print_error,
    print_graph_info,
    print_header,
    print_path_result,
    print_scene_info,
    print_step,
    print_success,
    print_written,
)
from vispath.config import (
    ExpansionConfig,
    LoggingConfig,
    SearchConfig,
    VispathSettings,
    VisitedRule,
)
from vispath.core import ScenePlanner
from vispath.domain import PathQuery, Scene, Vec2
from vispath.exceptions import (
    InvalidObstacleError,
    QueryError,
    SceneFormatError,
    SceneLoadError,
    SceneSaveError,
    VispathError,
)
from vispath.io import SceneReader, SceneWriter

# Create the Typer app
app = typer.Typer(
    name="vispath",
    help="Find shortest paths around polygonal obstacles with a visibility graph.",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold blue]Vispath[/bold blue] v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
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
    """Find shortest paths around polygonal obstacles with a visibility graph."""


def parse_point(value: str) -> Vec2:
    """Parse an "X,Y" command-line coordinate.

    Args:
        value: Two comma-separated numbers

    Returns:
        Parsed point

    Raises:
        QueryError: If the value is not two finite numbers
    """
    parts = value.split(",")
    if len(parts) != 2:
        raise QueryError(f"Expected a point as X,Y, got '{value}'")
    try:
        x, y = float(parts[0]), float(parts[1])
    except ValueError:
        raise QueryError(f"Expected a point as X,Y, got '{value}'") from None
    if not (math.isfinite(x) and math.isfinite(y)):
        raise QueryError(f"Point coordinates must be finite, got '{value}'")
    return Vec2(x, y)


def _load_scene(scene_path: Path, quiet: bool) -> Scene:
    if not quiet:
        print_step("Loading scene")

    with SceneReader(scene_path) as reader:
        scene = reader.scene

    if not quiet:
        print_scene_info(
            scene_path=str(scene_path),
            obstacles=len(scene.obstacles),
            vertices=scene.vertex_count,
            queries=len(scene.queries),
        )
    return scene


def _handle_errors(e: Exception) -> None:
    """Report an error and exit with status 1.

    Args:
        e: Exception raised by a command

    Raises:
        typer.Exit: Always
    """
    if isinstance(e, FileNotFoundError):
        print_error(str(e))
    elif isinstance(e, SceneLoadError):
        print_error(f"Could not load scene: {e.reason}")
    elif isinstance(e, SceneFormatError):
        print_error("Invalid scene file", details=e.details)
    elif isinstance(e, InvalidObstacleError):
        print_error(f"Invalid obstacle {e.index}", details=e.reason)
    elif isinstance(e, SceneSaveError):
        print_error(f"Could not save output: {e.reason}")
    elif isinstance(e, ValidationError):
        print_error("Invalid option value", details=str(e))
    elif isinstance(e, VispathError):
        print_error(str(e))
    else:
        print_error(f"Unexpected error: {e}")
    raise typer.Exit(code=1)


@app.command()
def path(
    scene_path: Annotated[
        Path,
        typer.Argument(
            help="Path to input scene JSON file",
            show_default=False,
        ),
    ],
    start: Annotated[
        str | None,
        typer.Option(
            "--start",
            "-s",
            help="Start point as X,Y (replaces the scene's queries, requires --end)",
        ),
    ] = None,
    end: Annotated[
        str | None,
        typer.Option(
            "--end",
            "-e",
            help="End point as X,Y (requires --start)",
        ),
    ] = None,
    clearance: Annotated[
        float | None,
        typer.Option(
            "--clearance",
            "-c",
            help="Expand obstacles by this distance before planning",
        ),
    ] = None,
    resolution: Annotated[
        float,
        typer.Option(
            "--resolution",
            "-r",
            help="Angular step of rounded corners in radians",
        ),
    ] = ExpansionConfig().resolution,
    visited_rule: Annotated[
        VisitedRule,
        typer.Option(
            "--visited-rule",
            help="When A* closes a node",
            case_sensitive=False,
        ),
    ] = VisitedRule.ON_RELAX,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Write results to this JSON file",
        ),
    ] = None,
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
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="List every waypoint",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Minimal console output",
        ),
    ] = False,
) -> None:
    """Answer path queries for a scene and print the waypoints.

    Example:
        vispath path scene.json --start 0,5 --end 10,5
    """
    if verbose and quiet:
        print_error("Cannot use --verbose and --quiet together")
        raise typer.Exit(code=1)

    if not quiet:
        print_header(__version__)

    try:
        if (start is None) != (end is None):
            raise QueryError("--start and --end must be given together")

        queries = None
        if start is not None and end is not None:
            queries = [PathQuery(start=parse_point(start), end=parse_point(end))]

        settings = VispathSettings(
            expansion=ExpansionConfig(clearance=clearance, resolution=resolution),
            search=SearchConfig(visited_rule=visited_rule),
            logging=LoggingConfig(
                log_file=log_file,
                log_level=log_level if not quiet else "WARNING",
            ),
        )

        scene = _load_scene(scene_path, quiet)
        total = len(queries) if queries is not None else len(scene.queries)

        if not quiet:
            print_step(f"Planning {total} queries")

        planner = ScenePlanner(settings, quiet=quiet)

        if not quiet and total > 0:
            with create_progress() as progress:
                task_id = progress.add_task("Planning", total=total)

                def update_progress(completed: int, *_: object) -> None:
                    progress.update(task_id, completed=completed)

                stats = planner.process(
                    scene_path=scene_path,
                    output_path=output,
                    queries=queries,
                    progress_callback=update_progress,
                    scene=scene,
                )
        else:
            stats = planner.process(
                scene_path=scene_path,
                output_path=output,
                queries=queries,
                scene=scene,
            )

        for index, result in enumerate(planner.results):
            if quiet:
                if result.path is None:
                    console.print(f"{index}: unreachable")
                else:
                    console.print(
                        f"{index}: " + " ".join(f"{p.x:g},{p.y:g}" for p in result.path)
                    )
            else:
                print_path_result(index, result, verbose=verbose)

        if not quiet:
            print_success(
                total_time_s=stats.duration_seconds,
                found=stats.found_count,
                unreachable=stats.unreachable_count,
                output_path=str(output) if output is not None else None,
                avg_time_ms=stats.avg_query_time_ms,
            )

    except typer.Exit:
        raise
    except Exception as e:
        _handle_errors(e)


@app.command()
def graph(
    scene_path: Annotated[
        Path,
        typer.Argument(
            help="Path to input scene JSON file",
            show_default=False,
        ),
    ],
    clearance: Annotated[
        float | None,
        typer.Option(
            "--clearance",
            "-c",
            help="Expand obstacles by this distance before building the graph",
        ),
    ] = None,
    resolution: Annotated[
        float,
        typer.Option(
            "--resolution",
            "-r",
            help="Angular step of rounded corners in radians",
        ),
    ] = ExpansionConfig().resolution,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="List every graph edge",
        ),
    ] = False,
) -> None:
    """Build the visibility graph for a scene and report its size."""
    print_header(__version__)

    try:
        settings = VispathSettings(
            expansion=ExpansionConfig(clearance=clearance, resolution=resolution),
        )
        scene = _load_scene(scene_path, quiet=False)

        print_step("Building visibility graph")
        planner = ScenePlanner(settings)
        navigation = planner.build_navigation(scene.obstacles)
        edges = navigation.edges()
        print_graph_info(nodes=len(navigation.graph), edges=len(edges))

        if verbose and edges:
            print_edges(edges)

    except typer.Exit:
        raise
    except Exception as e:
        _handle_errors(e)


@app.command()
def expand(
    scene_path: Annotated[
        Path,
        typer.Argument(
            help="Path to input scene JSON file",
            show_default=False,
        ),
    ],
    clearance: Annotated[
        float,
        typer.Option(
            "--clearance",
            "-c",
            help="Distance to expand every obstacle by",
        ),
    ],
    resolution: Annotated[
        float,
        typer.Option(
            "--resolution",
            "-r",
            help="Angular step of rounded corners in radians",
        ),
    ] = ExpansionConfig().resolution,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Output path (default: {name}-expanded.json)",
        ),
    ] = None,
) -> None:
    """Write a scene whose obstacles are grown by a clearance distance.

    Queries are copied unchanged.
    """
    print_header(__version__)

    try:
        settings = VispathSettings(
            expansion=ExpansionConfig(clearance=clearance, resolution=resolution),
        )
        scene = _load_scene(scene_path, quiet=False)

        print_step(f"Expanding by {clearance:g}")
        planner = ScenePlanner(settings)
        expanded = planner.expand_scene(scene)

        output_path = output if output is not None else SceneWriter.get_expanded_path(scene_path)
        SceneWriter(output_path).write_scene(expanded)

        print_written(
            output_path=str(output_path),
            obstacles=len(expanded.obstacles),
            vertices=expanded.vertex_count,
        )

    except typer.Exit:
        raise
    except Exception as e:
        _handle_errors(e)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


def main() -> None:
    """Entry point for the CLI application (alias for cli)."""
    cli()


if __name__ == "__main__":
    cli()
