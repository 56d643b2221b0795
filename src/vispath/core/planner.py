"""Scene planning orchestration.

This module coordinates the full planning workflow for a scene file:
load the scene, optionally expand the obstacles by a clearance distance,
build the visibility graph once and answer every query against it.

Key components:
- ScenePlanner: Main orchestrator class for scene planning
"""

import time
from collections.abc import Callable, Sequence
from pathlib import Path

from vispath.config import VispathSettings, VisitedRule
from vispath.core.navigation import Navigation
from vispath.domain import NavigationObstacle, PathQuery, PathResult, Scene, Shape
from vispath.io import SceneReader, SceneWriter
from vispath.utils import PlanningLogger, PlanningStats, configure_logging


class ScenePlanner:
    """Orchestrates path planning over a scene.

    Manages the complete workflow:
    1. Load scene file
    2. Expand obstacles if a clearance is configured
    3. Build the visibility graph
    4. Answer each query and update statistics
    5. Save results

    Example:
        settings = VispathSettings()
        planner = ScenePlanner(settings)
        stats = planner.process(
            scene_path=Path("scene.json"),
            output_path=Path("scene-paths.json"),
        )
    """

    def __init__(self, config: VispathSettings, quiet: bool = False) -> None:
        """Initialize scene planner with configuration.

        Args:
            config: Vispath settings containing expansion, search and logging config
            quiet: Suppress console log output
        """
        self.config = config
        self.logger = configure_logging(
            log_file=config.logging.log_file,
            console_level=config.logging.log_level,
            file_level=config.logging.file_log_level,
            quiet=quiet,
        )
        self.planning_logger = PlanningLogger(self.logger)
        self._results: list[PathResult] = []

    @property
    def results(self) -> list[PathResult]:
        """Results of the most recent solve, in query order."""
        return self._results

    def prepare_obstacles(self, shapes: Sequence[Shape]) -> list[NavigationObstacle]:
        """Convert outlines to navigation obstacles, expanding them if configured.

        Args:
            shapes: Obstacle outlines in either winding order

        Returns:
            Counter-clockwise obstacles with reflex flags
        """
        obstacles = [NavigationObstacle.from_shape(shape) for shape in shapes]

        expansion = self.config.expansion
        if expansion.enabled and expansion.clearance is not None:
            obstacles = [
                obstacle.expand(expansion.clearance, expansion.resolution)
                for obstacle in obstacles
            ]
            self.planning_logger.log_obstacles_expanded(
                count=len(obstacles),
                clearance=expansion.clearance,
                vertices=sum(len(obstacle) for obstacle in obstacles),
            )

        return obstacles

    def build_navigation(self, shapes: Sequence[Shape]) -> Navigation:
        """Build the navigation structure for a set of outlines.

        Args:
            shapes: Obstacle outlines

        Returns:
            Navigation with its visibility graph
        """
        start_time = time.time()
        navigation = Navigation(self.prepare_obstacles(shapes))
        duration_ms = (time.time() - start_time) * 1000

        self.planning_logger.log_graph_built(
            obstacles=len(navigation.obstacles),
            nodes=len(navigation.graph),
            edges=navigation.graph.edge_count(),
            duration_ms=duration_ms,
        )
        return navigation

    def solve(
        self,
        scene: Scene,
        progress_callback: Callable[[int, int, PathResult], None] | None = None,
    ) -> list[PathResult]:
        """Answer every query of a scene.

        Args:
            scene: Obstacles and queries
            progress_callback: Optional callback(completed, total, result)
                for progress updates

        Returns:
            One PathResult per query, in query order
        """
        navigation = self.build_navigation(scene.obstacles)
        visited_rule = self.config.search.visited_rule

        results: list[PathResult] = []
        total = len(scene.queries)
        for query_idx, query in enumerate(scene.queries):
            result = self._answer(navigation, query, query_idx, visited_rule)
            results.append(result)
            if progress_callback:
                progress_callback(query_idx + 1, total, result)

        self._results = results
        return results

    def _answer(
        self,
        navigation: Navigation,
        query: PathQuery,
        query_idx: int,
        visited_rule: VisitedRule,
    ) -> PathResult:
        start_time = time.time()
        path = navigation.find_path(query.start, query.end, visited_rule)
        duration_ms = (time.time() - start_time) * 1000

        # A two-point path only arises from the straight-line shortcut
        direct = path is not None and len(path) == 2
        result = PathResult(query=query, path=path, direct=direct)
        if result.path is None:
            self.planning_logger.log_path_unreachable(query_idx, duration_ms)
        else:
            self.planning_logger.log_path_found(
                query_idx,
                waypoints=len(result.path),
                length=result.length or 0.0,
                direct=direct,
                duration_ms=duration_ms,
            )
        return result

    def expand_scene(self, scene: Scene) -> Scene:
        """Return the scene with its obstacles replaced by their expanded outlines.

        Queries are carried over unchanged.
        """
        obstacles = self.prepare_obstacles(scene.obstacles)
        return Scene(
            obstacles=[obstacle.shape for obstacle in obstacles],
            queries=list(scene.queries),
        )

    def process(
        self,
        scene_path: Path,
        output_path: Path | None = None,
        queries: Sequence[PathQuery] | None = None,
        progress_callback: Callable[[int, int, PathResult], None] | None = None,
        scene: Scene | None = None,
    ) -> PlanningStats:
        """Plan every query of a scene file.

        Args:
            scene_path: Path to input scene file
            output_path: Path for the result file (not written if None)
            queries: Queries to answer instead of the scene's own
            progress_callback: Optional callback(completed, total, result)
                for progress updates
            scene: Scene already loaded from `scene_path`; the file is not
                read again when given

        Returns:
            PlanningStats with counts and timing

        Raises:
            FileNotFoundError: If scene file does not exist
            SceneLoadError: If the scene file cannot be read
            SceneFormatError: If the scene file is malformed
            InvalidObstacleError: If an obstacle outline is not simple
            SceneSaveError: If the result file cannot be written
        """
        self.planning_logger = PlanningLogger(self.logger)
        stats = self.planning_logger.stats
        stats.start_time = time.time()

        self.logger.info(
            "Starting scene planning",
            input=str(scene_path),
            output=str(output_path) if output_path else None,
            visited_rule=self.config.search.visited_rule.value,
        )

        if scene is None:
            with SceneReader(scene_path) as reader:
                scene = reader.scene
        self.logger.info(
            "Scene loaded",
            obstacles=len(scene.obstacles),
            queries=len(scene.queries),
            vertices=scene.vertex_count,
        )

        if queries is not None:
            scene = Scene(obstacles=scene.obstacles, queries=list(queries))

        results = self.solve(scene, progress_callback=progress_callback)

        if output_path is not None:
            SceneWriter(output_path).write_results(results)
            self.logger.info("Results saved", output=str(output_path))

        stats.end_time = time.time()

        self.logger.info(
            "Planning complete",
            queries=stats.query_count,
            found=stats.found_count,
            unreachable=stats.unreachable_count,
            direct=stats.direct_count,
            duration_seconds=round(stats.duration_seconds, 2),
        )

        return stats
