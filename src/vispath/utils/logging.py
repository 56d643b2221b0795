"""Logging utilities for vispath."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog

_HANDLER_NAME = "vispath"


@dataclass
class PlanningStats:
    """Statistics from a planning run."""

    obstacle_count: int = 0
    node_count: int = 0
    edge_count: int = 0
    query_count: int = 0
    found_count: int = 0
    direct_count: int = 0
    unreachable_count: int = 0
    total_length: float = 0.0
    query_times_ms: list[float] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate planning duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0

    @property
    def avg_query_time_ms(self) -> float | None:
        """Average time per query in milliseconds."""
        if not self.query_times_ms:
            return None
        return sum(self.query_times_ms) / len(self.query_times_ms)


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "WARNING",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Handlers installed by an earlier call are replaced, so repeated
    configuration does not duplicate output.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    for handler in list(root_logger.handlers):
        if handler.get_name() == _HANDLER_NAME:
            root_logger.removeHandler(handler)
            handler.close()

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.set_name(_HANDLER_NAME)
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        root_logger.addHandler(file_handler)

    if not quiet:
        console_handler = logging.StreamHandler()
        console_handler.set_name(_HANDLER_NAME)
        console_handler.setLevel(getattr(logging, console_level.upper()))
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        root_logger.addHandler(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("vispath")
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=file_level,
    )

    return logger


class PlanningLogger:
    """Logger for tracking query progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = PlanningStats()

    def log_graph_built(self, obstacles: int, nodes: int, edges: int, duration_ms: float) -> None:
        """Log visibility graph construction."""
        self._logger.info(
            "Visibility graph built",
            obstacles=obstacles,
            nodes=nodes,
            edges=edges,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.obstacle_count = obstacles
        self._stats.node_count = nodes
        self._stats.edge_count = edges

    def log_obstacles_expanded(self, count: int, clearance: float, vertices: int) -> None:
        """Log clearance expansion."""
        self._logger.debug(
            "Obstacles expanded",
            obstacles=count,
            clearance=clearance,
            vertices=vertices,
        )

    def log_path_found(
        self,
        query_idx: int,
        waypoints: int,
        length: float,
        direct: bool,
        duration_ms: float,
    ) -> None:
        """Log a successful query."""
        self._logger.info(
            "Path found",
            query=query_idx,
            waypoints=waypoints,
            length=round(length, 3),
            direct=direct,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.query_count += 1
        self._stats.found_count += 1
        self._stats.total_length += length
        self._stats.query_times_ms.append(duration_ms)
        if direct:
            self._stats.direct_count += 1

    def log_path_unreachable(self, query_idx: int, duration_ms: float) -> None:
        """Log a query whose end point cannot be reached."""
        self._logger.info(
            "No path",
            query=query_idx,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.query_count += 1
        self._stats.unreachable_count += 1
        self._stats.query_times_ms.append(duration_ms)

    @property
    def stats(self) -> PlanningStats:
        """Get current planning statistics."""
        return self._stats
