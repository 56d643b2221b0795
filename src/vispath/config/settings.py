"""Configuration settings for vispath."""

import math
from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field


class VisitedRule(str, Enum):
    """When A* adds a node to its closed set.

    ON_RELAX reproduces the reference search: a node is closed only after it
    successfully relaxes at least one neighbor, so a node whose neighbors are
    all already optimal stays open and can be expanded again from a stale
    frontier entry. ON_POP is the textbook rule: a node is closed as soon as
    it is expanded. Both return optimal paths for a consistent heuristic.
    """

    ON_RELAX = "on_relax"
    ON_POP = "on_pop"


class ExpansionConfig(BaseModel):
    """Configuration for obstacle clearance expansion.

    Expansion is disabled while `clearance` is None.
    """

    clearance: float | None = Field(
        default=None,
        gt=0.0,
        description="Distance to keep between the agent's centre and obstacles",
    )
    resolution: float = Field(
        default=math.pi / 8,
        gt=0.0,
        le=math.pi,
        description="Approximate angular step of rounded corners, in radians",
    )

    @property
    def enabled(self) -> bool:
        """Whether obstacles should be expanded before building the graph."""
        return self.clearance is not None


class SearchConfig(BaseModel):
    """Configuration for path search."""

    visited_rule: VisitedRule = Field(
        default=VisitedRule.ON_RELAX,
        description="When A* closes a node (on_relax reproduces the reference search)",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class VispathSettings(BaseModel):
    """Main application settings."""

    expansion: ExpansionConfig = Field(default_factory=ExpansionConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> VispathSettings:
    """Get default application settings."""
    return VispathSettings()
