"""Configuration management for vispath.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- ExpansionConfig: Obstacle clearance settings
- SearchConfig: Path search settings
- VisitedRule: A* closed-set rule
- LoggingConfig: Logging settings
- VispathSettings: Main application settings
"""

from vispath.config.settings import (
    ExpansionConfig,
    LoggingConfig,
    SearchConfig,
    VisitedRule,
    VispathSettings,
    get_default_settings,
)

__all__ = [
    "ExpansionConfig",
    "LoggingConfig",
    "SearchConfig",
    "VisitedRule",
    "VispathSettings",
    "get_default_settings",
]
