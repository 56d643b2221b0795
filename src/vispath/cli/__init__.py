"""Command-line interface for vispath.

This module provides the CLI using Typer with rich output for
user-friendly feedback and progress reporting.

Key features:
- Path queries from a scene file or the command line
- Visibility graph inspection
- Clearance expansion of scene obstacles
- Verbose/quiet output modes
"""

from vispath.cli.app import cli, main

__all__ = ["cli", "main"]
