"""Scene I/O layer for vispath.

This module handles reading scene files and writing results. It provides
a clean abstraction layer between the JSON documents (validated with
pydantic) and the domain models.

Key responsibilities:
- Load and validate scene files
- Reject self-intersecting obstacle outlines
- Write path results and expanded scenes

Key classes:
- SceneReader: Load scenes
- SceneWriter: Save results and scenes
"""

from vispath.io.reader import SceneReader
from vispath.io.writer import SceneWriter

__all__ = [
    "SceneReader",
    "SceneWriter",
]
