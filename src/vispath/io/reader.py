"""Scene reader for loading obstacle sets and queries.

This module provides the SceneReader class for loading scene files
and converting them into domain models.
"""

from pathlib import Path

from pydantic import ValidationError

from vispath.domain import Scene
from vispath.exceptions import InvalidObstacleError, SceneFormatError, SceneLoadError
from vispath.io.converter import SceneDocument, document_to_scene


class SceneReader:
    """Loads scene files and validates their obstacles.

    Example:
        reader = SceneReader(Path("scene.json"))
        reader.load()
        for shape in reader.scene.obstacles:
            print(len(shape))
    """

    def __init__(self, scene_path: Path, validate_outlines: bool = True) -> None:
        """Initialize the scene reader.

        Args:
            scene_path: Path to the JSON scene file
            validate_outlines: Reject self-intersecting obstacle outlines
        """
        self._scene_path = scene_path
        self._validate_outlines = validate_outlines
        self._scene: Scene | None = None

    def load(self) -> None:
        """Load and validate the scene file.

        Raises:
            FileNotFoundError: If scene file does not exist
            SceneLoadError: If the file cannot be read
            SceneFormatError: If the file is not a valid scene document
            InvalidObstacleError: If an obstacle outline is not simple
        """
        if not self._scene_path.exists():
            raise FileNotFoundError(f"Scene file not found: {self._scene_path}")

        try:
            text = self._scene_path.read_text(encoding="utf-8")
        except OSError as e:
            raise SceneLoadError(str(self._scene_path), str(e)) from e

        try:
            document = SceneDocument.model_validate_json(text)
        except ValidationError as e:
            raise SceneFormatError(str(self._scene_path), str(e)) from e

        scene = document_to_scene(document)

        if self._validate_outlines:
            from vispath.core.geometry import is_valid_outline

            for index, shape in enumerate(scene.obstacles):
                if not is_valid_outline(shape.vertices):
                    raise InvalidObstacleError(
                        index, "outline repeats a vertex, doubles back or crosses itself"
                    )

        self._scene = scene

    @property
    def scene(self) -> Scene:
        """Return the loaded scene.

        Raises:
            RuntimeError: If the scene has not been loaded yet
        """
        if self._scene is None:
            raise RuntimeError("Scene not loaded. Call load() first.")
        return self._scene

    @property
    def obstacle_count(self) -> int:
        """Return number of obstacles in the scene.

        Raises:
            RuntimeError: If the scene has not been loaded yet
        """
        return len(self.scene.obstacles)

    @property
    def query_count(self) -> int:
        """Return number of queries in the scene.

        Raises:
            RuntimeError: If the scene has not been loaded yet
        """
        return len(self.scene.queries)

    def close(self) -> None:
        """Drop the loaded scene."""
        self._scene = None

    def __enter__(self) -> "SceneReader":
        """Context manager entry."""
        self.load()
        return self

    def __exit__(self, _exc_type: object, _exc_val: object, _exc_tb: object) -> None:
        """Context manager exit."""
        self.close()
