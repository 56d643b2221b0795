"""Writers for path results and scenes.

This module provides the SceneWriter class for saving answered queries
and (for example after clearance expansion) scenes.
"""

from pathlib import Path

from vispath.domain import PathResult, Scene
from vispath.exceptions import SceneSaveError
from vispath.io.converter import results_to_document, scene_to_document


class SceneWriter:
    """Writes result and scene documents as JSON.

    Example:
        writer = SceneWriter(Path("paths.json"))
        writer.write_results(results)
    """

    def __init__(self, output_path: Path) -> None:
        """Initialize the writer.

        Args:
            output_path: Path where the document will be saved
        """
        self._output_path = output_path

    @property
    def output_path(self) -> Path:
        return self._output_path

    def write_results(self, results: list[PathResult]) -> None:
        """Save answered queries.

        Args:
            results: Query results in query order

        Raises:
            SceneSaveError: If the file cannot be written
        """
        self._write(results_to_document(results).model_dump_json(indent=2))

    def write_scene(self, scene: Scene) -> None:
        """Save a scene in the scene file format.

        Raises:
            SceneSaveError: If the file cannot be written
        """
        self._write(scene_to_document(scene).model_dump_json(indent=2))

    def _write(self, text: str) -> None:
        try:
            self._output_path.write_text(text + "\n", encoding="utf-8")
        except OSError as e:
            raise SceneSaveError(str(self._output_path), str(e)) from e

    @staticmethod
    def get_expanded_path(input_path: Path) -> Path:
        """Generate the default output path for an expanded scene.

        Converts: scene.json -> scene-expanded.json
        """
        return input_path.parent / f"{input_path.stem}-expanded{input_path.suffix}"
