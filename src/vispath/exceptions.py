"""Exception hierarchy for vispath.

The geometry and search core never raises for expected outcomes; an
unreachable goal is None, not an error. These exceptions belong to the
layers around it: scene files, obstacle validation and the CLI.
"""


class VispathError(Exception):
    """Base exception for all vispath errors."""

    pass


class SceneError(VispathError):
    """Errors related to scene loading or saving."""

    pass


class SceneLoadError(SceneError):
    """Error loading a scene file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to load scene '{path}': {reason}")


class SceneFormatError(SceneError):
    """Scene file is not valid JSON or does not match the schema."""

    def __init__(self, path: str, details: str) -> None:
        self.path = path
        self.details = details
        super().__init__(f"Invalid scene format '{path}': {details}")


class SceneSaveError(SceneError):
    """Error saving a scene or result file."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to save '{path}': {reason}")


class ObstacleError(VispathError):
    """Errors related to obstacle outlines."""

    pass


class InvalidObstacleError(ObstacleError):
    """An obstacle outline is self-intersecting or degenerate."""

    def __init__(self, index: int, reason: str) -> None:
        self.index = index
        self.reason = reason
        super().__init__(f"Obstacle {index} is invalid: {reason}")


class QueryError(VispathError):
    """A path query is malformed."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
