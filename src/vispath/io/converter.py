"""Conversion between scene file documents and domain models.

Scene files are JSON documents validated with pydantic. This module defines
the document schema and converts it to and from the domain types, keeping
pydantic out of the geometry core.

Scene document:

    {
      "obstacles": [[[x, y], ...], ...],
      "queries": [{"start": [x, y], "end": [x, y]}, ...]
    }

Result document:

    {
      "paths": [
        {"start": [x, y], "end": [x, y], "path": [[x, y], ...] | null,
         "length": float | null, "direct": bool},
        ...
      ]
    }
"""

from pydantic import BaseModel, Field

from vispath.domain import PathQuery, PathResult, Scene, Shape, Vec2

PointDocument = tuple[float, float]


class QueryDocument(BaseModel):
    """A start/end pair in a scene file."""

    start: PointDocument
    end: PointDocument


class SceneDocument(BaseModel):
    """Top-level scene file schema."""

    obstacles: list[list[PointDocument]] = Field(
        default_factory=list,
        description="Obstacle outlines, one vertex list each, in either winding order",
    )
    queries: list[QueryDocument] = Field(
        default_factory=list,
        description="Path queries to answer",
    )


class PathDocument(BaseModel):
    """One answered query in a result file."""

    start: PointDocument
    end: PointDocument
    path: list[PointDocument] | None
    length: float | None
    direct: bool = False


class ResultDocument(BaseModel):
    """Top-level result file schema."""

    paths: list[PathDocument] = Field(default_factory=list)


def document_to_scene(document: SceneDocument) -> Scene:
    """Convert a validated scene document to the domain model.

    Args:
        document: Validated scene document

    Returns:
        Scene with Shape obstacles and PathQuery queries
    """
    return Scene(
        obstacles=[Shape.from_tuples(outline) for outline in document.obstacles],
        queries=[
            PathQuery(start=Vec2.from_tuple(q.start), end=Vec2.from_tuple(q.end))
            for q in document.queries
        ],
    )


def scene_to_document(scene: Scene) -> SceneDocument:
    """Convert a domain scene back to its file document."""
    return SceneDocument(
        obstacles=[shape.to_tuples() for shape in scene.obstacles],
        queries=[
            QueryDocument(start=q.start.to_tuple(), end=q.end.to_tuple())
            for q in scene.queries
        ],
    )


def results_to_document(results: list[PathResult]) -> ResultDocument:
    """Convert answered queries to a result document."""
    return ResultDocument(
        paths=[
            PathDocument(
                start=result.query.start.to_tuple(),
                end=result.query.end.to_tuple(),
                path=[p.to_tuple() for p in result.path] if result.path is not None else None,
                length=result.length,
                direct=result.direct,
            )
            for result in results
        ]
    )
