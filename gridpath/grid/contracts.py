"""Wire contracts shared by the editor and the pathfinding solver."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)


class Heuristic(str, Enum):
    MANHATTAN = "manhattan"
    EUCLIDEAN = "euclidean"


class Point(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    x: int
    y: int

    def as_tuple(self) -> tuple[int, int]:
        return (self.x, self.y)

    @classmethod
    def of(cls, point: tuple[int, int]) -> "Point":
        return cls(x=point[0], y=point[1])


class NodeSnapshot(BaseModel):
    model_config = ConfigDict(extra="ignore")

    point: Point
    is_wall: bool = False
    is_start: bool = False
    is_end: bool = False
    is_path: bool = False
    visited: bool = False
    in_open_set: bool = False


class GridSnapshot(BaseModel):
    model_config = ConfigDict(extra="forbid")

    width: int
    height: int
    start: Point
    end: Point
    nodes: list[list[NodeSnapshot]]

    @model_validator(mode="after")
    def validate_shape(self) -> "GridSnapshot":
        if self.width <= 0 or self.height <= 0:
            raise ValueError("Invalid grid dimensions")
        if len(self.nodes) != self.height:
            raise ValueError("Grid nodes array height mismatch")
        for index, row in enumerate(self.nodes):
            if len(row) != self.width:
                raise ValueError(f"Grid nodes array width mismatch at row {index}")
        for label, point in (("start", self.start), ("end", self.end)):
            if not (0 <= point.x < self.width and 0 <= point.y < self.height):
                raise ValueError(f"Invalid {label} point")
        return self


class Step(BaseModel):
    """One frame of solver progress."""

    model_config = ConfigDict(extra="ignore")

    current_node: Point
    open_set: list[Point] = Field(default_factory=list)
    closed_set: list[Point] = Field(default_factory=list)
    path: list[Point] | None = None
    is_complete: bool = False

    @field_validator("open_set", "closed_set", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class PathfindRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    grid: GridSnapshot
    heuristic: str = Heuristic.MANHATTAN.value
    animate: bool = True


class SolverResult(BaseModel):
    model_config = ConfigDict(extra="ignore")

    success: bool
    path_length: float = 0.0
    nodes_explored: int = 0
    steps: list[Step] | None = None
    path: list[Point] = Field(default_factory=list)
    explored_nodes: list[Point] = Field(default_factory=list)

    @field_validator("path", "explored_nodes", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    @property
    def has_steps(self) -> bool:
        return bool(self.steps)


class ErrorResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    error: str


def resolve_heuristic(value: str | None) -> Heuristic:
    """Map a heuristic id to a known heuristic, defaulting to manhattan."""
    try:
        return Heuristic((value or "").lower())
    except ValueError:
        return Heuristic.MANHATTAN
