"""Editable grid state with start/end markers and transient search flags."""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Iterable, Iterator

from gridpath.grid.contracts import GridSnapshot, NodeSnapshot, Point

logger = logging.getLogger(__name__)

DEFAULT_GRID_SIZE = 30
DEFAULT_MAZE_DENSITY = 0.3


@dataclass
class Node:
    point: tuple[int, int]
    is_wall: bool = False
    is_start: bool = False
    is_end: bool = False
    is_path: bool = False
    visited: bool = False
    in_open_set: bool = False

    @property
    def is_marker(self) -> bool:
        return self.is_start or self.is_end

    def clear_transient(self) -> None:
        self.is_path = False
        self.visited = False
        self.in_open_set = False


class GridModel:
    """Square grid of nodes addressed by (x, y).

    Structural state (walls, start, end) is only changed through the editing
    operations below, which keep exactly one start and one end node, never
    on the same cell and never on a wall. Transient flags (visited, open set,
    path) belong to the search visualization and can be wiped independently.
    """

    def __init__(self, size: int = DEFAULT_GRID_SIZE) -> None:
        self.width = 0
        self.height = 0
        self.start: tuple[int, int] = (0, 0)
        self.end: tuple[int, int] = (0, 0)
        self._nodes: list[list[Node]] = []
        self.resize(size)

    def resize(self, size: int) -> None:
        self.width = size
        self.height = size
        self.start = (1, 1)
        self.end = (size - 2, size - 2)
        self._nodes = [
            [Node(point=(x, y)) for x in range(size)] for y in range(size)
        ]
        self._node_at(self.start).is_start = True
        self._node_at(self.end).is_end = True
        logger.debug("Grid rebuilt at %dx%d", size, size)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def node(self, x: int, y: int) -> Node:
        if not self.in_bounds(x, y):
            raise ValueError(f"Point ({x}, {y}) is outside the grid")
        return self._nodes[y][x]

    def nodes(self) -> Iterator[Node]:
        for row in self._nodes:
            yield from row

    def toggle_wall(self, x: int, y: int) -> None:
        node = self.node(x, y)
        if node.is_marker:
            return
        node.is_wall = not node.is_wall

    def set_start(self, x: int, y: int) -> bool:
        """Move the start marker; refuses to land on the end marker."""
        target = self.node(x, y)
        if target.is_end:
            return False
        self._node_at(self.start).is_start = False
        self.start = (x, y)
        target.is_start = True
        target.is_wall = False
        return True

    def set_end(self, x: int, y: int) -> bool:
        """Move the end marker; refuses to land on the start marker."""
        target = self.node(x, y)
        if target.is_start:
            return False
        self._node_at(self.end).is_end = False
        self.end = (x, y)
        target.is_end = True
        target.is_wall = False
        return True

    def clear_walls(self) -> None:
        for node in self.nodes():
            if not node.is_marker:
                node.is_wall = False

    def clear_visualization(self) -> None:
        for node in self.nodes():
            node.clear_transient()

    def generate_maze(
        self,
        density: float = DEFAULT_MAZE_DENSITY,
        *,
        rng: random.Random | None = None,
    ) -> None:
        # No solvability check: a maze that blocks every route is allowed.
        rng = rng or random.Random()
        self.clear_walls()
        for node in self.nodes():
            if not node.is_marker and rng.random() < density:
                node.is_wall = True

    def mark_explored(self, points: Iterable[tuple[int, int]]) -> None:
        for node in self._unmarked(points):
            node.visited = True

    def mark_open(self, points: Iterable[tuple[int, int]]) -> None:
        for node in self._unmarked(points):
            node.in_open_set = True

    def mark_path(self, points: Iterable[tuple[int, int]]) -> None:
        for node in self._unmarked(points):
            node.is_path = True

    def apply_result(
        self,
        path: Iterable[tuple[int, int]],
        explored: Iterable[tuple[int, int]],
    ) -> None:
        self.mark_path(path)
        for node in self._unmarked(explored):
            if not node.is_path:
                node.visited = True

    def snapshot(self) -> GridSnapshot:
        return GridSnapshot(
            width=self.width,
            height=self.height,
            start=Point.of(self.start),
            end=Point.of(self.end),
            nodes=[
                [
                    NodeSnapshot(
                        point=Point.of(node.point),
                        is_wall=node.is_wall,
                        is_start=node.is_start,
                        is_end=node.is_end,
                        is_path=node.is_path,
                        visited=node.visited,
                        in_open_set=node.in_open_set,
                    )
                    for node in row
                ]
                for row in self._nodes
            ],
        )

    def check_invariants(self) -> None:
        starts = [node.point for node in self.nodes() if node.is_start]
        ends = [node.point for node in self.nodes() if node.is_end]
        if starts != [self.start]:
            raise ValueError(f"Expected single start at {self.start}, found {starts}")
        if ends != [self.end]:
            raise ValueError(f"Expected single end at {self.end}, found {ends}")
        if self.start == self.end:
            raise ValueError("Start and end share a cell")
        for node in self.nodes():
            if node.is_wall and node.is_marker:
                raise ValueError(f"Marker on wall at {node.point}")

    def _node_at(self, point: tuple[int, int]) -> Node:
        return self._nodes[point[1]][point[0]]

    def _unmarked(self, points: Iterable[tuple[int, int]]) -> Iterator[Node]:
        for x, y in points:
            if not self.in_bounds(x, y):
                continue
            node = self._nodes[y][x]
            if node.is_marker:
                continue
            yield node
