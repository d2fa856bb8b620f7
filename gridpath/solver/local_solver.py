"""In-process A* solver producing the same results as the remote service."""

from __future__ import annotations

import asyncio
import heapq
import itertools
import logging
import math
from typing import Iterable, Iterator

from gridpath.grid.contracts import (
    GridSnapshot,
    Heuristic,
    PathfindRequest,
    Point,
    SolverResult,
    Step,
    resolve_heuristic,
)
from gridpath.solver.base import SolverClient, SolverResponseError

logger = logging.getLogger(__name__)

Cell = tuple[int, int]


class LocalSolver(SolverClient):
    """Deterministic A* over a grid snapshot, for demos and tests."""

    async def solve(self, request: PathfindRequest) -> SolverResult:
        # Large animated searches take a while; keep the event loop free.
        return await asyncio.to_thread(self.solve_sync, request)

    def close(self) -> None:
        pass

    def solve_sync(self, request: PathfindRequest) -> SolverResult:
        grid = request.grid
        _validate(grid)
        heuristic = resolve_heuristic(request.heuristic)
        logger.info(
            "Solving %dx%d grid from %s to %s (%s)",
            grid.width,
            grid.height,
            grid.start.as_tuple(),
            grid.end.as_tuple(),
            heuristic.value,
        )
        result = PathFinder(grid, heuristic).search(animate=request.animate)
        logger.info(
            "Search finished: success=%s length=%.2f explored=%d",
            result.success,
            result.path_length,
            result.nodes_explored,
        )
        return result


class PathFinder:
    def __init__(self, grid: GridSnapshot, heuristic: Heuristic) -> None:
        self._grid = grid
        self._heuristic = heuristic
        self._walls = {
            node.point.as_tuple() for row in grid.nodes for node in row if node.is_wall
        }
        self._point_cache: dict[Cell, Point] = {}

    def search(self, *, animate: bool) -> SolverResult:
        start = self._grid.start.as_tuple()
        goal = self._grid.end.as_tuple()
        counter = itertools.count()
        open_heap: list[tuple[float, int, Cell]] = []
        heapq.heappush(open_heap, (self._estimate(start, goal), next(counter), start))
        open_members: dict[Cell, None] = {start: None}
        came_from: dict[Cell, Cell | None] = {start: None}
        g_score: dict[Cell, int] = {start: 0}
        closed: set[Cell] = set()
        explored_points: list[Point] = []
        steps: list[Step] = []

        while open_heap:
            _, _, current = heapq.heappop(open_heap)
            if current in closed:
                continue
            open_members.pop(current, None)
            closed.add(current)
            explored_points.append(self._point(current))

            if current == goal:
                path = self._reconstruct_path(came_from, current)
                if animate:
                    steps.append(
                        self._step(current, open_members, explored_points, path=path)
                    )
                return SolverResult(
                    success=True,
                    path=self._points(path),
                    explored_nodes=list(explored_points),
                    path_length=path_length(path),
                    nodes_explored=len(explored_points),
                    steps=steps or None,
                )

            if animate:
                steps.append(self._step(current, open_members, explored_points))

            for neighbor in self._neighbors(current):
                if neighbor in closed:
                    continue
                tentative = g_score[current] + 1
                if tentative < g_score.get(neighbor, 1_000_000):
                    came_from[neighbor] = current
                    g_score[neighbor] = tentative
                    f_score = tentative + self._estimate(neighbor, goal)
                    heapq.heappush(open_heap, (f_score, next(counter), neighbor))
                    open_members[neighbor] = None

        return SolverResult(
            success=False,
            path=[],
            explored_nodes=list(explored_points),
            path_length=0.0,
            nodes_explored=len(explored_points),
            steps=steps or None,
        )

    def _neighbors(self, current: Cell) -> list[Cell]:
        x, y = current
        candidates = [(x, y + 1), (x + 1, y), (x, y - 1), (x - 1, y)]
        return [
            pos
            for pos in candidates
            if 0 <= pos[0] < self._grid.width
            and 0 <= pos[1] < self._grid.height
            and pos not in self._walls
        ]

    def _estimate(self, a: Cell, b: Cell) -> float:
        if self._heuristic == Heuristic.EUCLIDEAN:
            return euclidean(a, b)
        return float(manhattan(a, b))

    @staticmethod
    def _reconstruct_path(came_from: dict[Cell, Cell | None], current: Cell) -> list[Cell]:
        path = [current]
        while came_from.get(current) is not None:
            current = came_from[current]
            path.append(current)
        path.reverse()
        return path

    def _point(self, cell: Cell) -> Point:
        # Points are frozen, so one instance per cell is shared by every step.
        point = self._point_cache.get(cell)
        if point is None:
            point = Point.model_construct(x=cell[0], y=cell[1])
            self._point_cache[cell] = point
        return point

    def _points(self, cells: Iterable[Cell]) -> list[Point]:
        return [self._point(cell) for cell in cells]

    def _step(
        self,
        current: Cell,
        open_members: dict[Cell, None],
        explored_points: list[Point],
        *,
        path: list[Cell] | None = None,
    ) -> Step:
        # Steps repeat the whole closed set every frame; skip re-validation.
        return Step.model_construct(
            current_node=self._point(current),
            open_set=self._points(open_members),
            closed_set=explored_points[:],
            path=self._points(path) if path is not None else None,
            is_complete=path is not None,
        )


def manhattan(a: Cell, b: Cell) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def euclidean(a: Cell, b: Cell) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])


def path_length(path: list[Cell]) -> float:
    if len(path) < 2:
        return 0.0
    total = sum(euclidean(path[i - 1], path[i]) for i in range(1, len(path)))
    return round(total, 2)


def _validate(grid: GridSnapshot) -> None:
    """Apply the remote service's request checks, in the same order."""
    problem = next(_problems(grid), None)
    if problem is not None:
        raise SolverResponseError(problem, status_code=400)


def _problems(grid: GridSnapshot) -> Iterator[str]:
    if grid.width <= 0 or grid.height <= 0:
        yield "Invalid grid dimensions"
    for label, point in (("start", grid.start), ("end", grid.end)):
        if not (0 <= point.x < grid.width and 0 <= point.y < grid.height):
            yield f"Invalid {label} point"
    if grid.start == grid.end:
        yield "Start and end points cannot be the same"
    if len(grid.nodes) != grid.height:
        yield "Grid nodes array height mismatch"
    for index, row in enumerate(grid.nodes):
        if len(row) != grid.width:
            yield f"Grid nodes array width mismatch at row {index}"
