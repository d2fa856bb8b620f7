import asyncio
import threading

import pytest

from gridpath.grid.contracts import PathfindRequest, Point
from gridpath.grid.grid_model import GridModel
from gridpath.solver.base import SolverResponseError
from gridpath.solver.local_solver import LocalSolver, euclidean, manhattan, path_length


def _request(model: GridModel, *, heuristic: str = "manhattan", animate: bool = True):
    return PathfindRequest(grid=model.snapshot(), heuristic=heuristic, animate=animate)


def test_open_grid_finds_shortest_path() -> None:
    model = GridModel(10)
    result = LocalSolver().solve_sync(_request(model, animate=False))

    assert result.success
    assert result.path[0] == Point(x=1, y=1)
    assert result.path[-1] == Point(x=8, y=8)
    assert len(result.path) == 15
    assert result.path_length == 14.0
    assert result.nodes_explored == len(result.explored_nodes)
    assert result.steps is None


def test_path_is_contiguous_and_avoids_walls() -> None:
    model = GridModel(10)
    for y in range(0, 8):
        model.toggle_wall(4, y)
    result = LocalSolver().solve_sync(_request(model, animate=False))

    cells = [point.as_tuple() for point in result.path]
    assert result.success
    assert all(not model.node(x, y).is_wall for x, y in cells)
    for a, b in zip(cells, cells[1:]):
        assert manhattan(a, b) == 1


def test_animated_steps_end_with_complete_frame() -> None:
    model = GridModel(10)
    result = LocalSolver().solve_sync(_request(model))

    assert result.steps
    assert result.steps[0].current_node == Point(x=1, y=1)
    assert [step.is_complete for step in result.steps].count(True) == 1
    final = result.steps[-1]
    assert final.is_complete
    assert final.current_node == Point(x=8, y=8)
    assert final.path == result.path
    assert len(result.steps) == result.nodes_explored
    for earlier, later in zip(result.steps, result.steps[1:]):
        assert len(later.closed_set) == len(earlier.closed_set) + 1


def test_blocked_goal_reports_failure_with_steps() -> None:
    model = GridModel(10)
    for x in range(10):
        model.toggle_wall(x, 5)
    result = LocalSolver().solve_sync(_request(model))

    assert not result.success
    assert result.path == []
    assert result.path_length == 0.0
    assert result.nodes_explored == 50
    assert result.steps
    assert not any(step.is_complete for step in result.steps)


def test_euclidean_heuristic_also_finds_optimal_path() -> None:
    model = GridModel(12)
    model.toggle_wall(5, 5)
    result = LocalSolver().solve_sync(_request(model, heuristic="euclidean"))

    assert result.success
    assert len(result.path) - 1 == manhattan((1, 1), (10, 10))


def test_unknown_heuristic_falls_back_to_manhattan() -> None:
    model = GridModel(8)
    result = LocalSolver().solve_sync(_request(model, heuristic="chebyshev"))
    assert result.success


def test_same_start_and_end_is_rejected() -> None:
    model = GridModel(8)
    grid = model.snapshot().model_copy(update={"end": Point(x=1, y=1)})
    request = PathfindRequest(grid=grid)

    with pytest.raises(SolverResponseError) as excinfo:
        LocalSolver().solve_sync(request)
    assert excinfo.value.status_code == 400


def test_async_solve_matches_sync() -> None:
    model = GridModel(8)
    request = _request(model, animate=False)
    solver = LocalSolver()
    assert asyncio.run(solver.solve(request)) == solver.solve_sync(request)


def test_async_solve_runs_off_the_event_loop_thread() -> None:
    threads: list[int] = []

    class ThreadRecordingSolver(LocalSolver):
        def solve_sync(self, request: PathfindRequest):
            threads.append(threading.get_ident())
            return super().solve_sync(request)

    async def scenario() -> int:
        ticks = 0

        async def heartbeat() -> None:
            nonlocal ticks
            while True:
                ticks += 1
                await asyncio.sleep(0)

        beat = asyncio.create_task(heartbeat())
        await ThreadRecordingSolver().solve(_request(GridModel(30)))
        beat.cancel()
        return ticks

    ticks = asyncio.run(scenario())

    assert threads and threads[0] != threading.get_ident()
    assert ticks > 0


def test_steps_share_point_instances() -> None:
    result = LocalSolver().solve_sync(_request(GridModel(20)))

    steps = result.steps or []
    first, last = steps[1], steps[-1]
    assert first.closed_set[0] is last.closed_set[0]
    assert last.closed_set[-1] is last.current_node
    assert result.explored_nodes[0] is first.closed_set[0]
    assert first.closed_set is not last.closed_set
    assert len(last.closed_set) == result.nodes_explored


def test_distance_helpers() -> None:
    assert manhattan((0, 0), (3, 4)) == 7
    assert euclidean((0, 0), (3, 4)) == 5.0
    assert path_length([]) == 0.0
    assert path_length([(0, 0)]) == 0.0
    assert path_length([(0, 0), (1, 0), (1, 1)]) == 2.0
    assert path_length([(0, 0), (1, 1)]) == 1.41


def test_mismatched_rows_rejected_with_server_message() -> None:
    grid = GridModel(6).snapshot()
    rows = [list(row) for row in grid.nodes]
    rows[2].pop()
    broken = grid.model_copy(update={"nodes": rows})

    with pytest.raises(SolverResponseError, match="width mismatch at row 2"):
        LocalSolver().solve_sync(PathfindRequest(grid=broken))
