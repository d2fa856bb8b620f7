import pytest
from rich.console import Console

from gridpath.__main__ import main
from gridpath.app import resolve_solver, run_headless
from gridpath.config import AppConfig
from gridpath.grid.animation import PlaybackState
from gridpath.grid.session import STATUS_ANIMATION_COMPLETE, STATUS_FOUND
from gridpath.solver.http_solver import HttpSolverClient
from gridpath.solver.local_solver import LocalSolver


def test_headless_run_replays_to_completion() -> None:
    console = Console(width=120, record=True)
    delays: list[float] = []

    session = run_headless(
        AppConfig(grid_size=10, speed=10),
        console=console,
        sleep=delays.append,
    )

    assert session.player.state == PlaybackState.COMPLETE
    assert session.status == STATUS_ANIMATION_COMPLETE
    assert delays[0] == 0.0
    assert delays[1:] == pytest.approx([0.01] * (len(delays) - 1))
    assert len(delays) == session.stats.nodes_explored
    output = console.export_text()
    assert "Grid 10x10" in output
    assert "Nodes explored" in output


def test_headless_run_without_animation_prints_once() -> None:
    console = Console(width=120, record=True)
    delays: list[float] = []

    session = run_headless(
        AppConfig(grid_size=10, animate=False),
        console=console,
        sleep=delays.append,
    )

    assert delays == []
    assert session.status == STATUS_FOUND
    assert "Status: Path found!" in console.export_text()


def test_headless_maze_is_seeded() -> None:
    first = run_headless(
        AppConfig(grid_size=12, animate=False),
        maze=True,
        seed=3,
        console=Console(record=True),
        sleep=lambda _: None,
    )
    second = run_headless(
        AppConfig(grid_size=12, animate=False),
        maze=True,
        seed=3,
        console=Console(record=True),
        sleep=lambda _: None,
    )

    walls = [node.point for node in first.model.nodes() if node.is_wall]
    assert walls
    assert walls == [node.point for node in second.model.nodes() if node.is_wall]


def test_resolve_solver_by_backend() -> None:
    assert isinstance(resolve_solver(AppConfig()), LocalSolver)
    client = resolve_solver(AppConfig(solver="http", solver_url="http://x:1"))
    assert isinstance(client, HttpSolverClient)
    assert client.url == "http://x:1/api/pathfind"


def test_main_rejects_bad_configuration() -> None:
    with pytest.raises(SystemExit, match="Invalid configuration"):
        main(["--headless", "--size", "2"])
