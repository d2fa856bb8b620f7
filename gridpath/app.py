"""Application entry points for the editor and headless runs."""

from __future__ import annotations

import asyncio
import logging
import random
import time
from typing import Callable

from rich.console import Console, Group, RenderableType
from rich.columns import Columns
from rich.live import Live
from rich.panel import Panel

from gridpath.config import AppConfig
from gridpath.grid.animation import ManualScheduler
from gridpath.grid.grid_model import GridModel
from gridpath.grid.session import PathfindingSession
from gridpath.render.textual_app import run_editor as run_editor_screen
from gridpath.render.grid_view import render_grid_lines, render_stats, render_status_bar
from gridpath.solver.base import SolverClient, SolverConfig
from gridpath.solver.http_solver import HttpSolverClient
from gridpath.solver.local_solver import LocalSolver

logger = logging.getLogger(__name__)


def resolve_solver(config: AppConfig) -> SolverClient:
    if config.solver == "http":
        logger.info("Using remote solver at %s", config.solver_url)
        return HttpSolverClient(
            SolverConfig(base_url=config.solver_url, timeout=config.timeout)
        )
    return LocalSolver()


def run_editor(config: AppConfig) -> None:
    run_editor_screen(config, resolve_solver(config))


def run_headless(
    config: AppConfig,
    *,
    maze: bool = False,
    seed: int | None = None,
    console: Console | None = None,
    solver: SolverClient | None = None,
    sleep: Callable[[float], None] = time.sleep,
) -> PathfindingSession:
    """Run one search and replay it in a Rich live display."""
    console = console or Console()
    owns_solver = solver is None
    solver = solver or resolve_solver(config)
    scheduler = ManualScheduler()
    session = PathfindingSession(
        model=GridModel(config.grid_size),
        solver=solver,
        scheduler=scheduler,
        heuristic=config.heuristic,
        animate=config.animate,
        speed=config.speed,
        maze_density=config.maze_density,
        rng=random.Random(seed),
    )
    if maze:
        session.generate_maze()

    try:
        asyncio.run(session.find_path())
    finally:
        if owns_solver:
            solver.close()

    if session.player.is_playing:
        with Live(
            render_session(session), console=console, auto_refresh=False
        ) as live:
            while True:
                delay = scheduler.next_delay()
                if delay is None:
                    break
                sleep(delay)
                scheduler.run_next()
                live.update(render_session(session), refresh=True)
    else:
        console.print(render_session(session))
    return session


def render_session(session: PathfindingSession) -> RenderableType:
    grid = Panel(
        Group(
            *render_grid_lines(
                session.model, current_node=session.player.current_node
            )
        ),
        title=f"Grid {session.grid_size}x{session.grid_size}",
        expand=False,
    )
    stats = Panel(render_stats(session.stats), title="Stats")
    status = render_status_bar(session.status, toast=session.toast)
    return Group(Columns([grid, stats]), status)
