"""Application settings resolved from CLI flags, environment and defaults."""

from __future__ import annotations

import os
from dataclasses import dataclass

from gridpath.grid.animation import MAX_SPEED, MIN_SPEED
from gridpath.grid.contracts import Heuristic
from gridpath.grid.grid_model import DEFAULT_GRID_SIZE, DEFAULT_MAZE_DENSITY
from gridpath.grid.session import validate_grid_size

SOLVER_BACKENDS = ("local", "http")
DEFAULT_SOLVER = "local"
DEFAULT_SOLVER_URL = "http://localhost:8080"
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class AppConfig:
    grid_size: int = DEFAULT_GRID_SIZE
    speed: int = 5
    heuristic: str = Heuristic.MANHATTAN.value
    animate: bool = True
    solver: str = DEFAULT_SOLVER
    solver_url: str = DEFAULT_SOLVER_URL
    timeout: float = 10.0
    maze_density: float = DEFAULT_MAZE_DENSITY
    log_level: str = DEFAULT_LOG_LEVEL

    def __post_init__(self) -> None:
        validate_grid_size(self.grid_size)
        if not MIN_SPEED <= self.speed <= MAX_SPEED:
            raise ValueError(f"Speed must be between {MIN_SPEED} and {MAX_SPEED}")
        if self.heuristic not in {item.value for item in Heuristic}:
            raise ValueError(f"Unknown heuristic: {self.heuristic}")
        if self.solver not in SOLVER_BACKENDS:
            raise ValueError(f"Unknown solver backend: {self.solver}")
        if not 0.0 <= self.maze_density <= 1.0:
            raise ValueError("Maze density must be between 0 and 1")
        if self.timeout <= 0:
            raise ValueError("Timeout must be positive")


def resolve_config(
    *,
    grid_size: int | None = None,
    speed: int | None = None,
    heuristic: str | None = None,
    animate: bool | None = None,
    solver: str | None = None,
    solver_url: str | None = None,
    timeout: float | None = None,
    maze_density: float | None = None,
    log_level: str | None = None,
) -> AppConfig:
    defaults = AppConfig()
    return AppConfig(
        grid_size=grid_size if grid_size is not None else defaults.grid_size,
        speed=speed if speed is not None else defaults.speed,
        heuristic=(heuristic or defaults.heuristic).lower(),
        animate=animate if animate is not None else defaults.animate,
        solver=(solver or os.getenv("GRIDPATH_SOLVER") or DEFAULT_SOLVER).lower(),
        solver_url=solver_url or os.getenv("GRIDPATH_SOLVER_URL") or DEFAULT_SOLVER_URL,
        timeout=timeout if timeout is not None else defaults.timeout,
        maze_density=(
            maze_density if maze_density is not None else defaults.maze_density
        ),
        log_level=(
            log_level or os.getenv("GRIDPATH_LOG_LEVEL") or DEFAULT_LOG_LEVEL
        ).upper(),
    )
