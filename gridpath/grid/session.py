"""Find-path orchestration, status text, toast messages and search stats."""

from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from gridpath.grid.animation import AnimationPlayer, Scheduler
from gridpath.grid.contracts import Heuristic, PathfindRequest, SolverResult
from gridpath.grid.grid_model import GridModel
from gridpath.solver.base import SolverClient, SolverError

logger = logging.getLogger(__name__)

TOAST_SECONDS = 3.0
MIN_GRID_SIZE = 5
MAX_GRID_SIZE = 100
GRID_SIZE_CHOICES = (10, 20, 30, 40, 50)

STATUS_READY = "Ready"
STATUS_FINDING = "Finding path..."
STATUS_FOUND = "Path found!"
STATUS_NO_PATH = "No path found"
STATUS_ERROR = "Error occurred"
STATUS_ANIMATION_COMPLETE = "Animation complete"


class Severity(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class Toast:
    text: str
    severity: Severity
    created_at: float

    def expired(self, now: float) -> bool:
        return now - self.created_at >= TOAST_SECONDS


@dataclass(frozen=True)
class SearchStats:
    path_length: float | None = None
    nodes_explored: int | None = None
    algorithm: str = "A* (manhattan)"

    def format_path_length(self) -> str:
        if self.path_length is None:
            return "-"
        if float(self.path_length).is_integer():
            return str(int(self.path_length))
        return f"{self.path_length:.2f}"

    def format_nodes_explored(self) -> str:
        return "-" if self.nodes_explored is None else str(self.nodes_explored)


def algorithm_label(heuristic: str) -> str:
    return f"A* ({heuristic})"


def validate_grid_size(size: int) -> int:
    if not MIN_GRID_SIZE <= size <= MAX_GRID_SIZE:
        raise ValueError(
            f"Grid size must be between {MIN_GRID_SIZE} and {MAX_GRID_SIZE}"
        )
    return size


class PathfindingSession:
    """One editor session: grid, playback, solver and the status surface."""

    def __init__(
        self,
        *,
        model: GridModel,
        solver: SolverClient,
        scheduler: Scheduler,
        heuristic: str = Heuristic.MANHATTAN.value,
        animate: bool = True,
        speed: int = 5,
        maze_density: float = 0.3,
        rng: random.Random | None = None,
        clock: Callable[[], float] = time.monotonic,
        on_toast: Callable[[Toast], None] | None = None,
        on_change: Callable[[], None] | None = None,
    ) -> None:
        self.model = model
        self.solver = solver
        self.heuristic = Heuristic(heuristic).value
        self.animate = animate
        self.maze_density = maze_density
        self.rng = rng or random.Random()
        self.clock = clock
        self.on_toast = on_toast
        self.on_change = on_change
        self.status = STATUS_READY
        self.busy = False
        self.stats = SearchStats(algorithm=algorithm_label(self.heuristic))
        # Bumped whenever the grid a pending request was built from goes away.
        self._request_token = 0
        self.toast: Toast | None = None
        self.player: AnimationPlayer = AnimationPlayer(
            model,
            scheduler,
            speed=speed,
            on_frame=lambda _step: self._changed(),
            on_complete=self._on_animation_complete,
        )

    @property
    def grid_size(self) -> int:
        return self.model.width

    async def find_path(self) -> SolverResult | None:
        if self.busy:
            logger.debug("Find-path ignored: request already in flight")
            return None
        self.clear_path()
        self.busy = True
        self.status = STATUS_FINDING
        self._changed()
        try:
            if self.model.start == self.model.end:
                self.status = STATUS_ERROR
                self.show_message(
                    "Please set different start and end points", Severity.ERROR
                )
                return None
            request = PathfindRequest(
                grid=self.model.snapshot(),
                heuristic=self.heuristic,
                animate=self.animate,
            )
            token = self._request_token
            try:
                result = await self.solver.solve(request)
            except SolverError as exc:
                if token != self._request_token:
                    logger.info(
                        "Dropping solver error for a grid that has since changed: %s",
                        exc,
                    )
                    self.status = STATUS_READY
                    return None
                logger.warning("Find-path failed: %s", exc)
                self.status = STATUS_ERROR
                self.show_message(f"Error: {exc}", Severity.ERROR)
                return None
            if token != self._request_token:
                logger.info("Dropping solver result for a grid that has since changed")
                self.status = STATUS_READY
                return None
            self._apply_result(result)
            return result
        finally:
            self.busy = False
            self._changed()

    def _apply_result(self, result: SolverResult) -> None:
        if not result.success:
            self.status = STATUS_NO_PATH
            self.stats = SearchStats(
                path_length=0,
                nodes_explored=result.nodes_explored,
                algorithm=algorithm_label(self.heuristic),
            )
            self.show_message(
                "No path exists between start and end points", Severity.ERROR
            )
            return

        self.stats = SearchStats(
            path_length=result.path_length,
            nodes_explored=result.nodes_explored,
            algorithm=algorithm_label(self.heuristic),
        )
        if result.has_steps:
            self.player.start(result.steps or [])
        else:
            self.model.apply_result(
                (point.as_tuple() for point in result.path),
                (point.as_tuple() for point in result.explored_nodes),
            )
        self.status = STATUS_FOUND
        self.show_message("Path found successfully!", Severity.SUCCESS)

    def clear_path(self) -> None:
        self._request_token += 1
        self.player.cancel()
        self.model.clear_visualization()
        self.status = STATUS_READY
        self._changed()

    def clear_walls(self) -> None:
        self._request_token += 1
        self.model.clear_walls()
        self._changed()

    def generate_maze(self) -> None:
        self._request_token += 1
        self.model.generate_maze(self.maze_density, rng=self.rng)
        self.show_message("Random maze generated!", Severity.INFO)
        self._changed()

    def reset_grid(self) -> None:
        self._rebuild(self.model.width)

    def set_grid_size(self, size: int) -> None:
        self._rebuild(validate_grid_size(size))

    def cycle_grid_size(self, delta: int) -> int:
        choices = list(GRID_SIZE_CHOICES)
        if self.grid_size in choices:
            index = (choices.index(self.grid_size) + delta) % len(choices)
        else:
            index = 0 if delta > 0 else len(choices) - 1
        self.set_grid_size(choices[index])
        return self.grid_size

    def set_speed(self, speed: int) -> int:
        self.player.speed = speed
        self._changed()
        return self.player.speed

    def set_heuristic(self, heuristic: str) -> None:
        self.heuristic = Heuristic(heuristic).value
        self.stats = SearchStats(
            path_length=self.stats.path_length,
            nodes_explored=self.stats.nodes_explored,
            algorithm=algorithm_label(self.heuristic),
        )
        self._changed()

    def cycle_heuristic(self) -> str:
        options = [item.value for item in Heuristic]
        index = (options.index(self.heuristic) + 1) % len(options)
        self.set_heuristic(options[index])
        return self.heuristic

    def toggle_animate(self) -> bool:
        self.animate = not self.animate
        self._changed()
        return self.animate

    def show_message(self, text: str, severity: Severity = Severity.INFO) -> None:
        self.toast = Toast(text=text, severity=severity, created_at=self.clock())
        if self.on_toast:
            self.on_toast(self.toast)

    def active_toast(self, now: float | None = None) -> Toast | None:
        if self.toast is None:
            return None
        now = self.clock() if now is None else now
        if self.toast.expired(now):
            self.toast = None
        return self.toast

    def _rebuild(self, size: int) -> None:
        # Stale ticks and pending solver results must never touch a rebuilt grid.
        self._request_token += 1
        self.player.cancel()
        self.model.resize(size)
        self.stats = SearchStats(algorithm=algorithm_label(self.heuristic))
        self.status = STATUS_READY
        self._changed()

    def _on_animation_complete(self) -> None:
        self.status = STATUS_ANIMATION_COMPLETE
        self._changed()

    def _changed(self) -> None:
        if self.on_change:
            self.on_change()
