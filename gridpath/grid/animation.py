"""Step-by-step playback of solver exploration onto a GridModel."""

from __future__ import annotations

import heapq
import itertools
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Iterable, Protocol

from gridpath.grid.contracts import Step
from gridpath.grid.grid_model import GridModel

logger = logging.getLogger(__name__)

MIN_SPEED = 1
MAX_SPEED = 10
DEFAULT_SPEED = 5


class PlaybackState(str, Enum):
    IDLE = "idle"
    PLAYING = "playing"
    COMPLETE = "complete"


class ScheduledHandle(Protocol):
    def cancel(self) -> None:
        """Prevent the scheduled callback from running."""


class Scheduler(Protocol):
    def call_later(
        self, delay: float, callback: Callable[[], None]
    ) -> ScheduledHandle:
        """Run callback once after delay seconds."""


@dataclass
class _ManualHandle:
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True


@dataclass
class ManualScheduler(Scheduler):
    """Virtual-clock scheduler pumped explicitly by the caller."""

    now: float = 0.0
    _queue: list[tuple[float, int, _ManualHandle, Callable[[], None]]] = field(
        default_factory=list
    )
    _counter: itertools.count = field(default_factory=itertools.count)

    def call_later(self, delay: float, callback: Callable[[], None]) -> _ManualHandle:
        handle = _ManualHandle()
        heapq.heappush(
            self._queue, (self.now + max(0.0, delay), next(self._counter), handle, callback)
        )
        return handle

    @property
    def pending(self) -> int:
        return sum(1 for _, _, handle, _ in self._queue if not handle.cancelled)

    def next_delay(self) -> float | None:
        self._drop_cancelled()
        if not self._queue:
            return None
        return max(0.0, self._queue[0][0] - self.now)

    def run_next(self) -> bool:
        self._drop_cancelled()
        if not self._queue:
            return False
        due, _, handle, callback = heapq.heappop(self._queue)
        self.now = max(self.now, due)
        handle.cancelled = True
        callback()
        return True

    def advance(self, seconds: float) -> int:
        target = self.now + seconds
        fired = 0
        while True:
            self._drop_cancelled()
            if not self._queue or self._queue[0][0] > target:
                break
            self.run_next()
            fired += 1
        self.now = target
        return fired

    def run_all(self, *, limit: int = 100_000) -> int:
        fired = 0
        while fired < limit and self.run_next():
            fired += 1
        return fired

    def _drop_cancelled(self) -> None:
        while self._queue and self._queue[0][2].cancelled:
            heapq.heappop(self._queue)


def tick_delay_ms(speed: int) -> int:
    return max(10, min(100, 110 - 10 * speed))


class AnimationPlayer:
    """Replays a step sequence frame by frame.

    Idle -> Playing on start(); Playing -> Complete on the first step flagged
    is_complete; cancel() returns to Idle from any state. Only one tick chain
    is live at a time: every start() or cancel() bumps the generation, and
    ticks from an older generation are dropped.
    """

    def __init__(
        self,
        model: GridModel,
        scheduler: Scheduler,
        *,
        speed: int = DEFAULT_SPEED,
        on_frame: Callable[[Step], None] | None = None,
        on_complete: Callable[[], None] | None = None,
    ) -> None:
        self.model = model
        self.scheduler = scheduler
        self.on_frame = on_frame
        self.on_complete = on_complete
        self.state = PlaybackState.IDLE
        self.cursor = 0
        self.current_node: tuple[int, int] | None = None
        self._speed = DEFAULT_SPEED
        self.speed = speed
        self._steps: list[Step] = []
        self._handle: ScheduledHandle | None = None
        self._generation = 0

    @property
    def speed(self) -> int:
        return self._speed

    @speed.setter
    def speed(self, value: int) -> None:
        self._speed = max(MIN_SPEED, min(MAX_SPEED, int(value)))

    @property
    def tick_delay_ms(self) -> int:
        return tick_delay_ms(self._speed)

    @property
    def steps(self) -> list[Step]:
        return list(self._steps)

    @property
    def is_playing(self) -> bool:
        return self.state == PlaybackState.PLAYING

    def start(self, steps: Iterable[Step]) -> None:
        self.cancel()
        self._steps = list(steps)
        self.cursor = 0
        self.state = PlaybackState.PLAYING
        logger.debug("Playback started with %d steps", len(self._steps))
        self._schedule(0.0)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        self._generation += 1
        if self.state != PlaybackState.IDLE:
            logger.debug("Playback cancelled at step %d", self.cursor)
        self.state = PlaybackState.IDLE
        self.current_node = None

    def advance(self) -> None:
        """Apply the next frame and schedule the one after it."""
        if self.state != PlaybackState.PLAYING:
            return
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        if self.cursor >= len(self._steps):
            self.state = PlaybackState.COMPLETE
            return

        step = self._steps[self.cursor]
        self._apply(step)
        self.cursor += 1
        if self.on_frame:
            self.on_frame(step)

        if step.is_complete:
            self.state = PlaybackState.COMPLETE
            logger.debug("Playback complete after %d steps", self.cursor)
            if self.on_complete:
                self.on_complete()
            return
        self._schedule(self.tick_delay_ms / 1000.0)

    def _apply(self, step: Step) -> None:
        model = self.model
        model.clear_visualization()
        model.mark_explored(point.as_tuple() for point in step.closed_set)
        model.mark_open(point.as_tuple() for point in step.open_set)
        if step.is_complete and step.path:
            model.mark_path(point.as_tuple() for point in step.path)
        self.current_node = step.current_node.as_tuple()

    def _schedule(self, delay: float) -> None:
        generation = self._generation
        self._handle = self.scheduler.call_later(
            delay, lambda: self._on_tick(generation)
        )

    def _on_tick(self, generation: int) -> None:
        if generation != self._generation:
            return
        self._handle = None
        self.advance()
