"""Translate pointer and keyboard input into GridModel edits."""

from __future__ import annotations

import logging
from enum import IntEnum
from typing import Callable

from gridpath.grid.grid_model import GridModel
from gridpath.grid.session import Severity

logger = logging.getLogger(__name__)

FIND_PATH_KEYS = {"space", " "}
RESET_KEYS = {"r", "R"}


class PointerButton(IntEnum):
    PRIMARY = 1
    MIDDLE = 2
    SECONDARY = 3


class InputController:
    def __init__(
        self,
        model: GridModel,
        *,
        on_find_path: Callable[[], None] | None = None,
        on_reset: Callable[[], None] | None = None,
        on_change: Callable[[], None] | None = None,
        notify: Callable[[str, Severity], None] | None = None,
    ) -> None:
        self.model = model
        self.on_find_path = on_find_path
        self.on_reset = on_reset
        self.on_change = on_change
        self.notify = notify
        self.pointer_down = False
        self.drawing = False
        self._last_cell: tuple[int, int] | None = None

    def press(self, x: int, y: int, *, button: int, modifier: bool = False) -> None:
        self.pointer_down = True
        if not self.model.in_bounds(x, y):
            return

        if button == PointerButton.SECONDARY:
            self._move_marker(x, y, start=True)
        elif button == PointerButton.PRIMARY and modifier:
            self._move_marker(x, y, start=False)
        elif button == PointerButton.PRIMARY:
            self.drawing = True
            self._last_cell = (x, y)
            self.model.toggle_wall(x, y)
            self._changed()

    def move(self, x: int, y: int) -> None:
        if not (self.pointer_down and self.drawing):
            return
        if not self.model.in_bounds(x, y):
            return
        if self._last_cell == (x, y):
            return
        self._last_cell = (x, y)
        self.model.toggle_wall(x, y)
        self._changed()

    def release(self) -> None:
        self.pointer_down = False
        self.drawing = False
        self._last_cell = None

    def key_pressed(self, key: str) -> bool:
        if key in FIND_PATH_KEYS:
            if self.on_find_path:
                self.on_find_path()
            return True
        if key in RESET_KEYS:
            if self.on_reset:
                self.on_reset()
            return True
        return False

    def _move_marker(self, x: int, y: int, *, start: bool) -> None:
        label = "Start" if start else "End"
        moved = self.model.set_start(x, y) if start else self.model.set_end(x, y)
        if not moved:
            logger.debug("%s marker move to (%d, %d) refused", label, x, y)
            if self.notify:
                self.notify("Start and end points must be different", Severity.ERROR)
            return
        logger.debug("%s point set to (%d, %d)", label, x, y)
        self._changed()

    def _changed(self) -> None:
        if self.on_change:
            self.on_change()
