"""Textual widgets for drawing the grid and capturing pointer input."""

from __future__ import annotations

from typing import Callable

from rich.console import Group, RenderableType
from rich.text import Text
from textual.events import MouseDown, MouseMove, MouseUp
from textual.message import Message
from textual.widget import Widget

from gridpath.grid.animation import ScheduledHandle, Scheduler
from gridpath.render.grid_view import CELL_WIDTH


class GridPointerDown(Message):
    """Pointer pressed over the grid, in cell coordinates."""

    def __init__(self, *, cell: tuple[int, int], button: int, modifier: bool) -> None:
        super().__init__()
        self.cell = cell
        self.button = button
        self.modifier = modifier


class GridPointerMoved(Message):
    """Pointer moved while captured by the grid, in cell coordinates."""

    def __init__(self, *, cell: tuple[int, int]) -> None:
        super().__init__()
        self.cell = cell


class GridPointerUp(Message):
    """Pointer released."""


class GridWidget(Widget):
    """Render grid lines and translate mouse events into cell messages."""

    DEFAULT_CSS = """
    GridWidget {
        width: auto;
        height: auto;
    }
    """

    def __init__(
        self,
        render_lines: Callable[[], list[Text]],
        *,
        id: str | None = None,
    ) -> None:
        super().__init__(id=id)
        self._render_lines = render_lines
        self._pressed = False

    def render(self) -> RenderableType:
        return Group(*self._render_lines())

    def get_content_width(self, container, viewport) -> int:
        lines = self._render_lines()
        return max((line.cell_len for line in lines), default=0)

    def get_content_height(self, container, viewport, width: int) -> int:
        return len(self._render_lines())

    def on_mouse_down(self, event: MouseDown) -> None:
        self._pressed = True
        self.capture_mouse()
        self.post_message(
            GridPointerDown(
                cell=cell_at(event.x, event.y),
                button=event.button,
                modifier=event.ctrl,
            )
        )
        event.stop()

    def on_mouse_move(self, event: MouseMove) -> None:
        if not self._pressed:
            return
        self.post_message(GridPointerMoved(cell=cell_at(event.x, event.y)))
        event.stop()

    def on_mouse_up(self, event: MouseUp) -> None:
        if not self._pressed:
            return
        self._pressed = False
        self.release_mouse()
        self.post_message(GridPointerUp())
        event.stop()


class TimerHandle(ScheduledHandle):
    def __init__(self, timer) -> None:
        self._timer = timer

    def cancel(self) -> None:
        self._timer.stop()


class WidgetScheduler(Scheduler):
    """Schedule playback ticks on a Textual message pump's timers."""

    def __init__(self, owner: Widget) -> None:
        self._owner = owner

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        return TimerHandle(self._owner.set_timer(max(delay, 0.001), callback))


def cell_at(x: int, y: int) -> tuple[int, int]:
    # Floor division keeps points left of or above the grid negative.
    return (x // CELL_WIDTH, y)
