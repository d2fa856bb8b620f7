"""Interactive grid editor and animation player (Textual)."""

from __future__ import annotations

import logging

from rich.console import Group
from rich.panel import Panel
from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.events import Key
from textual.screen import Screen
from textual.widgets import Static

from gridpath.config import AppConfig
from gridpath.grid.grid_model import GridModel
from gridpath.grid.input_controller import InputController
from gridpath.grid.session import TOAST_SECONDS, PathfindingSession, Severity, Toast
from gridpath.render.grid_view import (
    render_controls,
    render_grid_lines,
    render_legend,
    render_stats,
    render_status_bar,
)
from gridpath.render.textual_widgets import (
    GridPointerDown,
    GridPointerMoved,
    GridPointerUp,
    GridWidget,
    WidgetScheduler,
)
from gridpath.solver.base import SolverClient

logger = logging.getLogger(__name__)

RIGHT_WIDTH = 34

NOTIFY_SEVERITY = {
    Severity.INFO: "information",
    Severity.SUCCESS: "information",
    Severity.ERROR: "error",
}


class EditorScreen(Screen):
    CSS = """
    Screen {
        layout: vertical;
    }
    #main {
        layout: horizontal;
        height: 1fr;
    }
    #grid-pane {
        width: 1fr;
        align: center middle;
        overflow: auto;
    }
    #side-pane {
        layout: vertical;
    }
    #status-bar {
        height: 3;
    }
    """

    BINDINGS = [
        ("c", "clear_path", "Clear path"),
        ("w", "clear_walls", "Clear walls"),
        ("m", "generate_maze", "Maze"),
        ("h", "cycle_heuristic", "Heuristic"),
        ("a", "toggle_animate", "Animate"),
        ("plus", "speed_up", "Faster"),
        ("minus", "slow_down", "Slower"),
        ("left_square_bracket", "smaller_grid", "Smaller"),
        ("right_square_bracket", "larger_grid", "Larger"),
    ]

    def __init__(self, *, config: AppConfig, solver: SolverClient) -> None:
        super().__init__()
        self.config = config
        self.session = PathfindingSession(
            model=GridModel(config.grid_size),
            solver=solver,
            scheduler=WidgetScheduler(self),
            heuristic=config.heuristic,
            animate=config.animate,
            speed=config.speed,
            maze_density=config.maze_density,
            on_toast=self._show_toast,
            on_change=self._refresh_ui,
        )
        self.controller = InputController(
            self.session.model,
            on_find_path=self.action_find_path,
            on_reset=self.action_reset_grid,
            on_change=self._refresh_ui,
            notify=self.session.show_message,
        )
        self._grid_widget: GridWidget | None = None
        self._side_panel: Static | None = None
        self._status_bar: Static | None = None

    def compose(self) -> ComposeResult:
        with Vertical(id="root"):
            with Horizontal(id="main"):
                with Vertical(id="grid-pane"):
                    yield GridWidget(self._render_grid, id="grid")
                yield Static(id="side-pane")
            yield Static(id="status-bar")

    def on_mount(self) -> None:
        self._grid_widget = self.query_one("#grid", GridWidget)
        self._side_panel = self.query_one("#side-pane", Static)
        self._status_bar = self.query_one("#status-bar", Static)
        self._side_panel.styles.width = RIGHT_WIDTH
        self.set_interval(0.5, self._refresh_status)
        self._refresh_ui()

    def on_unmount(self) -> None:
        self.session.player.cancel()

    def on_key(self, event: Key) -> None:
        if self.controller.key_pressed(event.key):
            event.stop()

    def on_grid_pointer_down(self, message: GridPointerDown) -> None:
        x, y = message.cell
        self.controller.press(x, y, button=message.button, modifier=message.modifier)

    def on_grid_pointer_moved(self, message: GridPointerMoved) -> None:
        x, y = message.cell
        self.controller.move(x, y)

    def on_grid_pointer_up(self, message: GridPointerUp) -> None:
        self.controller.release()

    def action_find_path(self) -> None:
        if self.session.busy:
            logger.debug("Find-path key ignored: solver request pending")
            return
        self.run_worker(self.session.find_path(), exclusive=True, group="solver")

    def action_reset_grid(self) -> None:
        self.controller.release()
        self.session.reset_grid()
        self._resize_grid_widget()

    def action_clear_path(self) -> None:
        self.session.clear_path()

    def action_clear_walls(self) -> None:
        self.session.clear_walls()

    def action_generate_maze(self) -> None:
        self.session.generate_maze()

    def action_cycle_heuristic(self) -> None:
        self.session.cycle_heuristic()

    def action_toggle_animate(self) -> None:
        self.session.toggle_animate()

    def action_speed_up(self) -> None:
        self.session.set_speed(self.session.player.speed + 1)

    def action_slow_down(self) -> None:
        self.session.set_speed(self.session.player.speed - 1)

    def action_smaller_grid(self) -> None:
        self.controller.release()
        self.session.cycle_grid_size(-1)
        self._resize_grid_widget()

    def action_larger_grid(self) -> None:
        self.controller.release()
        self.session.cycle_grid_size(1)
        self._resize_grid_widget()

    def _render_grid(self) -> list[Text]:
        return render_grid_lines(
            self.session.model, current_node=self.session.player.current_node
        )

    def _resize_grid_widget(self) -> None:
        if self._grid_widget:
            self._grid_widget.refresh(layout=True)

    def _show_toast(self, toast: Toast) -> None:
        self.notify(
            toast.text,
            severity=NOTIFY_SEVERITY[toast.severity],
            timeout=TOAST_SECONDS,
        )

    def _refresh_ui(self) -> None:
        if self._grid_widget:
            self._grid_widget.refresh()
        if self._side_panel:
            session = self.session
            self._side_panel.update(
                Group(
                    Panel(render_stats(session.stats), title="Stats"),
                    Panel(
                        render_controls(
                            grid_size=session.grid_size,
                            speed=session.player.speed,
                            heuristic=session.heuristic,
                            animate=session.animate,
                        ),
                        title="Controls",
                    ),
                    Panel(render_legend(), title="Legend"),
                    Panel(Text(_HELP, style="dim"), title="Keys"),
                )
            )
        self._refresh_status()

    def _refresh_status(self) -> None:
        if not self._status_bar:
            return
        session = self.session
        self._status_bar.update(
            render_status_bar(
                session.status,
                busy=session.busy,
                toast=session.active_toast(),
            )
        )


_HELP = (
    "left drag=walls | right=start | ctrl+left=end | space=find | r=reset | "
    "c=clear path | w=clear walls | m=maze | h=heuristic | a=animate | "
    "+/-=speed | [/]=size | q=quit"
)
