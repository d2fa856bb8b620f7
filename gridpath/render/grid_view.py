"""Rich rendering of the grid, stats and status surfaces."""

from __future__ import annotations

from enum import Enum

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from gridpath.grid.grid_model import GridModel, Node
from gridpath.grid.session import SearchStats, Severity, Toast

CELL_WIDTH = 2


class CellKind(str, Enum):
    EMPTY = "empty"
    WALL = "wall"
    START = "start"
    END = "end"
    PATH = "path"
    OPEN = "open"
    EXPLORED = "explored"
    CURRENT = "current"


CELL_COLORS = {
    CellKind.EMPTY: "#ffffff",
    CellKind.WALL: "#333333",
    CellKind.START: "#4CAF50",
    CellKind.END: "#f44336",
    CellKind.EXPLORED: "#87CEEB",
    CellKind.PATH: "#FFD700",
    CellKind.OPEN: "#90EE90",
    CellKind.CURRENT: "#FF6B6B",
}

CELL_GLYPHS = {
    CellKind.START: "S ",
    CellKind.END: "E ",
}

TOAST_STYLES = {
    Severity.INFO: "bold blue",
    Severity.SUCCESS: "bold green",
    Severity.ERROR: "bold red",
}


def resolve_cell_kind(node: Node) -> CellKind:
    if node.is_wall:
        return CellKind.WALL
    if node.is_start:
        return CellKind.START
    if node.is_end:
        return CellKind.END
    if node.is_path:
        return CellKind.PATH
    if node.in_open_set:
        return CellKind.OPEN
    if node.visited:
        return CellKind.EXPLORED
    return CellKind.EMPTY


def cell_style(kind: CellKind) -> str:
    return f"black on {CELL_COLORS[kind]}"


def render_grid_lines(
    model: GridModel, *, current_node: tuple[int, int] | None = None
) -> list[Text]:
    lines: list[Text] = []
    for y in range(model.height):
        line = Text()
        for x in range(model.width):
            kind = resolve_cell_kind(model.node(x, y))
            glyph = CELL_GLYPHS.get(kind, " " * CELL_WIDTH)
            # Overlay only: the node's own flags stay untouched.
            if current_node == (x, y):
                kind = CellKind.CURRENT
            line.append(glyph, style=cell_style(kind))
        lines.append(line)
    return lines


def render_stats(stats: SearchStats) -> Table:
    table = Table(show_header=False)
    table.add_column("Field")
    table.add_column("Value")
    table.add_row("Path length", stats.format_path_length())
    table.add_row("Nodes explored", stats.format_nodes_explored())
    table.add_row("Algorithm", stats.algorithm)
    return table


def render_controls(
    *, grid_size: int, speed: int, heuristic: str, animate: bool
) -> Table:
    table = Table(show_header=False)
    table.add_column("Field")
    table.add_column("Value")
    table.add_row("Grid", f"{grid_size}x{grid_size}")
    table.add_row("Speed", str(speed))
    table.add_row("Heuristic", heuristic)
    table.add_row("Animate", "on" if animate else "off")
    return table


def render_legend() -> Table:
    table = Table(show_header=False, box=None)
    table.add_column("Swatch")
    table.add_column("Meaning")
    for kind in (
        CellKind.START,
        CellKind.END,
        CellKind.WALL,
        CellKind.PATH,
        CellKind.OPEN,
        CellKind.EXPLORED,
        CellKind.CURRENT,
    ):
        table.add_row(Text("  ", style=cell_style(kind)), kind.value)
    return table


def render_status_bar(
    status: str, *, busy: bool = False, toast: Toast | None = None
) -> Panel:
    text = Text()
    text.append(f"Status: {status}", style="bold")
    if busy:
        text.append(" (working...)", style="italic")
    if toast is not None:
        text.append(" | ")
        text.append(toast.text, style=TOAST_STYLES[toast.severity])
    return Panel(text, padding=(0, 1))
