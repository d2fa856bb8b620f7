from rich.console import Console

from gridpath.grid.grid_model import GridModel
from gridpath.grid.session import SearchStats, Severity, Toast
from gridpath.render.grid_view import (
    CellKind,
    render_controls,
    render_grid_lines,
    render_legend,
    render_stats,
    render_status_bar,
    resolve_cell_kind,
)


def test_cell_kind_precedence() -> None:
    model = GridModel(6)
    node = model.node(3, 3)
    assert resolve_cell_kind(node) == CellKind.EMPTY

    node.visited = True
    assert resolve_cell_kind(node) == CellKind.EXPLORED
    node.in_open_set = True
    assert resolve_cell_kind(node) == CellKind.OPEN
    node.is_path = True
    assert resolve_cell_kind(node) == CellKind.PATH
    node.is_wall = True
    assert resolve_cell_kind(node) == CellKind.WALL

    start = model.node(*model.start)
    start.visited = True
    assert resolve_cell_kind(start) == CellKind.START
    assert resolve_cell_kind(model.node(*model.end)) == CellKind.END


def test_grid_lines_have_one_row_per_grid_row() -> None:
    model = GridModel(6)
    lines = render_grid_lines(model)

    assert len(lines) == 6
    assert all(line.cell_len == 12 for line in lines)
    assert lines[1].plain[2:4] == "S "
    assert lines[4].plain[8:10] == "E "


def test_current_node_overlay_does_not_touch_flags() -> None:
    model = GridModel(6)
    lines = render_grid_lines(model, current_node=(2, 2))

    spans = [span for span in lines[2].spans if span.start == 4]
    assert spans and "#FF6B6B" in str(spans[0].style)
    assert not model.node(2, 2).visited


def test_side_panels_render() -> None:
    console = Console(width=80, record=True)
    console.print(render_stats(SearchStats(path_length=9.5, nodes_explored=31)))
    console.print(
        render_controls(grid_size=30, speed=5, heuristic="manhattan", animate=True)
    )
    console.print(render_legend())
    output = console.export_text()

    assert "Path length" in output
    assert "9.50" in output
    assert "31" in output
    assert "A* (manhattan)" in output
    assert "30x30" in output
    assert "explored" in output
    assert "current" in output


def test_status_bar_shows_status_and_toast() -> None:
    console = Console(width=80, record=True)
    toast = Toast(text="Path found successfully!", severity=Severity.SUCCESS, created_at=0.0)
    console.print(render_status_bar("Path found!", busy=True, toast=toast))
    output = console.export_text()

    assert "Status: Path found!" in output
    assert "(working...)" in output
    assert "Path found successfully!" in output
