"""Rich rendering of grid state and search results."""

from __future__ import annotations

from dataclasses import dataclass

from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from searchgrid.core.cell import Cell, Role
from searchgrid.core.contracts import SearchSettings
from searchgrid.core.engine import SearchResult, SearchStatus
from searchgrid.core.grid import Grid

ROLE_GLYPHS = {
    Role.START: "S",
    Role.DESTINATION: "D",
    Role.BLOCKED: "#",
    Role.OPEN: ".",
}

PATH_STYLE = "bold red"
START_STYLE = "bold green"
DESTINATION_STYLE = "bold bright_blue"
BLOCKED_STYLE = "white"
VISITED_STYLE = "green"
OPEN_STYLE = "grey30"

VISITED_GLYPH = "o"
PATH_GLYPH = "*"

STATUS_STYLES = {
    SearchStatus.COMPLETED: "bold green",
    SearchStatus.UNREACHABLE: "bold red",
    SearchStatus.CANCELLED: "yellow",
    SearchStatus.RUNNING: "cyan",
    SearchStatus.IDLE: "grey70",
}


@dataclass(frozen=True)
class Viewport:
    x: int
    y: int
    width: int
    height: int


def compute_viewport(
    grid_width: int,
    grid_height: int,
    view_width: int,
    view_height: int,
    *,
    origin: tuple[int, int] = (0, 0),
) -> Viewport:
    view_width = max(1, min(grid_width, view_width))
    view_height = max(1, min(grid_height, view_height))
    origin_x = _clamp(origin[0], 0, max(0, grid_width - view_width))
    origin_y = _clamp(origin[1], 0, max(0, grid_height - view_height))
    return Viewport(x=origin_x, y=origin_y, width=view_width, height=view_height)


def cell_glyph(cell: Cell) -> tuple[str, str]:
    """Character and style for one cell; the solution path wins over roles."""
    if cell.on_solution_path:
        glyph = PATH_GLYPH if cell.role == Role.OPEN else ROLE_GLYPHS[cell.role]
        return glyph, PATH_STYLE
    if cell.role == Role.START:
        return ROLE_GLYPHS[Role.START], START_STYLE
    if cell.role == Role.DESTINATION:
        return ROLE_GLYPHS[Role.DESTINATION], DESTINATION_STYLE
    if cell.role == Role.BLOCKED:
        return ROLE_GLYPHS[Role.BLOCKED], BLOCKED_STYLE
    if cell.visited:
        return VISITED_GLYPH, VISITED_STYLE
    return ROLE_GLYPHS[Role.OPEN], OPEN_STYLE


def render_grid_lines(grid: Grid, viewport: Viewport | None = None) -> list[Text]:
    viewport = viewport or compute_viewport(
        grid.width, grid.height, grid.width, grid.height
    )
    lines: list[Text] = []
    for y in range(viewport.y, viewport.y + viewport.height):
        line = Text()
        for x in range(viewport.x, viewport.x + viewport.width):
            glyph, style = cell_glyph(grid.cell(x, y))
            line.append(glyph, style=style)
        lines.append(line)
    return lines


def render_grid(grid: Grid, *, title: str = "Grid") -> RenderableType:
    return Panel(Group(*render_grid_lines(grid)), title=title, padding=(0, 0))


def render_result(
    result: SearchResult, settings: SearchSettings, grid: Grid
) -> RenderableType:
    table = Table(title="Search Result", show_header=False)
    table.add_column("Field")
    table.add_column("Value")
    status = Text(result.status.value, style=STATUS_STYLES[result.status])
    table.add_row("Status", status)
    table.add_row("Map", f"{settings.map_type.value} {grid.width}x{grid.height}")
    table.add_row("Direction", settings.direction.value)
    table.add_row("Source", _format_coords(grid.source))
    table.add_row("Target", _format_coords(grid.target))
    table.add_row("Expanded", str(result.expanded))
    table.add_row("Visited", str(result.visited))
    if result.found:
        table.add_row("Path length", str(len(result.path)))
        table.add_row("Path cost", str(result.path[-1].accumulated_cost))
    else:
        table.add_row("Path length", "-")
    return table


def _format_coords(coords: tuple[int, int]) -> str:
    return f"{coords[0]}, {coords[1]}"


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))
