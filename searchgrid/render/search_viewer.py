"""Interactive Textual viewer that animates searches on a grid."""

from __future__ import annotations

import logging
import random
import threading
import time
from dataclasses import dataclass

from rich.align import Align
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Vertical
from textual.screen import Screen
from textual.widgets import Static

from searchgrid.core.contracts import (
    MAX_SPEED,
    Direction,
    MapType,
    SearchSettings,
)
from searchgrid.core.engine import (
    SearchEngine,
    SearchResult,
    SearchStatus,
    backward_search,
    forward_search,
)
from searchgrid.core.notifier import CHANGE
from searchgrid.core.obstacles import build_grid
from searchgrid.render.grid_view import compute_viewport, render_grid_lines
from searchgrid.render.textual_app import SearchGridApp
from searchgrid.render.textual_widgets import GridWidget

logger = logging.getLogger(__name__)

SUSPEND_SECONDS = 0.001
UNREACHABLE_MESSAGE = "destination unreachable (try regenerating the map)"
MAP_TYPES = list(MapType)


@dataclass
class ViewerState:
    speed: int
    map_type: MapType
    camera_origin: tuple[int, int] = (0, 0)
    last_result: SearchResult | None = None
    closing: bool = False


class SearchViewerScreen(Screen):
    CSS = """
    Screen {
        layout: vertical;
    }
    #grid-view {
        height: 1fr;
    }
    #status-bar {
        height: 3;
    }
    """

    BINDINGS = [
        ("f", "forward_search", "Forward"),
        ("b", "backward_search", "Backward"),
        ("s", "stop_search", "Stop"),
        ("r", "regenerate", "Regenerate"),
        ("m", "cycle_map", "Map type"),
        ("plus", "speed_up", "Faster"),
        ("minus", "slow_down", "Slower"),
        ("up", "pan_up", "Pan up"),
        ("down", "pan_down", "Pan down"),
        ("left", "pan_left", "Pan left"),
        ("right", "pan_right", "Pan right"),
        ("q", "quit", "Quit"),
    ]

    def __init__(
        self, settings: SearchSettings, *, suspend_seconds: float = SUSPEND_SECONDS
    ) -> None:
        super().__init__()
        self.settings = settings
        self.state = ViewerState(speed=settings.speed, map_type=settings.map_type)
        self.engine = SearchEngine(suspend=lambda: time.sleep(suspend_seconds))
        self.grid = build_grid(settings)
        self._seeds = random.Random(settings.seed)
        self._grid_widget: GridWidget | None = None
        self._status_bar: Static | None = None
        self._worker: threading.Thread | None = None
        self._stop_event = threading.Event()

    def compose(self) -> ComposeResult:
        with Vertical(id="root"):
            yield GridWidget(self._render_grid, id="grid-view")
            yield Static(id="status-bar")

    def on_mount(self) -> None:
        self._grid_widget = self.query_one("#grid-view", GridWidget)
        self._status_bar = self.query_one("#status-bar", Static)
        self.grid.subscribe(CHANGE, self._on_grid_change)
        self._refresh_ui()

    def on_unmount(self) -> None:
        self.state.closing = True
        self.grid.unsubscribe(CHANGE, self._on_grid_change)
        self.engine.request_cancel()

    @property
    def searching(self) -> bool:
        worker_alive = self._worker is not None and self._worker.is_alive()
        return worker_alive or self.engine.running or self.grid.searching

    def action_forward_search(self) -> None:
        self._start_search(Direction.FORWARD)

    def action_backward_search(self) -> None:
        self._start_search(Direction.BACKWARD)

    def action_stop_search(self) -> None:
        self._stop_event.set()
        self.engine.request_cancel()

    def action_regenerate(self) -> None:
        if self.searching:
            return
        self._replace_grid(self._next_seed())

    def action_cycle_map(self) -> None:
        if self.searching:
            return
        self.state.map_type = next_map_type(self.state.map_type)
        self._replace_grid(self._next_seed())

    def action_speed_up(self) -> None:
        if self.searching:
            return
        self.state.speed = adjust_speed(self.state.speed, 1)
        self._refresh_ui()

    def action_slow_down(self) -> None:
        if self.searching:
            return
        self.state.speed = adjust_speed(self.state.speed, -1)
        self._refresh_ui()

    def action_pan_up(self) -> None:
        self._pan(0, -1)

    def action_pan_down(self) -> None:
        self._pan(0, 1)

    def action_pan_left(self) -> None:
        self._pan(-1, 0)

    def action_pan_right(self) -> None:
        self._pan(1, 0)

    def action_quit(self) -> None:
        self.engine.request_cancel()
        self.app.exit()

    def _start_search(self, direction: Direction) -> None:
        if self.searching:
            return
        grid = self.grid
        speed = self.state.speed
        self._stop_event.clear()
        self.state.last_result = None
        search = backward_search if direction == Direction.BACKWARD else forward_search

        def _work() -> None:
            result = search(self.engine, grid, speed)
            if not self.state.closing:
                self.app.call_from_thread(self._search_finished, result)

        self._worker = threading.Thread(target=_work, daemon=True)
        self._worker.start()
        self._refresh_ui()

    def _search_finished(self, result: SearchResult) -> None:
        self.state.last_result = result
        if result.status == SearchStatus.UNREACHABLE:
            self.app.notify(UNREACHABLE_MESSAGE, severity="warning")
        self._refresh_ui()

    def _on_grid_change(self) -> None:
        if self.state.closing:
            return
        if threading.current_thread() is self._worker:
            if self._stop_event.is_set():
                # Stop pressed before the engine had claimed the run.
                self.engine.request_cancel()
            self.app.call_from_thread(self._refresh_ui)
        else:
            self._refresh_ui()

    def _replace_grid(self, seed: int) -> None:
        self.grid.unsubscribe(CHANGE, self._on_grid_change)
        settings = self.settings.model_copy(update={"map_type": self.state.map_type})
        self.grid = build_grid(settings, seed=seed)
        self.grid.subscribe(CHANGE, self._on_grid_change)
        self.state.last_result = None
        logger.info("Regenerated %s map with seed %s", settings.map_type.value, seed)
        self._refresh_ui()

    def _next_seed(self) -> int:
        return self._seeds.randrange(2**32)

    def _pan(self, dx: int, dy: int) -> None:
        self.state.camera_origin = pan_origin(
            self.state.camera_origin, dx, dy, self.grid.width, self.grid.height
        )
        self._refresh_ui()

    def _refresh_ui(self) -> None:
        if self._status_bar:
            self._status_bar.update(Panel(Text(self._status_text()), padding=(0, 1)))
        if self._grid_widget:
            self._grid_widget.refresh()

    def _render_grid(self, size, content_size) -> RenderableType:
        inner_width = max(1, content_size.width - 2)
        inner_height = max(1, content_size.height - 2)
        viewport = compute_viewport(
            self.grid.width,
            self.grid.height,
            inner_width,
            inner_height,
            origin=self.state.camera_origin,
        )
        self.state.camera_origin = (viewport.x, viewport.y)
        lines = render_grid_lines(self.grid, viewport)
        return Panel(
            Align.center(Group(*lines), vertical="middle"),
            title=f"{self.state.map_type.value} {self.grid.width}x{self.grid.height}",
            padding=(0, 0),
        )

    def _status_text(self) -> str:
        if self.state.last_result is not None:
            status = self.state.last_result.status.value
        elif self.searching:
            status = "searching"
        else:
            status = "idle"
        return (
            "f=forward | b=backward | s=stop | r=regenerate | m=map | +/-=speed | "
            "arrows=pan | q=quit"
            + f" | speed={self.state.speed} | status={status}"
        )


def run_search_viewer(settings: SearchSettings) -> None:
    app = SearchGridApp(SearchViewerScreen(settings), title="searchgrid")
    app.run()


def adjust_speed(speed: int, delta: int) -> int:
    return max(0, min(MAX_SPEED, speed + delta))


def next_map_type(current: MapType) -> MapType:
    index = MAP_TYPES.index(current)
    return MAP_TYPES[(index + 1) % len(MAP_TYPES)]


def pan_origin(
    origin: tuple[int, int], dx: int, dy: int, width: int, height: int
) -> tuple[int, int]:
    return (
        max(0, min(width - 1, origin[0] + dx)),
        max(0, min(height - 1, origin[1] + dy)),
    )
