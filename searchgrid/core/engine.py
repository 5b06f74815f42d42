"""Incremental A* search over a grid with throttled redraw notifications."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Callable

from searchgrid.core.cell import Cell
from searchgrid.core.frontier import PriorityFrontier
from searchgrid.core.grid import Coords, Grid

logger = logging.getLogger(__name__)

# Expansions between notifications per unit of speed and map size factor.
EXPANSIONS_PER_SPEED_STEP = 10

Suspend = Callable[[], None]


class SearchStatus(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    COMPLETED = "completed"
    UNREACHABLE = "unreachable"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class SearchResult:
    """Terminal outcome of `SearchEngine.run`.

    A `RUNNING` status means the run was rejected because another search
    already holds the grid; nothing was touched.
    """

    status: SearchStatus
    path: tuple[Cell, ...] = ()
    expanded: int = 0
    visited: int = 0

    @property
    def found(self) -> bool:
        return self.status == SearchStatus.COMPLETED

    @property
    def already_running(self) -> bool:
        return self.status == SearchStatus.RUNNING


class SearchEngine:
    """Runs one search at a time and honours cooperative cancellation.

    `suspend` is called at every throttling checkpoint, right before the grid
    notifies its listeners. Drivers use it to yield to a render loop; without
    it the engine never pauses.
    """

    def __init__(self, *, suspend: Suspend | None = None) -> None:
        self._suspend = suspend
        self._state = SearchStatus.IDLE
        self._cancel = threading.Event()
        self._lock = threading.Lock()

    @property
    def state(self) -> SearchStatus:
        return self._state

    @property
    def running(self) -> bool:
        return self._state == SearchStatus.RUNNING

    def request_cancel(self) -> None:
        with self._lock:
            if not self.running:
                logger.debug("Cancel requested with no search running; ignored")
                return
            self._cancel.set()

    def run(
        self, grid: Grid, source: Coords, target: Coords, speed: int
    ) -> SearchResult:
        with self._lock:
            if grid.searching or self.running:
                logger.warning("Search already running; ignoring new run request")
                return SearchResult(status=SearchStatus.RUNNING)
            # Claimed before validation so a cancel sent while starting counts.
            self._state = SearchStatus.RUNNING
            grid.searching = True
        try:
            if speed < 0:
                raise ValueError(f"speed must be >= 0, got {speed}")
            start = grid.cell(*source)
            goal = grid.cell(*target)
            if start.is_blocked or goal.is_blocked:
                logger.info("Endpoint %s or %s is blocked", source, target)
                self._release(grid, SearchStatus.UNREACHABLE)
                return SearchResult(status=SearchStatus.UNREACHABLE)

            logger.info("Searching %s -> %s at speed %s", source, target, speed)
            result = self._search(grid, start, goal, speed)
        finally:
            if self.running:
                # Aborted by an exception; release the grid for the next run.
                self._release(grid, SearchStatus.IDLE)
        logger.info(
            "Search %s: expanded=%s visited=%s path=%s",
            result.status.value,
            result.expanded,
            result.visited,
            len(result.path),
        )
        return result

    def _search(
        self, grid: Grid, start: Cell, goal: Cell, speed: int
    ) -> SearchResult:
        grid.reset()
        interval = speed * grid.map_size_factor
        expansion_interval = interval * EXPANSIONS_PER_SPEED_STEP

        start.accumulated_cost = 0
        start.visited = True
        frontier = PriorityFrontier()
        frontier.insert(start)
        came_from: dict[Coords, Coords | None] = {start.coords: None}
        g_score: dict[Coords, int] = {start.coords: 0}
        found: Cell | None = None

        expanded = 0
        while frontier:
            if self._cancel.is_set():
                return self._finish(grid, SearchStatus.CANCELLED, expanded, came_from)

            current = frontier.extract_min()
            if current.coords == goal.coords:
                found = current
                break

            for neighbor in grid.neighbors(current.x, current.y):
                if neighbor.is_blocked or neighbor.visited:
                    continue
                cost = g_score[current.coords] + 1
                came_from[neighbor.coords] = current.coords
                g_score[neighbor.coords] = cost
                neighbor.accumulated_cost = cost
                neighbor.visited = True
                frontier.insert(neighbor)

            if interval and expanded % expansion_interval == 0:
                self._checkpoint(grid)
            expanded += 1

        if found is None:
            return self._finish(grid, SearchStatus.UNREACHABLE, expanded, came_from)

        path: list[Cell] = []
        coords: Coords | None = found.coords
        while coords is not None:
            if self._cancel.is_set():
                return self._finish(grid, SearchStatus.CANCELLED, expanded, came_from)
            cell = grid.cell(*coords)
            cell.on_solution_path = True
            cell.visited = True
            if interval and len(path) % interval == 0:
                self._checkpoint(grid)
            path.append(cell)
            coords = came_from[coords]
        path.reverse()
        return self._finish(
            grid, SearchStatus.COMPLETED, expanded, came_from, path=tuple(path)
        )

    def _checkpoint(self, grid: Grid) -> None:
        if self._suspend is not None:
            self._suspend()
        grid.notify()

    def _release(self, grid: Grid, status: SearchStatus) -> None:
        with self._lock:
            self._state = status
            self._cancel.clear()
            grid.searching = False

    def _finish(
        self,
        grid: Grid,
        status: SearchStatus,
        expanded: int,
        came_from: dict[Coords, Coords | None],
        *,
        path: tuple[Cell, ...] = (),
    ) -> SearchResult:
        self._release(grid, status)
        grid.notify()
        return SearchResult(
            status=status, path=path, expanded=expanded, visited=len(came_from)
        )


def forward_search(engine: SearchEngine, grid: Grid, speed: int) -> SearchResult:
    return engine.run(grid, grid.source, grid.target, speed)


def backward_search(engine: SearchEngine, grid: Grid, speed: int) -> SearchResult:
    # Heuristic costs still measure distance to grid.target, which is this
    # run's source.
    return engine.run(grid, grid.target, grid.source, speed)
