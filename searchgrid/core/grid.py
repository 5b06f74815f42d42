"""Obstacle grid owning every cell, its adjacency and its change listeners."""

from __future__ import annotations

import logging
import random
from typing import Callable, Iterator

from searchgrid.core.cell import Cell, Role
from searchgrid.core.errors import InvalidCoordinatesError, InvalidDimensionsError
from searchgrid.core.notifier import CHANGE, ChangeNotifier, Listener

logger = logging.getLogger(__name__)

Coords = tuple[int, int]
ObstaclePredicate = Callable[[int, int], bool]

# Cells per notification-interval step; larger maps notify proportionally less.
AREA_PER_SPEED_STEP = 35_000


class Grid:
    """A `height` x `width` array of cells with fixed start and destination.

    The destination (`target`) is drawn from the left quarter of the columns
    and the start (`source`) from the right quarter, unless both are given.
    """

    def __init__(
        self,
        height: int,
        width: int,
        is_blocked: ObstaclePredicate,
        *,
        source: Coords | None = None,
        target: Coords | None = None,
        rng: random.Random | None = None,
    ) -> None:
        if height <= 0 or width <= 0 or height * width < 2:
            raise InvalidDimensionsError(height, width)
        if (source is None) != (target is None):
            raise ValueError("source and target must be given together")

        self.height = height
        self.width = width
        if source is None or target is None:
            source, target = _pick_endpoints(height, width, rng or random.Random())
        else:
            source, target = tuple(source), tuple(target)
            self._check_bounds(source)
            self._check_bounds(target)
            if source == target:
                raise ValueError(f"source and target must differ, both are {source}")
        self.source: Coords = source
        self.target: Coords = target
        self.searching = False
        self._notifier = ChangeNotifier()
        self._cells = [
            [self._build_cell(x, y, is_blocked) for x in range(width)]
            for y in range(height)
        ]
        logger.debug(
            "Built %sx%s grid, source=%s target=%s", height, width, source, target
        )

    @property
    def map_size_factor(self) -> int:
        return max(1, round(self.height * self.width / AREA_PER_SPEED_STEP))

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def cell(self, x: int, y: int) -> Cell:
        self._check_bounds((x, y))
        return self._cells[y][x]

    def cells(self) -> Iterator[Cell]:
        for row in self._cells:
            yield from row

    def neighbors(self, x: int, y: int) -> list[Cell]:
        """Orthogonal in-bounds neighbors, ordered left, up, right, down."""
        self._check_bounds((x, y))
        neighbors = []
        if x > 0:
            neighbors.append(self._cells[y][x - 1])
        if y > 0:
            neighbors.append(self._cells[y - 1][x])
        if x < self.width - 1:
            neighbors.append(self._cells[y][x + 1])
        if y < self.height - 1:
            neighbors.append(self._cells[y + 1][x])
        return neighbors

    def reset(self) -> None:
        for cell in self.cells():
            cell.reset()
        self.notify()

    def subscribe(self, event_type: str, callback: Listener) -> None:
        self._notifier.subscribe(event_type, callback)

    def unsubscribe(self, event_type: str, callback: Listener) -> None:
        self._notifier.unsubscribe(event_type, callback)

    def notify(self, event_type: str = CHANGE) -> None:
        self._notifier.notify(event_type)

    def _build_cell(self, x: int, y: int, is_blocked: ObstaclePredicate) -> Cell:
        if (x, y) == self.source:
            role = Role.START
        elif (x, y) == self.target:
            role = Role.DESTINATION
        elif is_blocked(x, y):
            role = Role.BLOCKED
        else:
            role = Role.OPEN
        return Cell(
            x=x,
            y=y,
            role=role,
            heuristic_cost=manhattan_distance((x, y), self.target),
        )

    def _check_bounds(self, coords: Coords) -> None:
        if not self.in_bounds(*coords):
            raise InvalidCoordinatesError(coords, self.height, self.width)


def manhattan_distance(a: Coords, b: Coords) -> int:
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def _pick_endpoints(
    height: int, width: int, rng: random.Random
) -> tuple[Coords, Coords]:
    if width == 1:
        source_y, target_y = rng.sample(range(height), 2)
        return (0, source_y), (0, target_y)
    band = (width - 1) // 4
    target = (rng.randint(0, band), rng.randint(0, height - 1))
    source = (rng.randint(width - 1 - band, width - 1), rng.randint(0, height - 1))
    return source, target
