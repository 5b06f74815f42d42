"""Min-priority frontier of cells ordered by total estimated cost."""

from __future__ import annotations

import heapq
from itertools import count

from searchgrid.core.cell import Cell
from searchgrid.core.errors import EmptyFrontierError


class PriorityFrontier:
    """Binary heap keyed on `Cell.total_cost`; equal costs pop in insertion order.

    The priority is captured at insertion time, so a cell's costs must not
    change while it is queued.
    """

    def __init__(self) -> None:
        self._heap: list[tuple[int, int, Cell]] = []
        self._sequence = count()

    def insert(self, cell: Cell) -> None:
        heapq.heappush(self._heap, (cell.total_cost, next(self._sequence), cell))

    def extract_min(self) -> Cell:
        if not self._heap:
            raise EmptyFrontierError("extract_min() on an empty frontier")
        _, _, cell = heapq.heappop(self._heap)
        return cell

    def size(self) -> int:
        return len(self._heap)

    def __len__(self) -> int:
        return len(self._heap)

    def __bool__(self) -> bool:
        return bool(self._heap)
