"""Per-position search and display state."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Role(str, Enum):
    START = "start"
    DESTINATION = "destination"
    BLOCKED = "blocked"
    OPEN = "open"


@dataclass(eq=False)
class Cell:
    """One grid position.

    `x`, `y`, `role` and `heuristic_cost` are fixed when the grid is built.
    The search fields are rewritten by every run and cleared by `reset()`.
    """

    x: int
    y: int
    role: Role
    heuristic_cost: int = 0
    accumulated_cost: int = 0
    visited: bool = False
    on_solution_path: bool = False

    @property
    def coords(self) -> tuple[int, int]:
        return (self.x, self.y)

    @property
    def total_cost(self) -> int:
        return self.accumulated_cost + self.heuristic_cost

    @property
    def is_blocked(self) -> bool:
        return self.role == Role.BLOCKED

    def reset(self) -> None:
        self.visited = False
        self.on_solution_path = False
        self.accumulated_cost = 0
