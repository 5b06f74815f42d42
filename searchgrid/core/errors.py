"""Exception types raised by the grid and search engine."""

from __future__ import annotations


class SearchGridError(Exception):
    """Base class for searchgrid errors."""


class InvalidDimensionsError(SearchGridError, ValueError):
    def __init__(self, height: int, width: int) -> None:
        super().__init__(f"grid needs at least two cells, got {height}x{width}")
        self.height = height
        self.width = width


class InvalidCoordinatesError(SearchGridError, ValueError):
    def __init__(self, coords: tuple[int, int], height: int, width: int) -> None:
        super().__init__(
            f"coordinates {coords} are outside the {height}x{width} grid"
        )
        self.coords = coords


class EmptyFrontierError(SearchGridError, IndexError):
    """Raised when the engine pops from an empty frontier (an engine bug)."""
