"""Grid model and search engine."""

from searchgrid.core.cell import Cell, Role
from searchgrid.core.contracts import Direction, MapType, SearchSettings
from searchgrid.core.engine import (
    SearchEngine,
    SearchResult,
    SearchStatus,
    backward_search,
    forward_search,
)
from searchgrid.core.errors import (
    EmptyFrontierError,
    InvalidCoordinatesError,
    InvalidDimensionsError,
    SearchGridError,
)
from searchgrid.core.frontier import PriorityFrontier
from searchgrid.core.grid import Grid
from searchgrid.core.notifier import CHANGE, ChangeNotifier
from searchgrid.core.obstacles import build_grid, build_obstacle_predicate

__all__ = [
    "CHANGE",
    "Cell",
    "ChangeNotifier",
    "Direction",
    "EmptyFrontierError",
    "Grid",
    "InvalidCoordinatesError",
    "InvalidDimensionsError",
    "MapType",
    "PriorityFrontier",
    "Role",
    "SearchEngine",
    "SearchGridError",
    "SearchResult",
    "SearchSettings",
    "SearchStatus",
    "backward_search",
    "build_grid",
    "build_obstacle_predicate",
    "forward_search",
]
