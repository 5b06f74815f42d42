"""Application entry points for headless runs and the interactive viewer."""

from __future__ import annotations

import os

from searchgrid.core.contracts import Direction, MapType, SearchSettings
from searchgrid.core.engine import (
    SearchEngine,
    SearchResult,
    backward_search,
    forward_search,
)
from searchgrid.core.grid import Grid
from searchgrid.core.obstacles import build_grid
from searchgrid.render.search_viewer import run_search_viewer

DEFAULT_HEIGHT = 40
DEFAULT_WIDTH = 100
DEFAULT_MAP_TYPE = MapType.RANDOM.value
DEFAULT_SPEED = 1
DEFAULT_LOG_LEVEL = "WARNING"


def resolve_settings(
    *,
    height: int | None = None,
    width: int | None = None,
    map_type: str | None = None,
    speed: int | None = None,
    seed: int | None = None,
    direction: str | None = None,
) -> SearchSettings:
    """Merge explicit values over SEARCHGRID_* environment variables and defaults."""
    return SearchSettings(
        height=_first_set(height, os.getenv("SEARCHGRID_HEIGHT"), DEFAULT_HEIGHT),
        width=_first_set(width, os.getenv("SEARCHGRID_WIDTH"), DEFAULT_WIDTH),
        map_type=(
            map_type or os.getenv("SEARCHGRID_MAP") or DEFAULT_MAP_TYPE
        ).lower(),
        speed=_first_set(speed, os.getenv("SEARCHGRID_SPEED"), DEFAULT_SPEED),
        seed=_first_set(seed, os.getenv("SEARCHGRID_SEED")),
        direction=direction or Direction.FORWARD.value,
    )


def resolve_log_level(log_level: str | None = None) -> str:
    return (
        log_level or os.getenv("SEARCHGRID_LOG_LEVEL") or DEFAULT_LOG_LEVEL
    ).upper()


def run_search(
    settings: SearchSettings,
    *,
    grid: Grid | None = None,
    engine: SearchEngine | None = None,
) -> tuple[Grid, SearchResult]:
    grid = grid or build_grid(settings)
    engine = engine or SearchEngine()
    if settings.direction == Direction.BACKWARD:
        result = backward_search(engine, grid, settings.speed)
    else:
        result = forward_search(engine, grid, settings.speed)
    return grid, result


def run_search_with_viewer(settings: SearchSettings) -> None:
    run_search_viewer(settings)


def _first_set(*values):
    for value in values:
        if value is not None and value != "":
            return value
    return None
