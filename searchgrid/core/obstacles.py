"""Obstacle predicates and grid builders for the selectable map types."""

from __future__ import annotations

import random

import numpy as np

from searchgrid.core.contracts import MapType, SearchSettings
from searchgrid.core.grid import Grid, ObstaclePredicate

RANDOM_FILL = 1 / 3
NOISE_CELL_SIZE = 8
NOISE_THRESHOLD = 0.6


def build_obstacle_predicate(
    map_type: MapType | str,
    height: int,
    width: int,
    *,
    seed: int | None = None,
) -> ObstaclePredicate:
    """Return a pure `(x, y) -> blocked` predicate over a precomputed mask."""
    mask = build_obstacle_mask(map_type, height, width, seed=seed)

    def is_blocked(x: int, y: int) -> bool:
        return bool(mask[y, x])

    return is_blocked


def build_grid(settings: SearchSettings, *, seed: int | None = None) -> Grid:
    """Build a fresh grid; `seed` overrides `settings.seed` for regeneration."""
    seed = settings.seed if seed is None else seed
    is_blocked = build_obstacle_predicate(
        settings.map_type, settings.height, settings.width, seed=seed
    )
    return Grid(
        settings.height, settings.width, is_blocked, rng=random.Random(seed)
    )


def build_obstacle_mask(
    map_type: MapType | str,
    height: int,
    width: int,
    *,
    seed: int | None = None,
) -> np.ndarray:
    rng = np.random.default_rng(seed)
    map_type = MapType(map_type)
    if map_type == MapType.MAZE:
        return _maze_mask(rng, height, width)
    if map_type == MapType.NOISE:
        return _noise_mask(rng, height, width)
    return rng.random((height, width)) < RANDOM_FILL


def _noise_mask(rng: np.random.Generator, height: int, width: int) -> np.ndarray:
    # Value noise: random lattice values, smoothly interpolated between knots.
    lattice = rng.random(
        (height // NOISE_CELL_SIZE + 2, width // NOISE_CELL_SIZE + 2)
    )
    ys = np.arange(height) / NOISE_CELL_SIZE
    xs = np.arange(width) / NOISE_CELL_SIZE
    y0 = ys.astype(int)
    x0 = xs.astype(int)
    ty = _smoothstep(ys - y0)[:, None]
    tx = _smoothstep(xs - x0)[None, :]

    top_left = lattice[np.ix_(y0, x0)]
    top_right = lattice[np.ix_(y0, x0 + 1)]
    bottom_left = lattice[np.ix_(y0 + 1, x0)]
    bottom_right = lattice[np.ix_(y0 + 1, x0 + 1)]
    top = top_left + (top_right - top_left) * tx
    bottom = bottom_left + (bottom_right - bottom_left) * tx
    values = top + (bottom - top) * ty
    return values > NOISE_THRESHOLD


def _maze_mask(rng: np.random.Generator, height: int, width: int) -> np.ndarray:
    """Recursive-backtracker maze; corridors run through even coordinates."""
    mask = np.ones((height, width), dtype=bool)
    mask[0, 0] = False
    stack = [(0, 0)]
    while stack:
        x, y = stack[-1]
        options = [
            (dx, dy)
            for dx, dy in ((-2, 0), (0, -2), (2, 0), (0, 2))
            if 0 <= x + dx < width and 0 <= y + dy < height and mask[y + dy, x + dx]
        ]
        if not options:
            stack.pop()
            continue
        dx, dy = options[rng.integers(len(options))]
        mask[y + dy // 2, x + dx // 2] = False
        mask[y + dy, x + dx] = False
        stack.append((x + dx, y + dy))
    return mask


def _smoothstep(t: np.ndarray) -> np.ndarray:
    return t * t * (3 - 2 * t)
