"""Module entry point for `python -m searchgrid`."""

from __future__ import annotations

import argparse
import logging

from pydantic import ValidationError
from rich.console import Console
from textual.logging import TextualHandler

from searchgrid.app import (
    resolve_log_level,
    resolve_settings,
    run_search,
    run_search_with_viewer,
)
from searchgrid.core.contracts import MAX_SPEED, Direction, MapType, SearchSettings
from searchgrid.render.grid_view import render_grid, render_result


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Visualize A* search on a grid.")
    parser.add_argument(
        "--view",
        action="store_true",
        help="Open the interactive viewer instead of running one search.",
    )
    parser.add_argument("--height", type=int, default=None, help="Grid rows.")
    parser.add_argument("--width", type=int, default=None, help="Grid columns.")
    parser.add_argument(
        "--map",
        dest="map_type",
        choices=[map_type.value for map_type in MapType],
        default=None,
        help="Obstacle layout: random, noise, or maze.",
    )
    parser.add_argument(
        "--speed",
        type=int,
        default=None,
        help=f"Animation speed 0-{MAX_SPEED}; 0 renders only the final state.",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the obstacle layout and endpoint placement.",
    )
    parser.add_argument(
        "--direction",
        choices=[direction.value for direction in Direction],
        default=None,
        help="Search from start to destination (forward) or back (backward).",
    )
    parser.add_argument(
        "--no-grid",
        action="store_true",
        help="Only print the result summary (headless mode).",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (defaults to SEARCHGRID_LOG_LEVEL or WARNING).",
    )
    args = parser.parse_args(argv)

    try:
        settings = resolve_settings(
            height=args.height,
            width=args.width,
            map_type=args.map_type,
            speed=args.speed,
            seed=args.seed,
            direction=args.direction,
        )
    except ValidationError as exc:
        raise SystemExit(f"Invalid settings:\n{exc}") from None

    _configure_logging(resolve_log_level(args.log_level), textual=args.view)

    if args.view:
        run_search_with_viewer(settings)
        return

    _run_headless(settings, show_grid=not args.no_grid)


def _run_headless(settings: SearchSettings, *, show_grid: bool) -> None:
    console = Console()
    grid, result = run_search(settings)
    if show_grid:
        console.print(render_grid(grid, title=settings.map_type.value))
    console.print(render_result(result, settings, grid))


def _configure_logging(level: str, *, textual: bool) -> None:
    if textual:
        logging.basicConfig(level=level, handlers=[TextualHandler()])
    else:
        logging.basicConfig(
            level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s"
        )


if __name__ == "__main__":
    main()
