import pytest

from searchgrid.core.engine import (
    SearchEngine,
    SearchStatus,
    backward_search,
    forward_search,
)
from searchgrid.core.errors import InvalidCoordinatesError
from searchgrid.core.grid import Grid
from searchgrid.core.notifier import CHANGE


def test_open_grid_path_is_a_monotone_staircase() -> None:
    grid = _open_grid()
    result = SearchEngine().run(grid, (2, 0), (0, 2), 0)

    assert result.status == SearchStatus.COMPLETED
    assert result.found
    assert len(result.path) == 5
    assert result.path[0].coords == (2, 0)
    assert result.path[-1].coords == (0, 2)
    assert len(result.path) - 1 == grid.cell(0, 2).accumulated_cost
    _assert_unit_steps(result.path)
    assert all(cell.on_solution_path for cell in result.path)


def test_blocked_middle_row_is_unreachable() -> None:
    grid = Grid(3, 3, _middle_row_blocked, source=(1, 0), target=(1, 2))
    result = SearchEngine().run(grid, (1, 0), (1, 2), 0)

    assert result.status == SearchStatus.UNREACHABLE
    assert result.path == ()
    assert not any(grid.cell(x, 2).visited for x in range(3))
    assert not any(cell.on_solution_path for cell in grid.cells())


def test_enclosed_target_never_visits_cells_behind_the_wall() -> None:
    walls = {(3, 0), (3, 1), (3, 2), (3, 3), (3, 4)}
    grid = Grid(5, 6, lambda x, y: (x, y) in walls, source=(0, 2), target=(5, 2))
    result = forward_search(SearchEngine(), grid, 0)

    assert result.status == SearchStatus.UNREACHABLE
    assert not any(cell.visited for cell in grid.cells() if cell.x > 3)
    assert result.visited == 15


def test_path_cost_matches_length_around_obstacles() -> None:
    walls = {(2, 0), (2, 1), (2, 2), (2, 3)}
    grid = Grid(5, 5, lambda x, y: (x, y) in walls, source=(4, 0), target=(0, 0))
    result = forward_search(SearchEngine(), grid, 0)

    assert result.found
    assert len(result.path) - 1 == grid.cell(0, 0).accumulated_cost
    assert len(result.path) - 1 == 12
    assert not any(cell.coords in walls for cell in result.path)
    _assert_unit_steps(result.path)


def test_backward_search_runs_target_to_source() -> None:
    grid = _open_grid()
    heuristics = [cell.heuristic_cost for cell in grid.cells()]
    result = backward_search(SearchEngine(), grid, 0)

    assert result.found
    assert result.path[0].coords == grid.target
    assert result.path[-1].coords == grid.source
    assert len(result.path) == 5
    assert [cell.heuristic_cost for cell in grid.cells()] == heuristics


def test_repeated_runs_are_deterministic() -> None:
    walls = {(1, 1), (2, 1), (3, 3), (1, 3)}
    grid = Grid(5, 5, lambda x, y: (x, y) in walls, source=(4, 4), target=(0, 0))
    engine = SearchEngine()

    first = engine.run(grid, grid.source, grid.target, 0)
    first_visited = sum(cell.visited for cell in grid.cells())
    grid.reset()
    second = engine.run(grid, grid.source, grid.target, 0)
    second_visited = sum(cell.visited for cell in grid.cells())

    assert [c.coords for c in first.path] == [c.coords for c in second.path]
    assert (first.expanded, first.visited) == (second.expanded, second.visited)
    assert first_visited == second_visited


def test_source_equal_to_target_yields_single_cell_path() -> None:
    grid = _open_grid()
    result = SearchEngine().run(grid, (1, 1), (1, 1), 0)

    assert result.found
    assert [cell.coords for cell in result.path] == [(1, 1)]


def test_speed_zero_only_notifies_on_reset_and_completion() -> None:
    grid = _open_grid()
    suspends: list[int] = []
    events: list[str] = []
    grid.subscribe(CHANGE, lambda: events.append("change"))
    engine = SearchEngine(suspend=lambda: suspends.append(1))

    engine.run(grid, (2, 0), (0, 2), 0)

    assert events == ["change", "change"]
    assert suspends == []


def test_speed_throttles_expansion_and_path_notifications() -> None:
    grid = _open_grid()
    suspends: list[int] = []
    events: list[str] = []
    grid.subscribe(CHANGE, lambda: events.append("change"))
    engine = SearchEngine(suspend=lambda: suspends.append(1))

    result = engine.run(grid, (2, 0), (0, 2), 1)

    # One expansion checkpoint (every 10 expansions) plus one per path cell.
    assert len(suspends) == 1 + len(result.path)
    assert len(events) == len(suspends) + 2


def test_cancel_during_expansion_stops_and_allows_new_run() -> None:
    grid = _open_grid()
    engine = SearchEngine()

    def cancel() -> None:
        engine.request_cancel()

    grid.subscribe(CHANGE, cancel)
    cancelled = engine.run(grid, (2, 0), (0, 2), 0)
    grid.unsubscribe(CHANGE, cancel)

    assert cancelled.status == SearchStatus.CANCELLED
    assert cancelled.expanded == 0
    assert engine.state == SearchStatus.CANCELLED
    assert not grid.searching

    grid.reset()
    completed = engine.run(grid, (2, 0), (0, 2), 0)
    assert completed.status == SearchStatus.COMPLETED
    assert engine.state == SearchStatus.COMPLETED


def test_cancel_during_path_reconstruction() -> None:
    grid = _open_grid()

    def cancel_once_path_starts() -> None:
        if any(cell.on_solution_path for cell in grid.cells()):
            engine.request_cancel()

    engine = SearchEngine(suspend=cancel_once_path_starts)
    result = engine.run(grid, (2, 0), (0, 2), 1)

    assert result.status == SearchStatus.CANCELLED
    assert result.path == ()
    assert sum(cell.on_solution_path for cell in grid.cells()) == 1


def test_cancel_sent_while_run_is_starting_is_honoured(monkeypatch) -> None:
    grid = _open_grid()
    engine = SearchEngine()
    lookup = grid.cell

    def lookup_then_cancel(x: int, y: int):
        engine.request_cancel()
        return lookup(x, y)

    monkeypatch.setattr(grid, "cell", lookup_then_cancel)
    result = engine.run(grid, (2, 0), (0, 2), 0)
    monkeypatch.undo()

    assert result.status == SearchStatus.CANCELLED
    assert engine.state == SearchStatus.CANCELLED
    assert not grid.searching

    grid.reset()
    assert engine.run(grid, (2, 0), (0, 2), 0).found


def test_map_size_factor_stretches_notification_interval() -> None:
    small = Grid(3, 10, lambda x, y: False, source=(0, 0), target=(6, 0))
    large = Grid(300, 300, lambda x, y: False, source=(0, 0), target=(6, 0))
    assert small.map_size_factor == 1
    assert large.map_size_factor == 3

    counts = []
    for grid in (small, large):
        suspends: list[int] = []
        result = SearchEngine(suspend=lambda: suspends.append(1)).run(
            grid, grid.source, grid.target, 1
        )
        assert len(result.path) == 7
        counts.append(len(suspends))

    # One expansion checkpoint each; path hops every 1 versus every 3 cells.
    assert counts == [1 + 7, 1 + 3]


def test_cancel_while_idle_is_ignored() -> None:
    grid = _open_grid()
    engine = SearchEngine()
    engine.request_cancel()

    assert engine.run(grid, (2, 0), (0, 2), 0).found


def test_second_run_while_running_is_rejected() -> None:
    grid = _open_grid()
    engine = SearchEngine()
    other = SearchEngine()
    nested = []

    def start_again() -> None:
        if not nested:
            nested.append(engine.run(grid, (0, 0), (2, 2), 0))
            nested.append(other.run(grid, (0, 0), (2, 2), 0))

    grid.subscribe(CHANGE, start_again)
    result = engine.run(grid, (2, 0), (0, 2), 0)

    assert result.found
    assert [item.already_running for item in nested] == [True, True]
    assert other.state == SearchStatus.IDLE


def test_invalid_coordinates_fail_before_mutation() -> None:
    grid = _open_grid()
    events: list[str] = []
    grid.subscribe(CHANGE, lambda: events.append("change"))
    grid.cell(1, 1).visited = True
    engine = SearchEngine()

    with pytest.raises(InvalidCoordinatesError):
        engine.run(grid, (2, 0), (5, 5), 0)
    with pytest.raises(InvalidCoordinatesError):
        engine.run(grid, (-1, 0), (0, 2), 0)

    assert events == []
    assert grid.cell(1, 1).visited
    assert engine.state == SearchStatus.IDLE
    assert not grid.searching


def test_blocked_endpoint_is_unreachable_without_mutation() -> None:
    grid = Grid(3, 3, lambda x, y: (x, y) == (1, 1), source=(2, 0), target=(0, 2))
    events: list[str] = []
    grid.subscribe(CHANGE, lambda: events.append("change"))

    result = SearchEngine().run(grid, (1, 1), (0, 2), 0)

    assert result.status == SearchStatus.UNREACHABLE
    assert events == []


def test_listener_failure_releases_the_grid() -> None:
    grid = _open_grid()
    engine = SearchEngine()

    def explode() -> None:
        raise RuntimeError("render failed")

    grid.subscribe(CHANGE, explode)
    with pytest.raises(RuntimeError):
        engine.run(grid, (2, 0), (0, 2), 0)
    grid.unsubscribe(CHANGE, explode)

    assert not grid.searching
    assert engine.state == SearchStatus.IDLE
    grid.reset()
    assert engine.run(grid, (2, 0), (0, 2), 0).found


def test_negative_speed_is_rejected() -> None:
    with pytest.raises(ValueError):
        SearchEngine().run(_open_grid(), (2, 0), (0, 2), -1)


def _assert_unit_steps(path) -> None:
    for previous, current in zip(path, path[1:]):
        assert abs(previous.x - current.x) + abs(previous.y - current.y) == 1
        assert current.accumulated_cost - previous.accumulated_cost == 1


def _open_grid() -> Grid:
    return Grid(3, 3, lambda x, y: False, source=(2, 0), target=(0, 2))


def _middle_row_blocked(x: int, y: int) -> bool:
    return y == 1
