import pytest

from pathviz.core.dijkstra import DijkstraAlgo, run
from pathviz.core.grid import create_grid
from pathviz.core.types import (
    RenderEvent, RunSummary, CURRENT, VISITED, PATH, NONE, WALL, START,
    PreconditionError, OutOfBoundsError,
)

from conftest import make_grid


def split(stream):
    items = list(stream)
    assert isinstance(items[-1], RunSummary)
    assert all(isinstance(i, RenderEvent) for i in items[:-1])
    return items[:-1], items[-1]


def manhattan(a, b):
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


@pytest.mark.parametrize("start,end", [
    ((0, 0), (6, 8)),
    ((3, 4), (3, 5)),
    ((6, 0), (0, 8)),
    ((2, 7), (5, 1)),
    ((4, 4), (0, 4)),
])
def test_open_grid_path_is_manhattan(start, end):
    g = create_grid(7, 9, start, end)
    events, summary = split(run(g))
    assert summary.path_length == manhattan(start, end)
    path = [e.cell for e in events if e.kind == PATH]
    assert len(path) == max(0, summary.path_length - 1)
    assert summary.visited_count >= summary.path_length + 1


def test_reference_scenario_25x50():
    g = create_grid(25, 50, (12, 10), (12, 40))
    events, summary = split(run(g))
    assert summary.path_length == 30

    path = [e.cell for e in events if e.kind == PATH]
    assert path == [(12, c) for c in range(11, 40)]

    cells = [(r, c) for r in range(25) for c in range(50)]
    inner = sum(1 for c in cells if manhattan(c, (12, 10)) <= 29)
    ring30 = sum(1 for c in cells if manhattan(c, (12, 10)) == 30)
    assert inner + 1 <= summary.visited_count <= inner + ring30

    currents = [e.cell for e in events if e.kind == CURRENT]
    # start and end are finalized but never drawn
    assert len(currents) == summary.visited_count - 2
    dists = [manhattan(c, (12, 10)) for c in currents]
    assert dists == sorted(dists)


def test_current_visited_pairs_then_path():
    g = create_grid(3, 3, (0, 0), (1, 1))
    events, summary = split(run(g))
    assert events == [
        RenderEvent(CURRENT, 0, 1), RenderEvent(VISITED, 0, 1),
        RenderEvent(CURRENT, 1, 0), RenderEvent(VISITED, 1, 0),
        RenderEvent(CURRENT, 0, 2), RenderEvent(VISITED, 0, 2),
        RenderEvent(PATH, 0, 1),
    ]
    assert summary == RunSummary(path_length=2, visited_count=5)


def test_ties_go_to_row_major_order():
    g = create_grid(5, 5, (2, 2), (2, 3))
    events, summary = split(run(g))
    assert events == [
        RenderEvent(CURRENT, 1, 2), RenderEvent(VISITED, 1, 2),
        RenderEvent(CURRENT, 2, 1), RenderEvent(VISITED, 2, 1),
    ]
    assert summary == RunSummary(path_length=1, visited_count=4)


def test_start_equals_end():
    g = create_grid(5, 5, (0, 0), (4, 4))
    events, summary = split(run(g, (3, 3), (3, 3)))
    assert events == []
    assert summary == RunSummary(path_length=0, visited_count=1)


def test_full_wall_column_is_unreachable():
    walls = [(r, 25) for r in range(25)]
    g = make_grid(25, 50, (12, 10), (12, 40), walls)
    events, summary = split(run(g))
    assert summary.path_length is None
    assert not summary.found
    assert [e for e in events if e.kind == PATH] == []
    # every cell left of the barrier gets finalized, nothing right of it
    assert summary.visited_count == 25 * 25
    assert all(e.col < 25 for e in events)
    assert len(events) == 2 * (25 * 25 - 1)


def test_boxed_in_start():
    walls = [(1, 2), (2, 3), (3, 2), (2, 1)]
    g = make_grid(5, 5, (2, 2), (0, 0), walls)
    events, summary = split(run(g))
    assert events == []
    assert summary == RunSummary(path_length=None, visited_count=1)


def test_detour_around_wall():
    walls = [(r, 2) for r in range(4)]
    g = make_grid(5, 5, (2, 0), (2, 4), walls)
    events, summary = split(run(g))
    assert summary.path_length == 8
    path = [(2, 0)] + [e.cell for e in events if e.kind == PATH] + [(2, 4)]
    assert len(path) == 9
    for a, b in zip(path, path[1:]):
        assert manhattan(a, b) == 1
    assert not any(g.is_wall(c) for c in path)
    assert not any(g.is_wall(e.cell) for e in events)


def test_run_is_deterministic(small_grid):
    small_grid.paint(1, 2, WALL)
    small_grid.paint(2, 2, WALL)
    assert list(run(small_grid)) == list(run(small_grid))


def test_run_leaves_caller_grid_untouched(small_grid):
    before = [list(r) for r in small_grid.cells]
    list(run(small_grid))
    assert small_grid.cells == before
    assert all(s == NONE for row in small_grid.render for s in row)


def test_run_checks_preconditions_eagerly():
    g = create_grid(4, 4, (0, 0), (3, 3))
    g.paint(3, 3, START)   # takes over the end cell, end is now unset
    with pytest.raises(PreconditionError):
        run(g)
    with pytest.raises(OutOfBoundsError):
        run(g, (0, 0), (4, 0))


def test_stream_is_single_use(small_grid):
    stream = run(small_grid)
    first = list(stream)
    assert first
    assert list(stream) == []


def test_step_api_phases(small_grid):
    algo = DijkstraAlgo()
    assert algo.step().status == "idle"

    algo.init(small_grid)
    res = algo.step()
    assert res.status == "running"
    assert res.current == (2, 0)
    assert res.events == []          # start is never drawn
    assert res.metrics["finalized"] == 1

    statuses = [res.status]
    while not res.finished:
        res = algo.step()
        statuses.append(res.status)
    assert res.status == "done"
    assert res.path[0] == (2, 0) and res.path[-1] == (2, 4)
    assert res.summary.path_length == 4
    assert "tracing" in statuses
    assert statuses.count("tracing") == 3   # end reached + 2 of 3 inner cells; last one is "done"

    again = algo.step()
    assert again.status == "done" and again.events == []
    assert again.summary == res.summary


def test_finalized_distances_never_decrease():
    walls = [(1, 1), (1, 2), (1, 3), (3, 1), (3, 2), (3, 3), (2, 3)]
    g = make_grid(6, 6, (2, 2), (5, 5), walls)
    algo = DijkstraAlgo()
    algo.init(g)
    for _ in algo.events():
        pass
    dists = [algo.dist[c] for c in algo.order]
    assert dists == sorted(dists)
    assert all(not g.is_wall(c) for c in algo.order)
    assert algo.summary.visited_count == len(algo.order)


def test_reset_rewinds_the_run(small_grid):
    algo = DijkstraAlgo()
    algo.init(small_grid)
    first = list(algo.events())
    algo.reset()
    assert algo.distance((2, 4)) == float("inf")
    assert algo.order == [] and algo.parent == {}
    assert list(algo.events()) == first
