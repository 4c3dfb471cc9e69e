# pathviz/core/session.py
#!/usr/bin/env python3
"""
Editing/run session: the one piece of mutable state a front end talks to.

Holds the live grid, the draw mode, the run/idle flag and at most one
in-flight event stream. Painting and mode changes are refused while a run is
active; clear_run() / reset_grid() cancel it instead.
"""

import logging
from typing import Iterator, Optional, Union

from pathviz.core.dijkstra import run
from pathviz.core.grid import Grid, create_grid
from pathviz.core.types import (
    Cell, RenderEvent, RunSummary, MODES, WALL, VISITED, PreconditionError,
)

log = logging.getLogger(__name__)


def default_markers(rows: int, cols: int):
    """(rows//2, cols//5) and (rows//2, cols*4//5) -> (12,10)/(12,40) on 25x50."""
    return (rows // 2, cols // 5), (rows // 2, (cols * 4) // 5)


class Session:
    def __init__(self, rows: int = 25, cols: int = 50,
                 default_start: Optional[Cell] = None, default_end: Optional[Cell] = None):
        ds, de = default_markers(rows, cols)
        self.rows, self.cols = rows, cols
        self.default_start = tuple(default_start) if default_start is not None else ds
        self.default_end = tuple(default_end) if default_end is not None else de
        self._grid: Grid = create_grid(rows, cols, self.default_start, self.default_end)
        self._mode = WALL
        self._run: Optional[Iterator[Union[RenderEvent, RunSummary]]] = None
        self._ticket: Optional[object] = None   # identifies the active run
        self._summary: Optional[RunSummary] = None
        self._explored = 0

    # -------------------- state --------------------

    @property
    def grid(self) -> Grid:
        return self._grid

    @property
    def mode(self) -> str:
        return self._mode

    @property
    def is_running(self) -> bool:
        return self._run is not None

    @property
    def summary(self) -> Optional[RunSummary]:
        return self._summary

    @property
    def explored(self) -> int:
        """Cells shown as visited so far in the current/last run."""
        return self._explored

    # -------------------- editing --------------------

    def set_mode(self, mode: str) -> None:
        if mode not in MODES:
            raise ValueError(f"unknown draw mode {mode!r}")
        if self.is_running:
            raise PreconditionError("cannot change draw mode while a run is in progress")
        self._mode = mode

    def paint(self, row: int, col: int, mode: Optional[str] = None) -> Grid:
        if self.is_running:
            raise PreconditionError("cannot paint while a run is in progress")
        self._grid.paint(row, col, mode or self._mode)
        return self._grid

    # -------------------- running --------------------

    def start_run(self) -> Iterator[Union[RenderEvent, RunSummary]]:
        if self.is_running:
            raise PreconditionError("a run is already in progress")
        stream = run(self._grid)  # raises before any state changes
        self._grid.clear_transient()
        self._summary = None
        self._explored = 0
        self._ticket = ticket = object()
        self._run = self._drive(stream, ticket)
        log.info("run started: start=%s end=%s", self._grid.start, self._grid.end)
        return self._run

    def _drive(self, stream, ticket) -> Iterator[Union[RenderEvent, RunSummary]]:
        try:
            for item in stream:
                if isinstance(item, RunSummary):
                    self._summary = item
                    self._release(ticket)  # idle again once the summary is out
                    log.info("run finished: path_length=%s visited=%d",
                             item.path_length, item.visited_count)
                else:
                    self._grid.set_render(item.cell, item.kind)
                    if item.kind == VISITED:
                        self._explored += 1
                yield item
        finally:
            stream.close()
            self._release(ticket)

    def _release(self, ticket) -> None:
        if self._ticket is ticket:
            self._run = None
            self._ticket = None

    def next_event(self) -> Optional[Union[RenderEvent, RunSummary]]:
        """Pull one item from the active run; None when idle or just finished."""
        if self._run is None:
            return None
        return next(self._run, None)

    def run_to_end(self) -> Optional[RunSummary]:
        """Consume the whole stream without pacing; starts a run if none is active."""
        stream = self._run if self._run is not None else self.start_run()
        for _ in stream:
            pass
        return self._summary

    def _cancel(self) -> None:
        if self._run is not None:
            stream = self._run
            self._run = None
            self._ticket = None
            stream.close()
            log.info("run cancelled")

    def clear_run(self) -> None:
        self._cancel()
        self._grid.clear_transient()
        self._summary = None
        self._explored = 0

    def reset_grid(self) -> None:
        self._cancel()
        self._grid = create_grid(self.rows, self.cols, self.default_start, self.default_end)
        self._summary = None
        self._explored = 0
        log.info("grid reset to %dx%d defaults", self.rows, self.cols)
