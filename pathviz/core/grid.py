# pathviz/core/grid.py
#!/usr/bin/env python3
"""
Grid model — persistent cell kinds plus the transient render layer.

- cells[row][col] holds the kind: "empty" | "wall" | "start" | "end"
- render[row][col] holds what the last run painted: "none" | "current" | "visited" | "path"
- start / end mirror the single cell of each marker kind (None when unset)

Search fields (distance, predecessor, finalized) are not stored here; the
engine keeps them on its own working copy for the duration of one run.
"""

import copy
from dataclasses import dataclass, field
from typing import List, Optional

from pathviz.core.types import (
    Cell, EMPTY, WALL, START, END, MODES, NONE,
    OutOfBoundsError,
)

# up, right, down, left; this order decides ties during the search
DIR4 = ((-1, 0), (0, 1), (1, 0), (0, -1))


@dataclass
class Grid:
    rows: int
    cols: int
    cells: List[List[str]]             # [row][col]
    start: Optional[Cell] = None
    end: Optional[Cell] = None
    render: List[List[str]] = field(default_factory=list)

    def __post_init__(self):
        assert len(self.cells) == self.rows and all(len(r) == self.cols for r in self.cells), \
            "cells size mismatch"
        if not self.render:
            self.render = [[NONE] * self.cols for _ in range(self.rows)]

    # -------------------- queries --------------------

    def in_bounds(self, c: Cell) -> bool:
        r, k = c
        return 0 <= r < self.rows and 0 <= k < self.cols

    def check_bounds(self, c: Cell) -> None:
        if not self.in_bounds(c):
            raise OutOfBoundsError(f"cell {c} outside {self.rows}x{self.cols} grid")

    def kind_at(self, c: Cell) -> str:
        self.check_bounds(c)
        r, k = c
        return self.cells[r][k]

    def is_wall(self, c: Cell) -> bool:
        return self.kind_at(c) == WALL

    def render_at(self, c: Cell) -> str:
        self.check_bounds(c)
        r, k = c
        return self.render[r][k]

    def neighbors4(self, c: Cell) -> List[Cell]:
        """In-bounds neighbors of c in up, right, down, left order (walls included)."""
        r, k = c
        out: List[Cell] = []
        for dr, dk in DIR4:
            n = (r + dr, k + dk)
            if self.in_bounds(n):
                out.append(n)
        return out

    # -------------------- mutation --------------------

    def paint(self, row: int, col: int, mode: str) -> bool:
        """Apply one paint stroke; returns True when a cell kind changed."""
        if mode not in MODES:
            raise ValueError(f"unknown paint mode {mode!r}")
        c = (row, col)
        self.check_bounds(c)
        cur = self.cells[row][col]

        if mode == WALL:
            if cur == EMPTY:
                self.cells[row][col] = WALL
                return True
            if cur == WALL:
                self.cells[row][col] = EMPTY
                return True
            return False  # start/end never become walls

        if mode == START:
            if self.start == c:
                return False
            if self.start is not None:
                self._set_kind(self.start, EMPTY)
            if self.end == c:
                self.end = None
            self._set_kind(c, START)
            self.start = c
            return True

        # END
        if self.end == c:
            return False
        if self.end is not None:
            self._set_kind(self.end, EMPTY)
        if self.start == c:
            self.start = None
        self._set_kind(c, END)
        self.end = c
        return True

    def _set_kind(self, c: Cell, kind: str) -> None:
        r, k = c
        self.cells[r][k] = kind

    def set_render(self, c: Cell, state: str) -> None:
        if self.is_wall(c):
            raise ValueError(f"render state on wall cell {c}")
        r, k = c
        self.render[r][k] = state

    def clear_transient(self) -> None:
        """Drop every render state; kinds are untouched."""
        for row in self.render:
            for k in range(self.cols):
                row[k] = NONE

    def copy(self) -> "Grid":
        return copy.deepcopy(self)


def create_grid(rows: int, cols: int, default_start: Cell, default_end: Cell) -> Grid:
    """All-empty rows x cols grid with the two default markers placed."""
    if rows < 1 or cols < 1:
        raise ValueError(f"grid size must be positive, got {rows}x{cols}")
    grid = Grid(rows, cols, [[EMPTY] * cols for _ in range(rows)])
    for name, c in (("start", default_start), ("end", default_end)):
        if not grid.in_bounds(c):
            raise ValueError(f"default {name} {c} out of bounds")
    if default_start == default_end:
        raise ValueError("default start and end coincide")
    grid.paint(*default_start, START)
    grid.paint(*default_end, END)
    return grid
