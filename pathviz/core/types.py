# pathviz/core/types.py
#!/usr/bin/env python3
from dataclasses import dataclass, field
from typing import List, Tuple, Optional, Dict, Any

Cell = Tuple[int, int]  # (row, col)

# cell kinds (persistent, set by painting)
EMPTY = "empty"
WALL = "wall"
START = "start"
END = "end"
KINDS = (EMPTY, WALL, START, END)

# render states (transient, set while a run is consumed)
NONE = "none"
CURRENT = "current"
VISITED = "visited"
PATH = "path"
RENDER_STATES = (NONE, CURRENT, VISITED, PATH)

# paint modes
MODES = (WALL, START, END)


class GridError(Exception):
    """Base class for rejected grid/session operations."""


class PreconditionError(GridError):
    """Operation attempted without the state it needs (no start/end, run in progress)."""


class OutOfBoundsError(GridError, IndexError):
    """Coordinates fall outside [0, rows) x [0, cols)."""


@dataclass(frozen=True)
class RenderEvent:
    kind: str   # "current" | "visited" | "path"
    row: int
    col: int

    @property
    def cell(self) -> Cell:
        return (self.row, self.col)


@dataclass(frozen=True)
class RunSummary:
    path_length: Optional[int]   # None -> unreachable
    visited_count: int

    @property
    def found(self) -> bool:
        return self.path_length is not None


@dataclass
class StepResult:
    status: str                   # "idle" | "running" | "tracing" | "done" | "no_path"
    events: List[RenderEvent] = field(default_factory=list)
    current: Optional[Cell] = None
    path: Optional[List[Cell]] = None
    summary: Optional[RunSummary] = None
    metrics: Dict[str, Any] = field(default_factory=dict)

    @property
    def finished(self) -> bool:
        return self.status in ("done", "no_path")
