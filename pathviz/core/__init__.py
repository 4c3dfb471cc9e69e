# pathviz/core/__init__.py
from pathviz.core.types import (
    Cell, RenderEvent, RunSummary, StepResult,
    GridError, PreconditionError, OutOfBoundsError,
)
from pathviz.core.grid import Grid, create_grid
from pathviz.core.dijkstra import DijkstraAlgo, run
from pathviz.core.session import Session

__all__ = [
    "Cell", "RenderEvent", "RunSummary", "StepResult",
    "GridError", "PreconditionError", "OutOfBoundsError",
    "Grid", "create_grid", "DijkstraAlgo", "run", "Session",
]
