# pathviz/core/dijkstra.py
#!/usr/bin/env python3
"""
Dijkstra on a uniform-cost 4-connected grid — one unit of work per step() for animation.

Algorithm API used by the session and the viewer:
- init(grid, start=None, end=None) - reset() - step() -> StepResult - events()

Phases:
- "search": each step() finalizes one frontier cell -> [current, visited] events
- "trace":  each step() reveals one cell strictly between start and end -> [path]
- "done" / "no_path": terminal, step() keeps returning the same result, no events

Start and end cells never get render events; their kind is what gets drawn.

Tie-breaking in the PQ:
- (dist, found_at, index, cell): lower distance, then the cell whose distance
  was assigned earliest (found_at = finalizations so far), then row-major index.
  Same order as stable-sorting the whole pool by distance every iteration.
"""

import heapq
import logging
from dataclasses import dataclass, field
from math import inf
from typing import Dict, Iterator, List, Optional, Tuple, Union

from pathviz.core.grid import Grid
from pathviz.core.types import (
    Cell, RenderEvent, RunSummary, StepResult,
    CURRENT, VISITED, PATH, WALL, PreconditionError,
)

log = logging.getLogger(__name__)


@dataclass
class DijkstraAlgo:
    name: str = "Dijkstra"

    grid: Optional[Grid] = None                     # private working copy
    start: Optional[Cell] = None
    end: Optional[Cell] = None
    open_pq: List[Tuple[int, int, int, Cell]] = field(default_factory=list)  # (dist, found_at, index, cell)
    pool: set = field(default_factory=set)          # unfinalized, non-wall cells
    finalized: set = field(default_factory=set)
    dist: Dict[Cell, int] = field(default_factory=dict)
    parent: Dict[Cell, Cell] = field(default_factory=dict)
    order: List[Cell] = field(default_factory=list)  # finalization order
    path: List[Cell] = field(default_factory=list)
    trace_idx: int = 0
    phase: str = "idle"
    summary: Optional[RunSummary] = None

    # -------------------- lifecycle --------------------

    def init(self, grid: Grid, start: Optional[Cell] = None, end: Optional[Cell] = None) -> None:
        """Bind a snapshot of grid; start/end default to the grid's markers."""
        start = grid.start if start is None else tuple(start)
        end = grid.end if end is None else tuple(end)
        if start is None or end is None:
            raise PreconditionError("both start and end must be set before a run")
        grid.check_bounds(start)
        grid.check_bounds(end)
        self.grid = grid.copy()
        self.start, self.end = start, end
        self.reset()

    def reset(self) -> None:
        """Clear all search state and seed the pool with every non-wall cell."""
        if self.grid is None:
            return
        self.open_pq.clear(); self.pool.clear(); self.finalized.clear()
        self.dist.clear(); self.parent.clear(); self.order.clear(); self.path.clear()
        self.trace_idx = 0
        self.summary = None
        self.phase = "search"

        g = self.grid
        self.pool.update((r, k) for r in range(g.rows) for k in range(g.cols)
                         if g.cells[r][k] != WALL)
        if self.start in self.pool:
            self.dist[self.start] = 0
            heapq.heappush(self.open_pq, (0, 0, self._index(self.start), self.start))
        log.debug("%s reset: %d open cells, start=%s end=%s",
                  self.name, len(self.pool), self.start, self.end)

    # -------------------- helpers --------------------

    def _index(self, c: Cell) -> int:
        return c[0] * self.grid.cols + c[1]

    def distance(self, c: Cell) -> float:
        return self.dist.get(c, inf)

    def _is_marker(self, c: Cell) -> bool:
        return c == self.start or c == self.end

    def _reconstruct_path(self, end: Cell) -> List[Cell]:
        path: List[Cell] = []
        cur: Optional[Cell] = end
        while cur is not None:
            path.append(cur)
            cur = self.parent.get(cur)
        path.reverse()
        return path

    def _pop_min(self) -> Optional[Tuple[int, Cell]]:
        while self.open_pq:
            d, _, _, u = heapq.heappop(self.open_pq)
            if u in self.pool and d == self.dist.get(u, inf):
                return d, u
        # pool empty, or everything left sits at infinite distance
        return None

    # -------------------- stepping --------------------

    def step(self) -> StepResult:
        if self.grid is None:
            return StepResult(status="idle", metrics={"algo": self.name})

        if self.phase == "done":
            return StepResult(status="done", path=list(self.path), summary=self.summary,
                              metrics=self._metrics())
        if self.phase == "no_path":
            return StepResult(status="no_path", summary=self.summary, metrics=self._metrics())
        if self.phase == "trace":
            return self._trace_step()

        popped = self._pop_min()
        if popped is None:
            self.phase = "no_path"
            self.summary = RunSummary(path_length=None, visited_count=len(self.order))
            log.debug("%s: end %s unreachable after %d cells", self.name, self.end, len(self.order))
            return StepResult(status="no_path", summary=self.summary, metrics=self._metrics())

        d_u, u = popped
        self.pool.discard(u)
        self.finalized.add(u)
        self.order.append(u)

        events: List[RenderEvent] = []
        marker = self._is_marker(u)
        if not marker:
            events.append(RenderEvent(CURRENT, *u))

        if u == self.end:
            self.path = self._reconstruct_path(u)
            self.trace_idx = 0
            if len(self.path) <= 2:
                return self._finish(events, current=u)
            self.phase = "trace"
            return StepResult(status="tracing", events=events, current=u, path=list(self.path),
                              metrics=self._metrics())

        found_at = len(self.order)
        for v in self.grid.neighbors4(u):
            if v not in self.pool:
                continue  # wall or already finalized
            alt = d_u + 1
            if alt < self.dist.get(v, inf):
                self.dist[v] = alt
                self.parent[v] = u
                heapq.heappush(self.open_pq, (alt, found_at, self._index(v), v))

        if not marker:
            events.append(RenderEvent(VISITED, *u))
        return StepResult(status="running", events=events, current=u, metrics=self._metrics())

    def _trace_step(self) -> StepResult:
        inner = self.path[1:-1]
        c = inner[self.trace_idx]
        self.trace_idx += 1
        events = [RenderEvent(PATH, *c)]
        if self.trace_idx >= len(inner):
            return self._finish(events, current=c)
        return StepResult(status="tracing", events=events, current=c, path=list(self.path),
                          metrics=self._metrics())

    def _finish(self, events: List[RenderEvent], current: Cell) -> StepResult:
        self.phase = "done"
        self.summary = RunSummary(path_length=len(self.path) - 1, visited_count=len(self.order))
        log.debug("%s: path of length %d, %d cells finalized",
                  self.name, self.summary.path_length, self.summary.visited_count)
        return StepResult(status="done", events=events, current=current, path=list(self.path),
                          summary=self.summary, metrics=self._metrics())

    def events(self) -> Iterator[Union[RenderEvent, RunSummary]]:
        """Drive step() to completion: every render event in order, then the summary."""
        while True:
            res = self.step()
            yield from res.events
            if res.finished:
                yield res.summary
                return

    def _metrics(self) -> dict:
        return {
            "algo": self.name,
            "finalized": len(self.order),
            "frontier_size": len(self.pool),
            "path_len": len(self.path) - 1 if self.path else None,
        }


def run(grid: Grid, start: Optional[Cell] = None,
        end: Optional[Cell] = None) -> Iterator[Union[RenderEvent, RunSummary]]:
    """
    Lazy, single-use event stream for one search over a snapshot of grid.

    Preconditions are checked immediately (PreconditionError / OutOfBoundsError);
    the search itself only advances as the caller pulls events.
    """
    algo = DijkstraAlgo()
    algo.init(grid, start, end)
    return algo.events()
