# pathviz/app/pacing.py
"""How long the viewer waits before applying each event (presentation only)."""

from typing import Callable, Union

from pathviz.config import Settings
from pathviz.core.types import RenderEvent, RunSummary, VISITED, PATH

Item = Union[RenderEvent, RunSummary]


class ReferencePacer:
    """visited -> fixed delay; i-th path cell -> i * path delay; everything else immediate."""
    def __init__(self, visit_delay_ms: int, path_delay_ms: int):
        self.visit_delay_ms = visit_delay_ms
        self.path_delay_ms = path_delay_ms
        self._path_i = 0

    def __call__(self, item: Item) -> int:
        if not isinstance(item, RenderEvent):
            return 0
        if item.kind == VISITED:
            return self.visit_delay_ms
        if item.kind == PATH:
            self._path_i += 1
            return self._path_i * self.path_delay_ms
        return 0


class FixedPacer:
    def __init__(self, delay_ms: int):
        self.delay_ms = delay_ms

    def __call__(self, item: Item) -> int:
        if isinstance(item, RenderEvent) and item.kind in (VISITED, PATH):
            return self.delay_ms
        return 0


def no_delay(item: Item) -> int:
    return 0


def make_pacer(settings: Settings) -> Callable[[Item], int]:
    """Fresh pacer per run (the reference pacer counts path cells)."""
    if settings.pacing == "reference":
        return ReferencePacer(settings.visit_delay_ms, settings.path_delay_ms)
    if settings.pacing == "fixed":
        return FixedPacer(settings.visit_delay_ms)
    return no_delay
