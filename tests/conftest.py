import pytest

from pathviz.core.grid import Grid, create_grid
from pathviz.core.types import EMPTY, WALL


def make_grid(rows, cols, start, end, walls=()):
    g = create_grid(rows, cols, start, end)
    for c in walls:
        g.paint(*c, WALL)
    return g


@pytest.fixture
def small_grid():
    """5x5, start (2,0), end (2,4), no walls."""
    return make_grid(5, 5, (2, 0), (2, 4))
