import logging
import os

os.environ.setdefault("MPLBACKEND", "Agg")
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pytest

from game_of_life.grid import DenseGrid, random_grid


def blinker(width=8, height=8, x=2, y=3):
    """Horizontal blinker with its left cell at (x, y)."""
    return DenseGrid.from_cells(width, height, [(x, y), (x + 1, y), (x + 2, y)])


@pytest.fixture
def blinker_grid():
    return blinker()


@pytest.fixture(params=[(1, 3), (7, 11), (12, 9), (16, 16)])
def random_grids(request):
    """A few random grids of assorted shapes, seeded for reproducibility."""
    width, height = request.param
    return [random_grid(width, height, density=d, seed=s)
            for s, d in ((0, 0.5), (1, 0.3), (2, 0.7))]


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers installed by setup_logging so they don't outlive a test."""
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, "_game_of_life", False):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(logging.WARNING)
