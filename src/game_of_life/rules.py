"""
Conway's transition rule (B3/S23).

1. Any live cell with fewer than two live neighbors dies (underpopulation)
2. Any live cell with two or three live neighbors lives on
3. Any live cell with more than three live neighbors dies (overpopulation)
4. Any dead cell with exactly three live neighbors becomes alive (reproduction)
"""

import numpy as np


def next_state(alive: bool, live_neighbors: int) -> bool:
    """Liveness of a cell in the next generation."""
    if alive:
        return live_neighbors == 2 or live_neighbors == 3
    return live_neighbors == 3


def next_state_array(cells: np.ndarray, neighbors: np.ndarray) -> np.ndarray:
    """Vectorized next_state over whole arrays of liveness and counts."""
    birth = ~cells & (neighbors == 3)
    survive = cells & ((neighbors == 2) | (neighbors == 3))
    return birth | survive
