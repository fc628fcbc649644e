"""
Live-neighbor counting on a torus.

Every counter looks at the 8 cells around (x, y) with offsets dx, dy in
{-1, 0, 1}, skipping (0, 0), and wraps coordinates with % width / % height.
"""

from __future__ import annotations

from collections.abc import Container

import numpy as np

OFFSETS: tuple[tuple[int, int], ...] = tuple(
    (dx, dy)
    for dy in range(-1, 2)
    for dx in range(-1, 2)
    if not (dx == 0 and dy == 0)
)


def neighbor_ring(x: int, y: int, width: int, height: int) -> list[tuple[int, int]]:
    """The 8 wrapped neighbor coordinates of (x, y), as (col, row) pairs."""
    return [((x + dx) % width, (y + dy) % height) for dx, dy in OFFSETS]


def count_neighbors_dense(cells: np.ndarray, x: int, y: int) -> int:
    """Count live neighbors of (x, y) in a (height, width) bool array."""
    height, width = cells.shape
    count = 0
    for dx, dy in OFFSETS:
        if cells[(y + dy) % height, (x + dx) % width]:
            count += 1
    return count


def count_neighbors_sparse(alive: Container[tuple[int, int]], x: int, y: int,
                           width: int, height: int) -> int:
    """Count live neighbors of (x, y) given the set of alive (col, row) pairs."""
    count = 0
    for dx, dy in OFFSETS:
        if ((x + dx) % width, (y + dy) % height) in alive:
            count += 1
    return count


def neighbor_census(cells: np.ndarray) -> np.ndarray:
    """Live-neighbor count of every cell at once, using wrap-around shifts."""
    grid = cells.astype(np.uint8)
    neighbors = np.zeros_like(grid)
    for dx, dy in OFFSETS:
        neighbors += np.roll(np.roll(grid, -dy, axis=0), -dx, axis=1)
    return neighbors
