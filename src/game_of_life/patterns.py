"""Deterministic seed patterns, as (row, col) offsets from the top-left corner."""

from __future__ import annotations

from .errors import ConfigurationError
from .grid import DenseGrid, Grid

PATTERNS: dict[str, list[tuple[int, int]]] = {
    # OOO
    "blinker": [(0, 0), (0, 1), (0, 2)],
    #  .O.
    #  ..O
    #  OOO
    "glider": [(0, 1), (1, 2), (2, 0), (2, 1), (2, 2)],
    "block": [(0, 0), (0, 1), (1, 0), (1, 1)],
    "r-pentomino": [(0, 1), (0, 2), (1, 0), (1, 1), (2, 1)],
    # Gosper glider gun
    "glider-gun": [
        (0, 24),
        (1, 22), (1, 24),
        (2, 12), (2, 13), (2, 20), (2, 21), (2, 34), (2, 35),
        (3, 11), (3, 15), (3, 20), (3, 21), (3, 34), (3, 35),
        (4, 0), (4, 1), (4, 10), (4, 16), (4, 20), (4, 21),
        (5, 0), (5, 1), (5, 10), (5, 14), (5, 16), (5, 17), (5, 22), (5, 24),
        (6, 10), (6, 16), (6, 24),
        (7, 11), (7, 15),
        (8, 12), (8, 13),
    ],
}


def pattern_size(name: str) -> tuple[int, int]:
    """(width, height) of the pattern's bounding box."""
    offsets = get_pattern(name)
    return (max(c for _, c in offsets) + 1, max(r for r, _ in offsets) + 1)


def get_pattern(name: str) -> list[tuple[int, int]]:
    try:
        return PATTERNS[name]
    except KeyError:
        raise ConfigurationError(
            f"Unknown pattern {name!r}. Choose from: {', '.join(sorted(PATTERNS))}"
        ) from None


def init_pattern(name: str, width: int, height: int,
                 start_x: int | None = None, start_y: int | None = None) -> DenseGrid:
    """
    Grid with a single pattern stamped at (start_x, start_y).

    The pattern is centred when no position is given. It must fit inside the
    grid without wrapping.
    """
    pattern_width, pattern_height = pattern_size(name)
    if pattern_width > width or pattern_height > height:
        raise ConfigurationError(
            f"Grid too small for {name}, need at least {pattern_width}x{pattern_height}"
        )
    if start_x is None:
        start_x = (width - pattern_width) // 2
    if start_y is None:
        start_y = (height - pattern_height) // 2

    return stamp(DenseGrid.empty(width, height), name, start_x, start_y)


def stamp(grid: Grid, name: str, x: int, y: int) -> DenseGrid:
    """Copy of `grid` with pattern `name` set alive at (x, y); wraps at edges."""
    cells = [((x + c) % grid.width, (y + r) % grid.height) for r, c in get_pattern(name)]
    return DenseGrid.from_cells(grid.width, grid.height, grid.alive_cells() | set(cells))
