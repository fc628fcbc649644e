"""
Grid state for a toroidal Game of Life universe.

Two encodings of the same logical grid:
  DenseGrid  - numpy bool array of shape (height, width), row-major
  SparseGrid - frozenset of (col, row) pairs, one per alive cell

Grids are immutable values. A strategy produces a new grid each generation
and the caller swaps it in, so a half-computed generation is never visible.
"""

from __future__ import annotations

from collections.abc import Iterable

import numpy as np

from .errors import ConfigurationError

Cell = tuple[int, int]  # (col, row)


def check_dimensions(width: int, height: int) -> None:
    """Raise ConfigurationError unless both dimensions are positive integers."""
    for name, value in (("width", width), ("height", height)):
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
            raise ConfigurationError(f"{name} must be an integer, got {value!r}")
        if value <= 0:
            raise ConfigurationError(f"{name} must be positive, got {value}")


class Grid:
    """Common interface of both encodings."""

    def __init__(self, width: int, height: int):
        check_dimensions(width, height)
        self._width = int(width)
        self._height = int(height)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def shape(self) -> tuple[int, int]:
        return self._height, self._width

    def _check_bounds(self, row: int, col: int) -> None:
        if not (0 <= row < self._height and 0 <= col < self._width):
            raise IndexError(
                f"cell (row={row}, col={col}) outside {self._width}x{self._height} grid"
            )

    def is_alive(self, row: int, col: int) -> bool:
        raise NotImplementedError

    def alive_cells(self) -> frozenset[Cell]:
        raise NotImplementedError

    def live_count(self) -> int:
        return len(self.alive_cells())

    def to_dense(self) -> DenseGrid:
        raise NotImplementedError

    def to_sparse(self) -> SparseGrid:
        raise NotImplementedError

    def with_cell(self, col: int, row: int, alive: bool) -> Grid:
        raise NotImplementedError

    def render(self, alive: str = "O", dead: str = ".") -> list[str]:
        """Return the grid as one string per row, row 0 first."""
        cells = self.to_dense().cells
        return ["".join(alive if v else dead for v in row) for row in cells]

    def same_cells(self, other: Grid) -> bool:
        """True if both grids have the same size and the same alive cells."""
        return self.shape == other.shape and self.alive_cells() == other.alive_cells()

    def __repr__(self) -> str:
        return (f"{type(self).__name__}(width={self._width}, height={self._height}, "
                f"alive={self.live_count()})")


class DenseGrid(Grid):
    """Grid stored as a read-only numpy bool array indexed [row, col]."""

    def __init__(self, cells: np.ndarray):
        cells = np.asarray(cells)
        if cells.ndim != 2:
            raise ConfigurationError(f"dense cells must be 2-D, got shape {cells.shape}")
        height, width = cells.shape
        super().__init__(width, height)
        cells = cells.astype(bool, copy=True)
        cells.flags.writeable = False
        self._cells = cells

    @classmethod
    def empty(cls, width: int, height: int) -> DenseGrid:
        check_dimensions(width, height)
        return cls(np.zeros((height, width), dtype=bool))

    @classmethod
    def from_cells(cls, width: int, height: int, alive: Iterable[Cell]) -> DenseGrid:
        """Build a dense grid from (col, row) pairs; coordinates wrap."""
        check_dimensions(width, height)
        cells = np.zeros((height, width), dtype=bool)
        for x, y in alive:
            cells[y % height, x % width] = True
        return cls(cells)

    @classmethod
    def from_flat(cls, width: int, height: int, values: Iterable[bool]) -> DenseGrid:
        """Build from a row-major sequence of width*height booleans."""
        check_dimensions(width, height)
        flat = np.fromiter((bool(v) for v in values), dtype=bool)
        if flat.size != width * height:
            raise ConfigurationError(
                f"expected {width * height} cells, got {flat.size}"
            )
        return cls(flat.reshape(height, width))

    @property
    def cells(self) -> np.ndarray:
        return self._cells

    def flat(self) -> np.ndarray:
        """Row-major view: index row*width+col."""
        return self._cells.ravel()

    def is_alive(self, row: int, col: int) -> bool:
        self._check_bounds(row, col)
        return bool(self._cells[row, col])

    def alive_cells(self) -> frozenset[Cell]:
        rows, cols = np.nonzero(self._cells)
        return frozenset(zip(cols.tolist(), rows.tolist()))

    def live_count(self) -> int:
        return int(np.count_nonzero(self._cells))

    def to_dense(self) -> DenseGrid:
        return self

    def to_sparse(self) -> SparseGrid:
        return SparseGrid(self._width, self._height, self.alive_cells())

    def with_cell(self, col: int, row: int, alive: bool) -> DenseGrid:
        self._check_bounds(row, col)
        cells = self._cells.copy()
        cells[row, col] = alive
        return DenseGrid(cells)

    def __eq__(self, other):
        if not isinstance(other, DenseGrid):
            return NotImplemented
        return np.array_equal(self._cells, other._cells)

    __hash__ = None


class SparseGrid(Grid):
    """Grid stored as the set of alive (col, row) coordinates."""

    def __init__(self, width: int, height: int, alive: Iterable[Cell] = ()):
        super().__init__(width, height)
        alive = frozenset((int(x), int(y)) for x, y in alive)
        for x, y in alive:
            if not (0 <= x < self._width and 0 <= y < self._height):
                raise ConfigurationError(
                    f"alive cell ({x}, {y}) outside {self._width}x{self._height} grid"
                )
        self._alive = alive

    @property
    def alive(self) -> frozenset[Cell]:
        return self._alive

    def is_alive(self, row: int, col: int) -> bool:
        self._check_bounds(row, col)
        return (col, row) in self._alive

    def alive_cells(self) -> frozenset[Cell]:
        return self._alive

    def live_count(self) -> int:
        return len(self._alive)

    def to_dense(self) -> DenseGrid:
        return DenseGrid.from_cells(self._width, self._height, self._alive)

    def to_sparse(self) -> SparseGrid:
        return self

    def with_cell(self, col: int, row: int, alive: bool) -> SparseGrid:
        self._check_bounds(row, col)
        if alive:
            cells = self._alive | {(col, row)}
        else:
            cells = self._alive - {(col, row)}
        return SparseGrid(self._width, self._height, cells)

    def __eq__(self, other):
        if not isinstance(other, SparseGrid):
            return NotImplemented
        return self.shape == other.shape and self._alive == other._alive

    __hash__ = None


def random_grid(width: int, height: int, density: float = 0.5,
                seed: int | None = None) -> DenseGrid:
    """Fill a grid by drawing every cell independently with P(alive) = density."""
    check_dimensions(width, height)
    if not 0.0 <= density <= 1.0:
        raise ConfigurationError(f"density must be within [0, 1], got {density}")
    rng = np.random.default_rng(seed)
    return DenseGrid(rng.random((height, width)) < density)
