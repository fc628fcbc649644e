"""
Update strategies: one generation of the whole grid per call.

  SequentialDenseStrategy - row-major scan over a dense array
  SparseStrategy          - frontier scan over the set of alive cells
  ParallelDenseStrategy   - dense scan split into row bands across processes

All three apply the same rule and produce the same alive cells for the same
input; they differ only in how cells are visited and stored.
"""

from __future__ import annotations

import logging
import os
from concurrent.futures import Executor, ProcessPoolExecutor
from enum import Enum

import numpy as np

from .errors import ConfigurationError
from .grid import DenseGrid, Grid, SparseGrid
from .neighbors import (count_neighbors_dense, count_neighbors_sparse,
                        neighbor_census, neighbor_ring)
from .rules import next_state, next_state_array

logger = logging.getLogger(__name__)


class Implementation(Enum):
    """Selects the update strategy for a run."""
    SEQUENTIAL_DENSE = "naive"
    SPARSE = "hash"
    PARALLEL_DENSE = "parallel"

    @classmethod
    def from_name(cls, name: str | Implementation) -> Implementation:
        if isinstance(name, cls):
            return name
        key = str(name).strip().lower()
        try:
            return _ALIASES[key]
        except KeyError:
            choices = ", ".join(sorted(_ALIASES))
            raise ConfigurationError(
                f"Invalid implementation {name!r}. Choose from: {choices}"
            ) from None

    @property
    def label(self) -> str:
        return _LABELS[self]


_ALIASES = {
    "naive": Implementation.SEQUENTIAL_DENSE,
    "sequential": Implementation.SEQUENTIAL_DENSE,
    "hash": Implementation.SPARSE,
    "sparse": Implementation.SPARSE,
    "parallel": Implementation.PARALLEL_DENSE,
}

_LABELS = {
    Implementation.SEQUENTIAL_DENSE: "sequential dense",
    Implementation.SPARSE: "sparse",
    Implementation.PARALLEL_DENSE: "parallel dense",
}


class UpdateStrategy:
    """Base class. Subclasses set `implementation` and implement update()."""

    implementation: Implementation

    def prepare(self, grid: Grid) -> Grid:
        """Convert the grid to the encoding this strategy updates."""
        return grid.to_dense()

    def update(self, grid: Grid) -> Grid:
        raise NotImplementedError

    def close(self) -> None:
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False


class SequentialDenseStrategy(UpdateStrategy):
    implementation = Implementation.SEQUENTIAL_DENSE

    def update(self, grid: Grid) -> DenseGrid:
        cells = grid.to_dense().cells
        height, width = cells.shape
        next_cells = np.zeros((height, width), dtype=bool)

        for y in range(height):
            for x in range(width):
                neighbors = count_neighbors_dense(cells, x, y)
                next_cells[y, x] = next_state(bool(cells[y, x]), neighbors)

        return DenseGrid(next_cells)


class SparseStrategy(UpdateStrategy):
    """Visits only alive cells and their neighbors."""

    implementation = Implementation.SPARSE

    def prepare(self, grid: Grid) -> SparseGrid:
        return grid.to_sparse()

    @staticmethod
    def frontier(grid: SparseGrid) -> set[tuple[int, int]]:
        """Every alive cell plus its 8-neighbor ring."""
        width, height = grid.width, grid.height
        candidates = set()
        for x, y in grid.alive:
            candidates.add((x, y))  # a lonely live cell must still be checked to die
            candidates.update(neighbor_ring(x, y, width, height))
        return candidates

    def update(self, grid: Grid) -> SparseGrid:
        grid = grid.to_sparse()
        width, height = grid.width, grid.height
        alive = grid.alive
        next_alive = set()

        for x, y in self.frontier(grid):
            neighbors = count_neighbors_sparse(alive, x, y, width, height)
            if next_state((x, y) in alive, neighbors):
                next_alive.add((x, y))

        return SparseGrid(width, height, next_alive)


def _next_band(slab: np.ndarray) -> np.ndarray:
    """
    Next state of the interior rows of a slab.

    The slab holds a band of rows plus one halo row above and below, already
    wrapped, so interior rows never wrap vertically inside the slab.
    """
    rows, width = slab.shape
    band = np.zeros((rows - 2, width), dtype=bool)
    for y in range(1, rows - 1):
        for x in range(width):
            neighbors = count_neighbors_dense(slab, x, y)
            band[y - 1, x] = next_state(bool(slab[y, x]), neighbors)
    return band


class ParallelDenseStrategy(UpdateStrategy):
    """
    Dense scan with the rows split into bands, one task per band.

    Each task gets a copy of its rows of the previous generation plus a halo
    row on each side and returns its rows of the next one. executor.map keeps
    task order, and every band is collected before the generation is built,
    so one generation is a full barrier.
    """

    implementation = Implementation.PARALLEL_DENSE

    def __init__(self, workers: int | None = None, executor: Executor | None = None):
        if workers is not None and workers < 1:
            raise ConfigurationError(f"workers must be at least 1, got {workers}")
        self.workers = workers or os.cpu_count() or 1
        self._executor = executor
        self._owns_executor = executor is None
        self._started = False

    @property
    def executor(self) -> Executor:
        if self._executor is None:
            logger.debug("Starting process pool with %d workers", self.workers)
            self._executor = ProcessPoolExecutor(max_workers=self.workers)
        return self._executor

    def start(self) -> Executor:
        """Create the pool and wait until every worker has answered once."""
        if not self._started:
            futures = [self.executor.submit(os.getpid) for _ in range(self.workers)]
            for future in futures:
                future.result()
            self._started = True
        return self._executor

    def prepare(self, grid: Grid) -> DenseGrid:
        self.start()
        return grid.to_dense()

    def bands(self, height: int) -> list[tuple[int, int]]:
        """Split [0, height) into contiguous (start, stop) row ranges."""
        count = min(height, self.workers * 4)
        edges = np.linspace(0, height, count + 1).astype(int)
        return [(int(a), int(b)) for a, b in zip(edges[:-1], edges[1:]) if b > a]

    def update(self, grid: Grid) -> DenseGrid:
        cells = grid.to_dense().cells
        height = cells.shape[0]
        slabs = [
            cells.take(range(start - 1, stop + 1), axis=0, mode="wrap")
            for start, stop in self.bands(height)
        ]
        results = list(self.executor.map(_next_band, slabs))
        return DenseGrid(np.concatenate(results, axis=0))

    def close(self) -> None:
        if self._executor is not None and self._owns_executor:
            self._executor.shutdown(wait=True)
            self._executor = None
            self._started = False


def make_strategy(implementation: Implementation | str,
                  workers: int | None = None) -> UpdateStrategy:
    """Build the strategy for an implementation selector."""
    implementation = Implementation.from_name(implementation)
    if implementation is Implementation.SEQUENTIAL_DENSE:
        return SequentialDenseStrategy()
    if implementation is Implementation.SPARSE:
        return SparseStrategy()
    return ParallelDenseStrategy(workers=workers)


def reference_step(grid: Grid) -> DenseGrid:
    """One generation computed with whole-array numpy operations."""
    cells = grid.to_dense().cells
    return DenseGrid(next_state_array(cells, neighbor_census(cells)))
