"""
Conway's Game of Life on a toroidal grid, with three interchangeable update
strategies: a dense sequential scan, a sparse frontier scan and a dense scan
split across worker processes.
"""

from .errors import ConfigurationError, GameOfLifeError, SeedMismatchError, SnapshotParseError
from .grid import DenseGrid, Grid, SparseGrid, random_grid
from .rules import next_state
from .simulation import SimulationResult, run_simulation
from .snapshot import Snapshot, read_snapshot, save_snapshot, snapshot_path, write_snapshot
from .strategies import (Implementation, ParallelDenseStrategy, SequentialDenseStrategy,
                         SparseStrategy, UpdateStrategy, make_strategy)

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError", "GameOfLifeError", "SeedMismatchError", "SnapshotParseError",
    "DenseGrid", "Grid", "SparseGrid", "random_grid",
    "next_state",
    "SimulationResult", "run_simulation",
    "Snapshot", "read_snapshot", "save_snapshot", "snapshot_path", "write_snapshot",
    "Implementation", "ParallelDenseStrategy", "SequentialDenseStrategy",
    "SparseStrategy", "UpdateStrategy", "make_strategy",
]
