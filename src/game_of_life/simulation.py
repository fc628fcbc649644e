"""
Simulation driver: runs a fixed number of generations with one strategy
and measures how long it took.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field

from .errors import ConfigurationError
from .grid import Grid
from .strategies import Implementation, UpdateStrategy, make_strategy

logger = logging.getLogger(__name__)


@dataclass
class SimulationResult:
    grid: Grid
    implementation: Implementation
    width: int
    height: int
    generations: int
    initial_live_cells: int
    final_live_cells: int
    total_time_ms: float
    tick_times_ms: list[float] = field(default_factory=list, repr=False)

    @property
    def time_per_generation_ms(self) -> float:
        if self.generations == 0:
            return 0.0
        return self.total_time_ms / self.generations

    @property
    def cells_per_second_million(self) -> float:
        if self.total_time_ms <= 0:
            return 0.0
        return self.width * self.height * self.generations / self.total_time_ms / 1000

    def as_row(self) -> dict:
        """Flat record for CSV export."""
        return {
            "implementation": self.implementation.value,
            "width": self.width,
            "height": self.height,
            "generations": self.generations,
            "initial_live_cells": self.initial_live_cells,
            "final_live_cells": self.final_live_cells,
            "total_time_ms": self.total_time_ms,
            "time_per_generation_ms": self.time_per_generation_ms,
            "cells_per_second_million": self.cells_per_second_million,
        }


def step(strategy: UpdateStrategy, grid: Grid, iterations: int,
         on_generation: Callable[[int, Grid], None] | None = None) -> tuple[Grid, list[float]]:
    """Advance `grid` by `iterations` generations, timing every tick."""
    tick_times = []
    for generation in range(1, iterations + 1):
        start = time.perf_counter()
        grid = strategy.update(grid)
        elapsed_ms = (time.perf_counter() - start) * 1000
        tick_times.append(elapsed_ms)
        logger.debug("Tick %d took %.3f ms", generation, elapsed_ms)
        if on_generation is not None:
            on_generation(generation, grid)
    return grid, tick_times


def run_simulation(grid: Grid, implementation: Implementation | str, iterations: int,
                   workers: int | None = None,
                   on_generation: Callable[[int, Grid], None] | None = None) -> SimulationResult:
    """
    Run the Game of Life simulation.

    Args:
        grid: Initial grid, in either encoding
        implementation: Strategy selector (enum member or name)
        iterations: Number of generations to simulate
        workers: Pool size for the parallel strategy (default: CPU count)
        on_generation: Called with (generation, grid) after every generation

    Returns:
        SimulationResult with the final grid and timing statistics
    """
    implementation = Implementation.from_name(implementation)
    if isinstance(iterations, bool) or not isinstance(iterations, int) or iterations < 0:
        raise ConfigurationError(f"iterations must be a non-negative integer, got {iterations!r}")

    logger.info("Using %s implementation on a %dx%d grid",
                implementation.label, grid.width, grid.height)

    with make_strategy(implementation, workers=workers) as strategy:
        grid = strategy.prepare(grid)
        initial_live = grid.live_count()

        start_time = time.perf_counter()
        grid, tick_times = step(strategy, grid, iterations, on_generation)
        elapsed_ms = (time.perf_counter() - start_time) * 1000

    result = SimulationResult(
        grid=grid,
        implementation=implementation,
        width=grid.width,
        height=grid.height,
        generations=iterations,
        initial_live_cells=initial_live,
        final_live_cells=grid.live_count(),
        total_time_ms=elapsed_ms,
        tick_times_ms=tick_times,
    )
    logger.info("%d iterations took %.2f ms using the %s implementation",
                iterations, elapsed_ms, implementation.label)
    return result
