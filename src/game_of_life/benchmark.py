"""
Benchmark the three update strategies against each other.

Every strategy runs on the same random grid for each size; the final grids
must agree, and speedups are reported relative to the sequential dense scan.
"""

from __future__ import annotations

import csv
import logging
from collections.abc import Sequence
from pathlib import Path

from .config import BENCHMARK_GENERATIONS, BENCHMARK_SEED, BENCHMARK_SIZES, DEFAULT_DENSITY
from .errors import GameOfLifeError
from .grid import random_grid
from .simulation import run_simulation
from .strategies import Implementation, reference_step

logger = logging.getLogger(__name__)

CSV_FIELDS = [
    "implementation", "grid_size", "width", "height", "generations",
    "initial_live_cells", "final_live_cells", "total_time_ms",
    "time_per_generation_ms", "cells_per_second_million", "speedup",
]


class BenchmarkMismatchError(GameOfLifeError):
    """Two strategies produced different grids from the same input."""


def benchmark(sizes: Sequence[int] | None = None,
              generations: int = BENCHMARK_GENERATIONS,
              implementations: Sequence[Implementation] | None = None,
              seed: int = BENCHMARK_SEED,
              density: float = DEFAULT_DENSITY,
              workers: int | None = None,
              verbose: bool = True) -> list[dict]:
    """
    Run every implementation on square grids of each size.

    Args:
        sizes: Grid sizes to test
        generations: Number of generations per run
        implementations: Strategies to compare (default: all three)
        seed: Random seed, shared by all strategies for one size
        density: Initial fraction of alive cells
        workers: Pool size for the parallel strategy
        verbose: Print a line per run

    Returns:
        One record per (size, implementation), in run order
    """
    if sizes is None:
        sizes = BENCHMARK_SIZES
    if implementations is None:
        implementations = list(Implementation)
    implementations = [Implementation.from_name(i) for i in implementations]

    results = []
    for size in sizes:
        grid = random_grid(size, size, density=density, seed=seed)

        expected = grid
        for _ in range(generations):
            expected = reference_step(expected)

        baseline_ms = None
        for implementation in implementations:
            result = run_simulation(grid, implementation, generations, workers=workers)
            if not result.grid.same_cells(expected):
                raise BenchmarkMismatchError(
                    f"{implementation.label} implementation diverged on a "
                    f"{size}x{size} grid after {generations} generations"
                )
            if implementation is Implementation.SEQUENTIAL_DENSE:
                baseline_ms = result.total_time_ms

            results.append({**result.as_row(), "grid_size": size, "speedup": None})
            if verbose:
                print(f"Size {size:>5}x{size:<5} {implementation.value:>8}: "
                      f"{result.total_time_ms:>10.2f} ms")

        if baseline_ms is not None:
            for r in results:
                if r["grid_size"] == size and r["total_time_ms"] > 0:
                    r["speedup"] = baseline_ms / r["total_time_ms"]

    return results


def print_summary(results: list[dict]) -> None:
    print("\n" + "=" * 72)
    print("SUMMARY")
    print("=" * 72)
    print(f"{'Size':>8} | {'Impl':>8} | {'Total (ms)':>12} | {'Per Gen (ms)':>14} | "
          f"{'M cells/s':>10} | {'Speedup':>8}")
    print("-" * 72)
    for r in results:
        speedup = f"{r['speedup']:>7.2f}x" if r["speedup"] is not None else f"{'N/A':>8}"
        print(f"{r['grid_size']:>8} | {r['implementation']:>8} | {r['total_time_ms']:>12.2f} | "
              f"{r['time_per_generation_ms']:>14.4f} | {r['cells_per_second_million']:>10.4f} | "
              f"{speedup}")
    print("=" * 72)


def write_results(results: list[dict], path: str | Path) -> Path:
    """Save benchmark records as CSV."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=CSV_FIELDS)
        writer.writeheader()
        for r in results:
            row = dict(r)
            for key in ("total_time_ms", "time_per_generation_ms",
                        "cells_per_second_million", "speedup"):
                if row[key] is not None:
                    row[key] = f"{row[key]:.6f}"
                else:
                    row[key] = ""
            writer.writerow(row)
    logger.info("Benchmark results saved to %s", path)
    return path
