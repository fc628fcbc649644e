"""
Command line interface.

Usage: game-of-life run <width> <height> <iterations> <naive|hash|parallel> [seed_file]
       game-of-life benchmark [--sizes 16 32 64] [--generations N]
       game-of-life analyze <benchmark.csv> [--output dashboard.png]
       game-of-life view <width> <height> [seed_file] [--implementation naive|hash|parallel]
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from .config import (BENCHMARK_CSV, BENCHMARK_GENERATIONS, BENCHMARK_SEED,
                     BENCHMARK_SIZES, DEFAULT_DENSITY, DEFAULT_OUTPUT_DIR, SimulationConfig)
from .errors import ConfigurationError, GameOfLifeError
from .grid import Grid, random_grid
from .logging_config import setup_logging
from .patterns import PATTERNS, init_pattern
from .simulation import run_simulation
from .snapshot import read_snapshot, save_snapshot
from .strategies import Implementation

logger = logging.getLogger(__name__)

IMPLEMENTATION_CHOICES = [i.value for i in Implementation]


def positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {text!r}") from None
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {value}")
    return value


def non_negative_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {text!r}") from None
    if value < 0:
        raise argparse.ArgumentTypeError(f"must not be negative, got {value}")
    return value


def density(text: str) -> float:
    try:
        value = float(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {text!r}") from None
    if not 0.0 <= value <= 1.0:
        raise argparse.ArgumentTypeError(f"must be within [0, 1], got {value}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="game-of-life",
        description="Conway's Game of Life on a toroidal grid.",
    )
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="logging verbosity (default: INFO)")
    parser.add_argument("--log-file", help="also write log records to this file")
    sub = parser.add_subparsers(dest="command", required=True)

    run = sub.add_parser("run", help="simulate a fixed number of generations")
    run.add_argument("width", type=positive_int)
    run.add_argument("height", type=positive_int)
    run.add_argument("iterations", type=non_negative_int)
    run.add_argument("implementation", choices=IMPLEMENTATION_CHOICES)
    run.add_argument("seed_file", nargs="?", type=Path,
                     help="snapshot to start from (random grid if omitted)")
    run.add_argument("--pattern", choices=sorted(PATTERNS),
                     help="start from a single centred pattern instead of random cells")
    run.add_argument("--density", type=density, default=DEFAULT_DENSITY,
                     help=f"fraction of alive cells in a random grid (default: {DEFAULT_DENSITY})")
    run.add_argument("--random-seed", type=int, help="seed for the random fill")
    run.add_argument("--workers", type=positive_int,
                     help="worker processes for the parallel implementation (default: CPU count)")
    run.add_argument("--output-dir", type=Path, default=Path(DEFAULT_OUTPUT_DIR),
                     help="directory for the final snapshot")
    run.add_argument("--no-output", action="store_true", help="do not write the final snapshot")
    run.set_defaults(handler=cmd_run)

    bench = sub.add_parser("benchmark", help="time all implementations on random grids")
    bench.add_argument("--sizes", type=positive_int, nargs="+", default=BENCHMARK_SIZES)
    bench.add_argument("--generations", type=positive_int, default=BENCHMARK_GENERATIONS)
    bench.add_argument("--implementations", nargs="+", choices=IMPLEMENTATION_CHOICES,
                       default=IMPLEMENTATION_CHOICES)
    bench.add_argument("--random-seed", type=int, default=BENCHMARK_SEED)
    bench.add_argument("--workers", type=positive_int)
    bench.add_argument("--output", type=Path, default=Path(BENCHMARK_CSV),
                       help=f"CSV file for the results (default: {BENCHMARK_CSV})")
    bench.set_defaults(handler=cmd_benchmark)

    analyze = sub.add_parser("analyze", help="chart a benchmark CSV")
    analyze.add_argument("csv", type=Path)
    analyze.add_argument("--output", type=Path, help="PNG file for the dashboard")
    analyze.add_argument("--show", action="store_true", help="open an interactive window")
    analyze.set_defaults(handler=cmd_analyze)

    view = sub.add_parser("view", help="open the interactive viewer")
    view.add_argument("width", type=positive_int)
    view.add_argument("height", type=positive_int)
    view.add_argument("seed_file", nargs="?", type=Path)
    view.add_argument("--implementation", choices=IMPLEMENTATION_CHOICES,
                      default=Implementation.SPARSE.value,
                      help="update strategy (default: hash)")
    view.add_argument("--cell-size", type=positive_int, default=10)
    view.add_argument("--workers", type=positive_int)
    view.add_argument("--output-dir", type=Path, default=Path(DEFAULT_OUTPUT_DIR))
    view.set_defaults(handler=cmd_view)

    return parser


def initial_grid(config: SimulationConfig) -> tuple[Grid, int]:
    """Initial grid and the number of generations already behind it."""
    if config.seed_path is not None:
        snapshot = read_snapshot(config.seed_path, config.width, config.height)
        return snapshot.grid, snapshot.iterations
    if config.pattern is not None:
        return init_pattern(config.pattern, config.width, config.height), 0
    return random_grid(config.width, config.height, density=config.density,
                       seed=config.random_seed), 0


def cmd_run(args) -> int:
    config = SimulationConfig(
        width=args.width,
        height=args.height,
        iterations=args.iterations,
        implementation=args.implementation,
        seed_path=args.seed_file,
        pattern=args.pattern,
        density=args.density,
        random_seed=args.random_seed,
        workers=args.workers,
        output_dir=args.output_dir,
        write_output=not args.no_output,
    )
    grid, prior_iterations = initial_grid(config)

    print(f"Game of Life ({config.implementation.label} implementation)")
    print(f"Grid size: {config.width} x {config.height}")
    print(f"Generations: {config.iterations}")
    print(f"Initial live cells: {grid.live_count()}")

    result = run_simulation(grid, config.implementation, config.iterations,
                            workers=config.workers)

    print("\nSimulation complete!")
    print(f"Final live cells: {result.final_live_cells}")
    print(f"Total time: {result.total_time_ms:.2f} ms")
    print(f"Time per generation: {result.time_per_generation_ms:.4f} ms")
    print(f"Cells processed per second: {result.cells_per_second_million:.2f} million")

    if config.write_output:
        total_iterations = prior_iterations + config.iterations
        config.output_dir.mkdir(parents=True, exist_ok=True)
        path = save_snapshot(config.output_dir, result.grid, total_iterations)
        print(f"Final state saved to {path}")
    return 0


def cmd_benchmark(args) -> int:
    from .benchmark import benchmark, print_summary, write_results

    print("=" * 72)
    print("BENCHMARK: Game of Life update strategies")
    print("=" * 72)
    results = benchmark(sizes=args.sizes, generations=args.generations,
                        implementations=args.implementations, seed=args.random_seed,
                        workers=args.workers)
    print_summary(results)
    path = write_results(results, args.output)
    print(f"\nResults saved to {path}")
    return 0


def cmd_analyze(args) -> int:
    from .analysis import analyze

    analyze(args.csv, output_path=args.output, show=args.show)
    return 0


def cmd_view(args) -> int:
    from .visual import GameOfLifeViewer

    config = SimulationConfig(
        width=args.width,
        height=args.height,
        iterations=0,
        implementation=args.implementation,
        seed_path=args.seed_file,
        workers=args.workers,
        output_dir=args.output_dir,
    )
    grid, prior_iterations = initial_grid(config)
    GameOfLifeViewer(grid, config.implementation, cell_size=args.cell_size,
                     prior_iterations=prior_iterations, output_dir=config.output_dir,
                     workers=config.workers).run()
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_level, args.log_file)

    try:
        return args.handler(args)
    except ConfigurationError as e:
        logger.error("Configuration error: %s", e)
        return 2
    except (GameOfLifeError, OSError) as e:
        logger.error("%s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
