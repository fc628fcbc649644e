import csv

import pytest

from game_of_life import benchmark as bench
from game_of_life.grid import DenseGrid, random_grid
from game_of_life.strategies import SparseStrategy


def test_benchmark_records_every_size_and_implementation():
    results = bench.benchmark(sizes=[5, 7], generations=2,
                              implementations=["naive", "hash"], verbose=False)

    assert [(r["grid_size"], r["implementation"]) for r in results] == [
        (5, "naive"), (5, "hash"), (7, "naive"), (7, "hash"),
    ]
    for r in results:
        assert r["generations"] == 2
        assert r["speedup"] is not None
    assert all(r["speedup"] == pytest.approx(1.0)
               for r in results if r["implementation"] == "naive")


def test_benchmark_includes_parallel():
    results = bench.benchmark(sizes=[6], generations=1, workers=2, verbose=False)
    assert {r["implementation"] for r in results} == {"naive", "hash", "parallel"}
    assert len({r["final_live_cells"] for r in results}) == 1


def test_benchmark_without_baseline_has_no_speedup():
    results = bench.benchmark(sizes=[4], generations=1, implementations=["hash"], verbose=False)
    assert results[0]["speedup"] is None


def test_benchmark_detects_diverging_strategy(monkeypatch):
    def broken_update(self, grid):
        return DenseGrid.empty(grid.width, grid.height).to_sparse()

    monkeypatch.setattr(SparseStrategy, "update", broken_update)
    with pytest.raises(bench.BenchmarkMismatchError):
        bench.benchmark(sizes=[6], generations=1, implementations=["hash"],
                        density=0.5, seed=3, verbose=False)


def test_write_results(tmp_path):
    results = bench.benchmark(sizes=[4], generations=1, implementations=["naive", "hash"],
                              verbose=False)
    path = bench.write_results(results, tmp_path / "nested" / "bench.csv")

    with open(path, newline="") as f:
        rows = list(csv.DictReader(f))
    assert [row["implementation"] for row in rows] == ["naive", "hash"]
    assert list(rows[0]) == bench.CSV_FIELDS
    assert float(rows[0]["speedup"]) == pytest.approx(1.0)


def test_print_summary(capsys):
    bench.print_summary([{
        "implementation": "hash", "grid_size": 8, "generations": 1, "final_live_cells": 0,
        "total_time_ms": 1.5, "time_per_generation_ms": 1.5,
        "cells_per_second_million": 0.04, "speedup": None,
    }])
    out = capsys.readouterr().out
    assert "SUMMARY" in out
    assert "N/A" in out


def test_benchmark_records_extend_the_simulation_row():
    results = bench.benchmark(sizes=[5], generations=2, implementations=["naive"],
                              density=0.4, seed=2, verbose=False)
    record = results[0]
    assert set(record) == set(bench.CSV_FIELDS)
    assert (record["width"], record["height"], record["grid_size"]) == (5, 5, 5)
    assert record["initial_live_cells"] == random_grid(5, 5, density=0.4, seed=2).live_count()
