import pandas as pd
import pytest

from game_of_life import analysis
from game_of_life.benchmark import benchmark, write_results
from game_of_life.errors import GameOfLifeError


@pytest.fixture
def results_csv(tmp_path):
    results = benchmark(sizes=[4, 8], generations=1, implementations=["naive", "hash"],
                        verbose=False)
    return write_results(results, tmp_path / "bench.csv")


def test_load_results_adds_speedup(results_csv):
    df = analysis.load_results(results_csv)
    assert set(df["implementation"]) == {"naive", "hash"}
    naive = df[df["implementation"] == "naive"]
    assert (naive["speedup"] - 1.0).abs().max() < 1e-9


def test_load_results_derives_missing_columns(tmp_path):
    path = tmp_path / "minimal.csv"
    pd.DataFrame({
        "implementation": ["naive", "hash"],
        "grid_size": [10, 10],
        "generations": [4, 4],
        "total_time_ms": [8.0, 2.0],
    }).to_csv(path, index=False)

    df = analysis.load_results(path)
    assert list(df["time_per_generation_ms"]) == [2.0, 0.5]
    assert list(df["speedup"]) == [1.0, 4.0]
    assert df["cells_per_second_million"].iloc[0] == pytest.approx(100 * 4 / 8.0 / 1000)


def test_load_results_rejects_foreign_csv(tmp_path):
    path = tmp_path / "other.csv"
    path.write_text("a,b\n1,2\n")
    with pytest.raises(GameOfLifeError):
        analysis.load_results(path)


def test_analyze_saves_dashboard(results_csv, tmp_path, capsys):
    output = analysis.analyze(results_csv, tmp_path / "dashboard.png")
    assert output.exists()
    assert output.stat().st_size > 0
    assert "BEST IMPLEMENTATION" in capsys.readouterr().out


def test_analyze_defaults_output_next_to_csv(results_csv):
    output = analysis.analyze(results_csv)
    assert output == results_csv.with_name("performance_dashboard.png")
    assert output.exists()
