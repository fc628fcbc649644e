import os
import stat

import pytest

from game_of_life.errors import ConfigurationError, SeedMismatchError, SnapshotParseError
from game_of_life.grid import DenseGrid, SparseGrid, random_grid
from game_of_life.snapshot import (format_snapshot, parse_header, read_header, read_snapshot,
                                   save_snapshot, snapshot_path, write_snapshot)


def write_text(path, text):
    path.write_text(text, encoding="utf-8")
    return path


def test_format_snapshot():
    grid = SparseGrid(4, 2, [(1, 0), (3, 1)])
    assert format_snapshot(grid, 7) == "4 2 7\n.O..\n...O\n"


def test_write_then_read_round_trip(tmp_path, random_grids):
    for index, grid in enumerate(random_grids):
        path = write_snapshot(tmp_path / f"grid{index}.txt", grid, index)
        snapshot = read_snapshot(path, grid.width, grid.height)
        assert snapshot.iterations == index
        assert snapshot.grid.alive_cells() == grid.alive_cells()


def test_write_leaves_no_temporary_files(tmp_path):
    write_snapshot(tmp_path / "out.txt", DenseGrid.empty(3, 3), 0)
    assert [p.name for p in tmp_path.iterdir()] == ["out.txt"]


def test_write_replaces_existing_file_whole(tmp_path):
    path = tmp_path / "out.txt"
    write_snapshot(path, random_grid(20, 20, seed=1), 1)
    write_snapshot(path, DenseGrid.from_cells(2, 2, [(0, 0)]), 9)
    assert path.read_text() == "2 2 9\nO.\n..\n"


def test_write_into_missing_directory_raises(tmp_path):
    with pytest.raises(OSError):
        write_snapshot(tmp_path / "missing" / "out.txt", DenseGrid.empty(2, 2), 0)


def test_any_character_other_than_o_is_dead(tmp_path):
    path = write_text(tmp_path / "seed.txt", "3 2 0\nOxO\n#o.\n")
    grid = read_snapshot(path, 3, 2).grid
    assert grid.alive_cells() == {(0, 0), (2, 0)}


def test_short_rows_and_missing_lines_stay_dead(tmp_path):
    path = write_text(tmp_path / "seed.txt", "5 4 3\nOO\n\n.O\n")
    snapshot = read_snapshot(path, 5, 4)
    assert snapshot.grid.alive_cells() == {(0, 0), (1, 0), (1, 2)}
    assert snapshot.iterations == 3


def test_extra_characters_and_lines_are_ignored(tmp_path):
    path = write_text(tmp_path / "seed.txt", "2 2 0\nOOOO\n.OOO\nOOOO\nOOOO\n")
    grid = read_snapshot(path, 2, 2).grid
    assert grid.alive_cells() == {(0, 0), (1, 0), (1, 1)}


@pytest.mark.parametrize("width,height", [(6, 4), (5, 5), (4, 5)])
def test_mismatched_dimensions_are_rejected(tmp_path, width, height):
    path = write_text(tmp_path / "seed.txt", "5 4 0\n.....\n")
    with pytest.raises(SeedMismatchError) as excinfo:
        read_snapshot(path, width, height)
    assert isinstance(excinfo.value, ConfigurationError)
    assert excinfo.value.declared == (5, 4)
    assert excinfo.value.requested == (width, height)


@pytest.mark.parametrize("header", [
    "5 4",
    "5 4 0 1",
    "five 4 0",
    "5 4 -1",
    "5 4.0 0",
])
def test_malformed_headers_are_parse_errors(header):
    with pytest.raises(SnapshotParseError):
        parse_header(header)


def test_empty_file_is_a_parse_error(tmp_path):
    path = write_text(tmp_path / "seed.txt", "")
    with pytest.raises(SnapshotParseError):
        read_snapshot(path, 3, 3)
    with pytest.raises(SnapshotParseError):
        read_header(path)


def test_missing_seed_file_raises_os_error(tmp_path):
    with pytest.raises(OSError):
        read_snapshot(tmp_path / "nope.txt", 3, 3)


def test_read_header(tmp_path):
    path = write_text(tmp_path / "seed.txt", "  12\t8 40 \nO\n")
    assert read_header(path) == (12, 8, 40)


def test_snapshot_path_is_named_after_size_and_iterations(tmp_path):
    assert snapshot_path(tmp_path, 64, 32, 100) == tmp_path / "game_of_life_64_32_100.txt"


def test_snapshot_path_never_reuses_a_name(tmp_path):
    taken = []
    for _ in range(3):
        path = snapshot_path(tmp_path, 4, 4, 10)
        assert path not in taken
        write_snapshot(path, DenseGrid.empty(4, 4), 10)
        taken.append(path)
    assert [p.name for p in taken] == [
        "game_of_life_4_4_10.txt",
        "game_of_life_4_4_10_1.txt",
        "game_of_life_4_4_10_2.txt",
    ]


def test_save_snapshot_does_not_clobber_a_name_taken_after_lookup(tmp_path):
    first = snapshot_path(tmp_path, 4, 4, 10)
    second = snapshot_path(tmp_path, 4, 4, 10)
    assert first == second

    write_snapshot(first, DenseGrid.from_cells(4, 4, [(0, 0)]), 10)
    saved = save_snapshot(tmp_path, DenseGrid.from_cells(4, 4, [(3, 3)]), 10)

    assert saved.name == "game_of_life_4_4_10_1.txt"
    assert read_snapshot(first, 4, 4).grid.alive_cells() == {(0, 0)}
    assert read_snapshot(saved, 4, 4).grid.alive_cells() == {(3, 3)}


def test_save_snapshot_picks_a_new_name_each_time(tmp_path):
    paths = [save_snapshot(tmp_path, DenseGrid.empty(3, 2), 4) for _ in range(3)]
    assert [p.name for p in paths] == [
        "game_of_life_3_2_4.txt",
        "game_of_life_3_2_4_1.txt",
        "game_of_life_3_2_4_2.txt",
    ]
    assert sorted(p.name for p in tmp_path.iterdir()) == sorted(p.name for p in paths)


@pytest.mark.skipif(os.name != "posix", reason="POSIX permission bits")
def test_snapshots_get_the_same_permissions_as_plain_files(tmp_path):
    plain = write_text(tmp_path / "plain.txt", "")
    expected = stat.S_IMODE(plain.stat().st_mode)

    written = write_snapshot(tmp_path / "out.txt", DenseGrid.empty(2, 2), 0)
    saved = save_snapshot(tmp_path, DenseGrid.empty(2, 2), 0)

    assert stat.S_IMODE(written.stat().st_mode) == expected
    assert stat.S_IMODE(saved.stat().st_mode) == expected


def test_invalid_utf8_is_a_parse_error(tmp_path):
    path = tmp_path / "seed.txt"
    path.write_bytes(b"4 2 0\nO\xff\xfeO\n....\n")
    with pytest.raises(SnapshotParseError, match="UTF-8"):
        read_snapshot(path, 4, 2)


def test_invalid_utf8_header_is_a_parse_error(tmp_path):
    path = tmp_path / "seed.txt"
    path.write_bytes(b"\xff 2 0\n")
    with pytest.raises(SnapshotParseError):
        read_header(path)
