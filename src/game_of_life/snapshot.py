"""
Plain-text grid snapshots.

    <width> <height> <iterations>
    .O.....
    ..O....
    OOO....

'O' marks an alive cell, any other character a dead one. `iterations` is
the cumulative number of generations behind the snapshot, so seeded runs
can be chained.
"""

from __future__ import annotations

import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

import numpy as np

from .errors import SeedMismatchError, SnapshotParseError
from .grid import DenseGrid, Grid

logger = logging.getLogger(__name__)

ALIVE = "O"
DEAD = "."


@dataclass(frozen=True)
class Snapshot:
    grid: DenseGrid
    iterations: int


def parse_header(line: str) -> tuple[int, int, int]:
    """Parse 'width height iterations' into three unsigned integers."""
    fields = line.split()
    if len(fields) != 3:
        raise SnapshotParseError(
            f"snapshot header must hold 'width height iterations', got {line.strip()!r}"
        )
    values = []
    for name, text in zip(("width", "height", "iterations"), fields):
        if not (text.isascii() and text.isdigit()):
            raise SnapshotParseError(f"snapshot {name} is not an unsigned integer: {text!r}")
        values.append(int(text))
    width, height, iterations = values
    return width, height, iterations


def _read_lines(path, first_only=False) -> list[str]:
    try:
        with open(path, encoding="utf-8") as f:
            if first_only:
                return [f.readline()]
            return f.read().splitlines()
    except UnicodeDecodeError as e:
        raise SnapshotParseError(f"snapshot {path} is not valid UTF-8 text: {e.reason}") from e


def read_header(path: str | os.PathLike) -> tuple[int, int, int]:
    first = _read_lines(path, first_only=True)[0]
    if not first.strip():
        raise SnapshotParseError(f"snapshot {path} has no header line")
    return parse_header(first)


def read_snapshot(path: str | os.PathLike, width: int, height: int) -> Snapshot:
    """
    Load a snapshot as a width x height grid.

    The declared dimensions must match exactly. Short rows and missing lines
    leave cells dead; characters and lines past the grid are ignored.
    """
    lines = _read_lines(path)

    if not lines or not lines[0].strip():
        raise SnapshotParseError(f"snapshot {path} has no header line")
    declared_width, declared_height, iterations = parse_header(lines[0])
    if (declared_width, declared_height) != (width, height):
        raise SeedMismatchError(path, (declared_width, declared_height), (width, height))

    cells = np.zeros((height, width), dtype=bool)
    for y, line in enumerate(lines[1:height + 1]):
        for x, char in enumerate(line[:width]):
            cells[y, x] = char == ALIVE

    logger.debug("Loaded %dx%d snapshot from %s (%d prior iterations)",
                 width, height, path, iterations)
    return Snapshot(DenseGrid(cells), iterations)


def format_snapshot(grid: Grid, iterations: int) -> str:
    lines = [f"{grid.width} {grid.height} {iterations}"]
    lines.extend(grid.render(ALIVE, DEAD))
    return "\n".join(lines) + "\n"


def _default_mode() -> int:
    """Permission bits a plain open() would give a new file."""
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def _write_temp(directory: Path, name: str, text: str) -> str:
    """Write `text` to a fresh temporary file in `directory`, return its name."""
    fd, tmp_name = tempfile.mkstemp(prefix=f".{name}.", suffix=".tmp", dir=directory)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
        os.chmod(tmp_name, _default_mode())
    except BaseException:
        os.unlink(tmp_name)
        raise
    return tmp_name


def write_snapshot(path: str | os.PathLike, grid: Grid, iterations: int) -> Path:
    """
    Write `grid` to `path`, replacing any existing file.

    The text goes to a temporary file in the same directory which is then
    renamed over `path`, so readers see either the whole snapshot or nothing.
    """
    path = Path(path)
    tmp_name = _write_temp(path.parent, path.name, format_snapshot(grid, iterations))
    try:
        os.replace(tmp_name, path)
    except BaseException:
        os.unlink(tmp_name)
        raise
    logger.debug("Wrote snapshot %s", path)
    return path


def _candidates(directory: Path, width: int, height: int, total_iterations: int):
    stem = f"game_of_life_{width}_{height}_{total_iterations}"
    yield directory / f"{stem}.txt"
    suffix = 1
    while True:
        yield directory / f"{stem}_{suffix}.txt"
        suffix += 1


def snapshot_path(directory: str | os.PathLike, width: int, height: int,
                  total_iterations: int) -> Path:
    """
    First unused output name for the grid size and cumulative generation count.

    Only a hint: another run may take the name before it is written.
    save_snapshot claims its name atomically.
    """
    for candidate in _candidates(Path(directory), width, height, total_iterations):
        if not candidate.exists():
            return candidate


def save_snapshot(directory: str | os.PathLike, grid: Grid, iterations: int) -> Path:
    """
    Write `grid` under the first free name from snapshot_path's sequence.

    The finished temporary file is hard-linked to each candidate name in turn;
    linking fails on an existing name, so no earlier snapshot is overwritten
    even when runs finish concurrently.
    """
    directory = Path(directory)
    tmp_name = _write_temp(directory, "game_of_life", format_snapshot(grid, iterations))
    try:
        for candidate in _candidates(directory, grid.width, grid.height, iterations):
            try:
                os.link(tmp_name, candidate)
            except FileExistsError:
                continue
            break
    finally:
        os.unlink(tmp_name)
    logger.debug("Wrote snapshot %s", candidate)
    return candidate
