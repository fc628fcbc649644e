import numpy as np
import pytest

from game_of_life.grid import DenseGrid
from game_of_life.neighbors import (OFFSETS, count_neighbors_dense, count_neighbors_sparse,
                                    neighbor_census, neighbor_ring)


def test_offsets_are_the_eight_surrounding_cells():
    assert len(OFFSETS) == 8
    assert (0, 0) not in OFFSETS
    assert set(OFFSETS) == {(dx, dy) for dx in (-1, 0, 1) for dy in (-1, 0, 1)} - {(0, 0)}


def test_neighbor_ring_wraps_at_corner():
    ring = neighbor_ring(0, 0, 5, 4)
    assert set(ring) == {(4, 3), (0, 3), (1, 3), (4, 0), (1, 0), (4, 1), (0, 1), (1, 1)}


def test_fully_alive_grid_has_eight_neighbors_everywhere():
    cells = np.ones((4, 5), dtype=bool)
    assert count_neighbors_dense(cells, 2, 1) == 8
    assert count_neighbors_sparse({(x, y) for x in range(5) for y in range(4)},
                                  0, 0, 5, 4) == 8


def test_horizontal_wraparound_counts_both_ways():
    width, height = 6, 5
    grid = DenseGrid.from_cells(width, height, [(width - 1, 2), (0, 2)])
    alive = grid.alive_cells()

    assert count_neighbors_dense(grid.cells, width - 1, 2) == 1
    assert count_neighbors_dense(grid.cells, 0, 2) == 1
    assert count_neighbors_sparse(alive, width - 1, 2, width, height) == 1
    assert count_neighbors_sparse(alive, 0, 2, width, height) == 1


def test_vertical_wraparound():
    grid = DenseGrid.from_cells(4, 4, [(1, 3)])
    assert count_neighbors_dense(grid.cells, 1, 0) == 1
    assert count_neighbors_dense(grid.cells, 2, 0) == 1
    assert count_neighbors_dense(grid.cells, 1, 1) == 0


def test_cell_does_not_count_itself():
    grid = DenseGrid.from_cells(5, 5, [(2, 2)])
    assert count_neighbors_dense(grid.cells, 2, 2) == 0
    assert count_neighbors_sparse(grid.alive_cells(), 2, 2, 5, 5) == 0


def test_counters_agree_with_each_other_and_the_census(random_grids):
    for grid in random_grids:
        alive = grid.alive_cells()
        census = neighbor_census(grid.cells)
        for y in range(grid.height):
            for x in range(grid.width):
                dense = count_neighbors_dense(grid.cells, x, y)
                assert 0 <= dense <= 8
                assert dense == count_neighbors_sparse(alive, x, y, grid.width, grid.height)
                assert dense == census[y, x]


@pytest.mark.parametrize("width,height", [(1, 1), (1, 4), (2, 2), (3, 1)])
def test_tiny_grids_count_wrapped_duplicates_consistently(width, height):
    grid = DenseGrid(np.ones((height, width), dtype=bool))
    census = neighbor_census(grid.cells)
    for y in range(height):
        for x in range(width):
            assert count_neighbors_dense(grid.cells, x, y) == 8
            assert census[y, x] == 8
