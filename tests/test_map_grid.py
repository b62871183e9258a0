import numpy as np
import pytest

from navsim.errors import DimensionMismatch, OutOfBounds
from navsim.map_grid import GridMap, cell_to_point, make_demo_map, point_to_cell


def test_new_grid_is_all_free():
    grid = GridMap(5, 3)
    assert grid.shape == (5, 3)
    assert grid.snapshot().shape == (3, 5)
    assert not grid.snapshot().any()
    assert all(grid.is_navigable((c, r)) for c in range(5) for r in range(3))


@pytest.mark.parametrize("cell", [(-1, 0), (0, -1), (5, 0), (0, 3), (100, 100)])
def test_out_of_bounds_is_never_navigable(cell):
    grid = GridMap(5, 3)
    assert not grid.is_navigable(cell)


def test_toggle_is_an_involution():
    grid = GridMap(5, 5)
    p = (2, 3)
    assert grid.is_navigable(p)
    assert grid.toggle_obstacle(p) is True
    assert not grid.is_navigable(p)
    assert grid.is_blocked(p)
    assert grid.toggle_obstacle(p) is False
    assert grid.is_navigable(p)


def test_toggle_addresses_col_then_row():
    grid = GridMap(4, 2)
    grid.toggle_obstacle((3, 1))
    snap = grid.snapshot()
    assert snap[1, 3] == 1
    assert snap.sum() == 1
    assert grid.blocked_cells() == [(3, 1)]


@pytest.mark.parametrize("cell", [(-1, 0), (4, 0), (0, 2)])
def test_toggle_out_of_bounds_fails_and_leaves_grid(cell):
    grid = GridMap(4, 2)
    with pytest.raises(OutOfBounds) as exc:
        grid.toggle_obstacle(cell)
    assert exc.value.cell == cell
    assert not grid.snapshot().any()


def test_is_blocked_out_of_bounds_raises():
    with pytest.raises(OutOfBounds):
        GridMap(2, 2).is_blocked((2, 0))


def test_neighbors_order_is_up_right_down_left():
    grid = GridMap(3, 3)
    assert list(grid.neighbors((1, 1))) == [(1, 0), (2, 1), (1, 2), (0, 1)]


def test_neighbors_skip_blocked_and_out_of_bounds():
    grid = GridMap(3, 3)
    grid.toggle_obstacle((1, 0))
    assert list(grid.neighbors((0, 0))) == [(0, 1)]


def test_load_snapshot_replaces_all_cells():
    grid = GridMap(3, 2)
    grid.load_snapshot([[0, 1, 0], [1, 0, 1]])
    assert grid.snapshot().tolist() == [[0, 1, 0], [1, 0, 1]]
    assert not grid.is_navigable((1, 0))
    assert grid.is_navigable((1, 1))


@pytest.mark.parametrize(
    "matrix",
    [
        [[0, 1, 0]],                    # too few rows
        [[0, 1], [1, 0]],               # too few columns
        [[0, 1, 0], [1, 0]],            # ragged
        [[0, 1, 0], [1, 0, 1], [0, 0, 0]],  # too many rows
        [],
    ],
)
def test_load_snapshot_dimension_mismatch_is_all_or_nothing(matrix):
    grid = GridMap(3, 2)
    grid.toggle_obstacle((0, 0))
    before = grid.snapshot()
    with pytest.raises(DimensionMismatch):
        grid.load_snapshot(matrix)
    assert np.array_equal(grid.snapshot(), before)


@pytest.mark.parametrize("matrix", [[[0, 2]], [[0.7, 1.9]], [[0, -1]], [[0, 0.5]]])
def test_load_snapshot_rejects_non_binary_values(matrix):
    grid = GridMap(2, 1)
    with pytest.raises(ValueError):
        grid.load_snapshot(matrix)
    assert not grid.snapshot().any()


def test_load_snapshot_accepts_whole_float_values():
    grid = GridMap(2, 1)
    grid.load_snapshot([[0.0, 1.0]])
    assert grid.snapshot().tolist() == [[0, 1]]


def test_snapshot_is_a_copy():
    grid = GridMap(2, 2)
    snap = grid.snapshot()
    snap[0, 0] = 1
    assert grid.is_navigable((0, 0))


def test_from_matrix_takes_dimensions_from_matrix():
    grid = GridMap.from_matrix(np.array([[0, 0, 1], [0, 0, 0]]))
    assert grid.shape == (3, 2)
    assert not grid.is_navigable((2, 0))


def test_cell_centers_and_inverse():
    assert cell_to_point((0, 0), cell_size=40.0) == (20.0, 20.0)
    assert cell_to_point((3, 2), cell_size=40.0) == (140.0, 100.0)
    assert point_to_cell((140.0, 100.0), cell_size=40.0) == (3, 2)
    assert point_to_cell((159.9, 80.0), cell_size=40.0) == (3, 2)
    assert point_to_cell((-1.0, 5.0), cell_size=40.0) == (-1, 0)


def test_invalid_construction():
    with pytest.raises(ValueError):
        GridMap(0, 3)
    with pytest.raises(ValueError):
        GridMap(3, 3, cell_size=0.0)


def test_demo_map_dimensions_and_free_origin():
    grid = make_demo_map()
    assert grid.shape == (20, 15)
    assert grid.is_navigable((0, 0))
    assert grid.blocked_cells()


def test_predicates_return_plain_bools():
    grid = GridMap(2, 2)
    grid.toggle_obstacle((1, 1))
    assert grid.is_navigable((0, 0)) is True
    assert grid.is_navigable((1, 1)) is False
    assert grid.is_navigable((5, 5)) is False
    assert grid.is_blocked((1, 1)) is True
    assert grid.is_blocked((0, 0)) is False
