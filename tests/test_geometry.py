import math

import pytest

from navsim.math.geometry import are_adjacent, manhattan, step_toward


def test_manhattan_is_sum_of_axis_differences():
    assert manhattan((0, 0), (4, 4)) == 8
    assert manhattan((3, 1), (1, 2)) == 3
    assert manhattan((2, 2), (2, 2)) == 0


def test_are_adjacent_rejects_diagonals_and_skips():
    assert are_adjacent((1, 1), (1, 0))
    assert are_adjacent((1, 1), (2, 1))
    assert not are_adjacent((1, 1), (2, 2))
    assert not are_adjacent((1, 1), (1, 3))
    assert not are_adjacent((1, 1), (1, 1))


def test_step_toward_moves_exactly_max_step_along_axis():
    p, arrived = step_toward((20.0, 20.0), (60.0, 20.0), 2.0)
    assert p == (22.0, 20.0)
    assert not arrived


def test_step_toward_diagonal_keeps_distance():
    p, arrived = step_toward((0.0, 0.0), (30.0, 40.0), 5.0)
    assert not arrived
    assert abs(math.hypot(p[0], p[1]) - 5.0) < 1e-9
    assert abs(p[0] - 3.0) < 1e-9
    assert abs(p[1] - 4.0) < 1e-9


@pytest.mark.parametrize("max_step", [1.0, 40.0, 1e9])
def test_step_toward_snaps_without_overshoot(max_step):
    p, arrived = step_toward((59.5, 20.0), (60.0, 20.0), max_step)
    assert arrived
    assert p == (60.0, 20.0)


def test_step_toward_zero_distance_arrives_even_at_zero_speed():
    p, arrived = step_toward((60.0, 20.0), (60.0, 20.0), 0.0)
    assert arrived
    assert p == (60.0, 20.0)


def test_step_toward_rejects_negative_step():
    with pytest.raises(ValueError):
        step_toward((0.0, 0.0), (1.0, 0.0), -1.0)


def test_step_toward_rejects_nan_step():
    with pytest.raises(ValueError):
        step_toward((0.0, 0.0), (1.0, 0.0), float("nan"))
