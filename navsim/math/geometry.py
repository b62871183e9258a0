from __future__ import annotations

import math
from typing import Tuple

from navsim.types import Cell, Point2


def manhattan(a: Cell, b: Cell) -> int:
    """Sum of absolute coordinate differences."""
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def are_adjacent(a: Cell, b: Cell) -> bool:
    """True iff a and b share an edge (4-connectivity)."""
    return manhattan(a, b) == 1


def step_toward(p: Point2, target: Point2, max_step: float) -> Tuple[Point2, bool]:
    """
    Move p at most max_step units along the straight line to target.

    Returns:
      (new_point, arrived). When the remaining distance is <= max_step the
      point snaps to target exactly, no matter how large max_step is.
    """
    if not max_step >= 0.0:
        raise ValueError(f"max_step must be >= 0, got {max_step}")

    dx = target[0] - p[0]
    dy = target[1] - p[1]
    dist = math.hypot(dx, dy)

    if dist <= max_step:
        return (float(target[0]), float(target[1])), True

    # Axis-aligned moves keep dx/dist at exactly +-1.0, so no drift builds up
    x = p[0] + max_step * (dx / dist)
    y = p[1] + max_step * (dy / dist)
    return (x, y), False
