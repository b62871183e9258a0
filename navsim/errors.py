from __future__ import annotations

from typing import Tuple


class NavigationError(Exception):
    """Base class for recoverable navigation-core failures."""


class OutOfBounds(NavigationError, IndexError):
    def __init__(self, cell, shape: Tuple[int, int]):
        width, height = shape
        super().__init__(f"cell {cell} is outside a {width}x{height} grid")
        self.cell = cell
        self.shape = shape


class DimensionMismatch(NavigationError, ValueError):
    def __init__(self, expected: Tuple[int, int], got: Tuple[int, int]):
        super().__init__(
            f"expected a {expected[0]}x{expected[1]} matrix (width x height), "
            f"got {got[0]}x{got[1]}"
        )
        self.expected = expected
        self.got = got


class LayoutError(NavigationError):
    """Layout text could not be read, written or parsed."""
