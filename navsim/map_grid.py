# navsim/map_grid.py
from typing import Iterator, List, Sequence
import numpy as np

from navsim.errors import DimensionMismatch, OutOfBounds
from navsim.types import Cell, Point2

FREE = 0
BLOCKED = 1

# up, right, down, left (row grows downward)
NEIGHBOR_OFFSETS = ((0, -1), (1, 0), (0, 1), (-1, 0))


class GridMap:
    """
    Fixed-size occupancy grid addressed by (col, row).

    Storage is a (height, width) uint8 array: 0 free, 1 blocked.
    Dimensions never change after construction.
    """

    def __init__(self, width: int, height: int, cell_size: float = 40.0):
        if width <= 0 or height <= 0:
            raise ValueError(f"grid must be at least 1x1, got {width}x{height}")
        if cell_size <= 0.0:
            raise ValueError(f"cell_size must be > 0, got {cell_size}")
        self.width = int(width)
        self.height = int(height)
        self.cell_size = float(cell_size)
        self._cells = np.zeros((self.height, self.width), dtype=np.uint8)

    @classmethod
    def from_matrix(cls, matrix: Sequence[Sequence[int]], cell_size: float = 40.0) -> "GridMap":
        arr = np.asarray(matrix)
        if arr.ndim != 2:
            raise ValueError(f"matrix must be 2D, got shape {arr.shape}")
        grid = cls(arr.shape[1], arr.shape[0], cell_size=cell_size)
        grid.load_snapshot(arr)
        return grid

    @property
    def shape(self):
        return (self.width, self.height)

    def in_bounds(self, cell: Cell) -> bool:
        c, r = cell
        return 0 <= c < self.width and 0 <= r < self.height

    def is_navigable(self, cell: Cell) -> bool:
        """Single validity predicate: in bounds and free. Never raises."""
        if not self.in_bounds(cell):
            return False
        c, r = cell
        return bool(self._cells[r, c] == FREE)

    def is_blocked(self, cell: Cell) -> bool:
        self._require_in_bounds(cell)
        c, r = cell
        return bool(self._cells[r, c] == BLOCKED)

    def toggle_obstacle(self, cell: Cell) -> bool:
        """Flip free <-> blocked. Returns the new blocked state."""
        self._require_in_bounds(cell)
        c, r = cell
        self._cells[r, c] = BLOCKED - self._cells[r, c]
        return bool(self._cells[r, c] == BLOCKED)

    def neighbors(self, cell: Cell) -> Iterator[Cell]:
        """Navigable 4-neighbours in the fixed order up, right, down, left."""
        c, r = cell
        for dc, dr in NEIGHBOR_OFFSETS:
            nb = (c + dc, r + dr)
            if self.is_navigable(nb):
                yield nb

    def load_snapshot(self, matrix) -> None:
        """
        Replace every cell from a row-major height x width matrix of 0/1.

        All-or-nothing: the matrix is validated in full before anything is
        written, so a bad matrix leaves the grid unchanged.
        """
        rows = [list(row) for row in matrix]
        if len(rows) != self.height:
            width = len(rows[0]) if rows else 0
            raise DimensionMismatch(self.shape, (width, len(rows)))
        for row in rows:
            if len(row) != self.width:
                raise DimensionMismatch(self.shape, (len(row), len(rows)))

        staged = np.asarray(rows)
        # Compare before casting so 0.7 or 1.9 cannot truncate to a valid value
        if not np.isin(staged, (FREE, BLOCKED)).all():
            raise ValueError("occupancy values must be 0 (free) or 1 (blocked)")
        self._cells[:, :] = staged.astype(np.uint8)

    def snapshot(self) -> np.ndarray:
        """Row-major copy of current occupancy."""
        return self._cells.copy()

    def blocked_cells(self) -> List[Cell]:
        rows, cols = np.nonzero(self._cells)
        return [(int(c), int(r)) for r, c in zip(rows, cols)]

    def _require_in_bounds(self, cell: Cell) -> None:
        if not self.in_bounds(cell):
            raise OutOfBounds(cell, self.shape)


def cell_to_point(cell: Cell, *, cell_size: float) -> Point2:
    """
    Continuous center of a cell.

    Convention:
      - x increases with col, y increases with row
      - cell (0, 0) spans [0, cell_size) on both axes
    """
    c, r = cell
    half = cell_size / 2.0
    return (c * cell_size + half, r * cell_size + half)


def point_to_cell(xy: Point2, *, cell_size: float) -> Cell:
    """
    Inverse of cell_to_point for any point inside the cell (floor division).
    May return an out-of-bounds cell; callers validate through GridMap.
    """
    x, y = xy
    return (int(np.floor(x / cell_size)), int(np.floor(y / cell_size)))


def make_demo_map(cell_size: float = 40.0) -> GridMap:
    """20x15 warehouse floor: three shelf rows split by a cross aisle."""
    W, H = 20, 15
    grid = np.zeros((H, W), dtype=np.uint8)

    # Shelves
    for r in (3, 7, 11):
        grid[r, 2:9] = BLOCKED
        grid[r, 11:18] = BLOCKED

    # Packing station in the far corner
    grid[12:14, 16:18] = BLOCKED

    return GridMap.from_matrix(grid, cell_size=cell_size)
