# navsim/agent.py
from typing import List, Optional

from navsim.map_grid import cell_to_point
from navsim.math.geometry import step_toward
from navsim.types import Cell, Path, Point2


class Agent:
    """
    Single navigator following a discrete path with continuous motion.

    State:
      - cell: authoritative logical cell, used for every planning query
      - position: continuous (x, y), interpolation only
      - path / cursor: assigned waypoints and index of the next one to reach
    """

    def __init__(self, cell: Cell, *, cell_size: float = 40.0):
        if cell_size <= 0.0:
            raise ValueError(f"cell_size must be > 0, got {cell_size}")
        self.cell_size = float(cell_size)
        self.cell: Cell = tuple(cell)
        self.position: Point2 = cell_to_point(self.cell, cell_size=self.cell_size)
        self.path: Path = []
        self.cursor: int = 0

    def assign_path(self, path: Path) -> None:
        """Replace (never merge) the current path and restart at its first waypoint."""
        self.path = list(path)
        self.cursor = 0

    def clear_path(self) -> None:
        self.assign_path([])

    @property
    def is_idle(self) -> bool:
        return self.cursor >= len(self.path)

    @property
    def remaining(self) -> List[Cell]:
        return self.path[self.cursor:]

    @property
    def target(self) -> Optional[Cell]:
        return None if self.is_idle else self.path[self.cursor]

    def tick(self, speed: float) -> bool:
        """
        Advance one simulation step of at most `speed` units.

        Returns True on the tick the agent lands exactly on a waypoint center
        (the only moment the logical cell changes), False otherwise.
        """
        if not speed >= 0.0:
            raise ValueError(f"speed must be >= 0, got {speed}")
        if self.is_idle:
            return False

        waypoint = self.path[self.cursor]
        center = cell_to_point(waypoint, cell_size=self.cell_size)
        self.position, arrived = step_toward(self.position, center, speed)
        if arrived:
            self.cell = waypoint
            self.cursor += 1
        return arrived
