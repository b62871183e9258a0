from enum import Enum

from navsim.map_grid import GridMap
from navsim.planners import astar_planner, bfs_planner
from navsim.types import Cell, Path


class Algorithm(Enum):
    UNWEIGHTED = "bfs"
    HEURISTIC = "astar"

    @property
    def display_name(self) -> str:
        return "BFS" if self is Algorithm.UNWEIGHTED else "A*"

    def next(self) -> "Algorithm":
        return Algorithm.HEURISTIC if self is Algorithm.UNWEIGHTED else Algorithm.UNWEIGHTED

    @classmethod
    def parse(cls, name) -> "Algorithm":
        """Accept an Algorithm, its value, its member name or its display name."""
        if isinstance(name, cls):
            return name
        key = str(name).strip().lower()
        for alg in cls:
            if key in (alg.value, alg.name.lower(), alg.display_name.lower()):
                return alg
        choices = ", ".join(a.value for a in cls)
        raise ValueError(f"unknown algorithm {name!r}, expected one of: {choices}")


_PLANNERS = {
    Algorithm.UNWEIGHTED: bfs_planner.find_path,
    Algorithm.HEURISTIC: astar_planner.find_path,
}


def find_path(algorithm: Algorithm, start: Cell, goal: Cell, grid: GridMap) -> Path:
    """Run the selected strategy. Every call is a fresh search."""
    return _PLANNERS[algorithm](start, goal, grid)
