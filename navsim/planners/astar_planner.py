import heapq
from typing import Dict, List, Optional, Set, Tuple

from loguru import logger

from navsim.map_grid import GridMap
from navsim.math.geometry import manhattan
from navsim.planners.common import reconstruct_path
from navsim.types import Cell, Path

# (f, g, col, row): equal f prefers lower g, then the lower (col, row)
_Entry = Tuple[int, int, int, int]


def find_path(start: Cell, goal: Cell, grid: GridMap) -> Path:
    """
    A* search with the Manhattan heuristic on a unit-cost 4-connected grid.

    Open list:
      - heap of (f, g, col, row) entries, f = g + h
      - a cell is pushed again on every strict g improvement; there is no
        decrease-key, stale entries are skipped when popped
    Closed set:
      - a cell is closed when popped, never when pushed, and is never
        reopened. h is consistent, so the first pop carries the optimal g.

    Same return contract as the breadth-first planner.
    """
    if start == goal or not grid.is_navigable(start) or not grid.is_navigable(goal):
        return []

    g_score: Dict[Cell, int] = {start: 0}
    parents: Dict[Cell, Optional[Cell]] = {start: None}
    closed: Set[Cell] = set()
    open_heap: List[_Entry] = [(manhattan(start, goal), 0, start[0], start[1])]
    expanded = 0

    while open_heap:
        _f, g, c, r = heapq.heappop(open_heap)
        current = (c, r)
        if current in closed:
            continue
        closed.add(current)
        expanded += 1

        if current == goal:
            path = reconstruct_path(parents, goal)
            logger.debug("[A*] {} -> {}: length={}, expanded={}", start, goal, len(path), expanded)
            return path

        for nb in grid.neighbors(current):
            if nb in closed:
                continue
            new_g = g + 1
            if new_g < g_score.get(nb, new_g + 1):
                g_score[nb] = new_g
                parents[nb] = current
                heapq.heappush(open_heap, (new_g + manhattan(nb, goal), new_g, nb[0], nb[1]))

    logger.debug("[A*] {} -> {}: unreachable, expanded={}", start, goal, expanded)
    return []
