from collections import deque
from typing import Deque, Dict, Optional

from loguru import logger

from navsim.map_grid import GridMap
from navsim.planners.common import reconstruct_path
from navsim.types import Cell, Path


def find_path(start: Cell, goal: Cell, grid: GridMap) -> Path:
    """
    Unit-cost breadth-first search over 4-connected free cells.

    Neighbours are expanded up, right, down, left, so among equally short
    routes the result is always the same one. Cells are marked when
    enqueued, never when dequeued: each cell enters the queue at most once.

    Returns the path from (excluding) start to (including) goal, or [] when
    start == goal, either endpoint is not navigable, or goal is unreachable.
    """
    if start == goal or not grid.is_navigable(start) or not grid.is_navigable(goal):
        return []

    parents: Dict[Cell, Optional[Cell]] = {start: None}
    frontier: Deque[Cell] = deque([start])
    expanded = 0

    while frontier:
        current = frontier.popleft()
        expanded += 1

        if current == goal:
            path = reconstruct_path(parents, goal)
            logger.debug("[BFS] {} -> {}: length={}, expanded={}", start, goal, len(path), expanded)
            return path

        for nb in grid.neighbors(current):
            if nb not in parents:
                parents[nb] = current
                frontier.append(nb)

    logger.debug("[BFS] {} -> {}: unreachable, expanded={}", start, goal, expanded)
    return []
