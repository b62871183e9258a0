from typing import Dict, Optional

from navsim.types import Cell, Path


def reconstruct_path(parents: Dict[Cell, Optional[Cell]], goal: Cell) -> Path:
    """Follow parent links from goal back to the root; root itself excluded."""
    path: Path = []
    cell = goal
    while parents[cell] is not None:
        path.append(cell)
        cell = parents[cell]
    path.reverse()
    return path
