# navsim/viz/draw.py
import matplotlib.pyplot as plt
import numpy as np
from typing import Optional, Sequence, Tuple
from matplotlib.colors import ListedColormap, BoundaryNorm
from matplotlib.patches import Rectangle

from navsim.map_grid import cell_to_point
from navsim.types import Cell, Point2


def grid_extent(grid: np.ndarray, cell_size: float) -> Tuple[float, float, float, float]:
    """(left, right, bottom, top) with row 0 drawn at the top."""
    H, W = grid.shape
    return (0.0, W * cell_size, H * cell_size, 0.0)


def draw_grid(
    ax: plt.Axes,
    grid: np.ndarray,
    *,
    cell_size: float = 40.0,
    show_gridlines: bool = True,
):
    """
    Draw occupancy grid in continuous coordinates.
    grid: (H, W), 0 free, 1 blocked
    Returns the image artist so callers can update it in place.
    """
    grid = np.asarray(grid)
    extent = grid_extent(grid, cell_size)

    cmap = ListedColormap(["#141414", "#c83232"])
    norm = BoundaryNorm([-0.5, 0.5, 1.5], cmap.N)

    image = ax.imshow(
        grid,
        origin="upper",
        extent=extent,
        cmap=cmap,
        norm=norm,
        interpolation="nearest",
    )
    ax.set_aspect("equal")

    if show_gridlines:
        H, W = grid.shape
        for c in range(W + 1):
            ax.axvline(c * cell_size, linewidth=0.5, color="#323232")
        for r in range(H + 1):
            ax.axhline(r * cell_size, linewidth=0.5, color="#323232")

    return image


def path_points(path: Sequence[Cell], cell_size: float) -> Tuple[list, list]:
    pts = [cell_to_point(c, cell_size=cell_size) for c in path]
    return [p[0] for p in pts], [p[1] for p in pts]


def draw_path(ax: plt.Axes, path: Sequence[Cell], *, cell_size: float = 40.0):
    xs, ys = path_points(path, cell_size)
    (ln,) = ax.plot(xs, ys, marker="s", markersize=4, linestyle="", color="gold")
    return ln


def draw_destination(ax: plt.Axes, destination: Optional[Cell], *, cell_size: float = 40.0) -> Rectangle:
    rect = Rectangle((0.0, 0.0), cell_size / 2, cell_size / 2, color="#3232c8", visible=False)
    ax.add_patch(rect)
    set_destination_marker(rect, destination, cell_size=cell_size)
    return rect


def set_destination_marker(rect: Rectangle, destination: Optional[Cell], *, cell_size: float) -> None:
    if destination is None:
        rect.set_visible(False)
        return
    x, y = cell_to_point(destination, cell_size=cell_size)
    rect.set_xy((x - cell_size / 4, y - cell_size / 4))
    rect.set_visible(True)


def draw_agent(ax: plt.Axes, position: Point2, *, cell_size: float = 40.0) -> Rectangle:
    radius = cell_size / 3
    rect = Rectangle((0.0, 0.0), 2 * radius, 2 * radius, color="#32c832")
    ax.add_patch(rect)
    set_agent_marker(rect, position, cell_size=cell_size)
    return rect


def set_agent_marker(rect: Rectangle, position: Point2, *, cell_size: float) -> None:
    radius = cell_size / 3
    rect.set_xy((position[0] - radius, position[1] - radius))
