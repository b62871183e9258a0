# scripts/view_static_gridmap.py
import argparse

import matplotlib.pyplot as plt

from navsim.io.layout import load_layout
from navsim.map_grid import GridMap, make_demo_map
from navsim.viz.draw import draw_grid


def main():
    p = argparse.ArgumentParser(description="Show a saved layout (or the demo floor).")
    p.add_argument("layout", nargs="?", default=None)
    p.add_argument("--width", type=int, default=20)
    p.add_argument("--height", type=int, default=15)
    args = p.parse_args()

    if args.layout is None:
        grid = make_demo_map()
    else:
        grid = GridMap(args.width, args.height)
        load_layout(grid, args.layout)

    fig, ax = plt.subplots()
    draw_grid(ax, grid.snapshot(), cell_size=grid.cell_size)
    plt.title(args.layout or "Demo warehouse")
    plt.show()

if __name__ == "__main__":
    main()
