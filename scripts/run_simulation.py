from __future__ import annotations
import argparse
import sys

from loguru import logger

from navsim.errors import NavigationError
from navsim.logging.telemetry import TelemetryLogger
from navsim.map_grid import GridMap, make_demo_map
from navsim.planners.registry import Algorithm
from navsim.session import NavigationSession, SessionConfig
from navsim.sim_loop import run_headless


def parse_args():
    p = argparse.ArgumentParser(
        description="Warehouse robot on an editable grid with BFS / A* replanning",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    p.add_argument("--algorithm", type=Algorithm.parse, default=Algorithm.UNWEIGHTED,
                   help="Initial planner: bfs or astar.")
    p.add_argument("--speed", type=float, default=2.0,
                   help="Agent speed in continuous units per tick.")
    p.add_argument("--layout", type=str, default="warehouse_layout.txt",
                   help="Layout file used by save/load.")
    p.add_argument("--empty", action="store_true",
                   help="Start from an empty 20x15 floor instead of the demo layout.")
    p.add_argument("--load", action="store_true",
                   help="Load --layout before starting.")
    p.add_argument("--log_csv", type=str, default=None,
                   help="If set, write per-tick telemetry to this path (e.g., logs/run.csv).")

    p.add_argument("--headless", action="store_true",
                   help="Run without a window (pair with --goal).")
    p.add_argument("--goal", type=int, nargs=2, metavar=("COL", "ROW"), default=None,
                   help="Destination cell to set at startup.")
    p.add_argument("--steps", type=int, default=2000,
                   help="Maximum ticks to run.")
    p.add_argument("--verbose", action="store_true", help="Show debug logs.")
    return p.parse_args()


def main():
    args = parse_args()
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if args.verbose else "INFO")

    grid = GridMap(20, 15) if args.empty else make_demo_map()
    config = SessionConfig(speed=args.speed, algorithm=args.algorithm, layout_path=args.layout)
    session = NavigationSession(grid, config)

    if args.load:
        try:
            session.load_layout()
        except NavigationError as e:
            logger.error("Could not load {}: {}", args.layout, e)
            return 1

    if args.goal is not None and not session.set_destination(tuple(args.goal)):
        logger.warning("Goal {} is not a free cell", tuple(args.goal))

    if args.headless:
        if args.log_csv:
            with TelemetryLogger(args.log_csv) as telemetry:
                run_headless(session, max_steps=args.steps, telemetry=telemetry)
        else:
            run_headless(session, max_steps=args.steps)
        return 0

    # Imported late so headless runs never need a display backend
    from navsim.viz.anim import VizConfig, run_interactive
    run_interactive(session, viz=VizConfig(max_steps=args.steps), log_csv=args.log_csv)
    return 0


if __name__ == "__main__":
    sys.exit(main())
