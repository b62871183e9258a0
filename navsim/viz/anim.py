from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import matplotlib.pyplot as plt
from loguru import logger

from navsim.errors import NavigationError
from navsim.logging.telemetry import TelemetryLogger
from navsim.map_grid import point_to_cell
from navsim.session import NavigationSession
from navsim.viz.draw import (
    draw_agent,
    draw_destination,
    draw_grid,
    draw_path,
    path_points,
    set_agent_marker,
    set_destination_marker,
)

LEFT_BUTTON = 1
RIGHT_BUTTON = 3

HELP_TEXT = (
    "Left click: set destination   Right click: toggle obstacle\n"
    "r: reset   t: toggle algorithm   s: save layout   l: load layout   q: quit"
)


@dataclass(frozen=True)
class VizConfig:
    title: str = "Warehouse Robot"
    frame_dt: float = 0.016     # seconds between frames
    max_steps: int = 100_000
    show_help: bool = True

    def __post_init__(self) -> None:
        if self.frame_dt <= 0.0:
            raise ValueError(f"frame_dt must be > 0, got {self.frame_dt}")


def handle_key(session: NavigationSession, key: Optional[str]) -> bool:
    """
    Map one key press to a session command.
    Returns False when the key asks to quit, True otherwise.
    """
    if key in ("q", "escape"):
        return False

    try:
        if key == "r":
            session.clear()
        elif key == "t":
            session.cycle_algorithm()
        elif key == "s":
            session.save_layout()
        elif key == "l":
            session.load_layout()
    except NavigationError as e:
        logger.warning("Command '{}' failed: {}", key, e)
    return True


def handle_click(session: NavigationSession, x: Optional[float], y: Optional[float], button: int) -> None:
    """Map a click at continuous (x, y) to a destination or an obstacle toggle."""
    if x is None or y is None:
        return
    cell = point_to_cell((x, y), cell_size=session.grid.cell_size)

    if button == LEFT_BUTTON:
        session.set_destination(cell)
    elif button == RIGHT_BUTTON:
        try:
            session.toggle_obstacle(cell)
        except NavigationError as e:
            logger.warning("Toggle ignored: {}", e)


def run_interactive(
    session: NavigationSession,
    *,
    viz: VizConfig = VizConfig(),
    log_csv: Optional[str] = None,
    log_flush_every: int = 200,
) -> None:
    cs = session.grid.cell_size
    view = session.view()

    telemetry: Optional[TelemetryLogger] = None
    if log_csv is not None:
        telemetry = TelemetryLogger(log_csv, flush_every=log_flush_every)

    fig, ax = plt.subplots()
    image = draw_grid(ax, view.grid, cell_size=cs)
    path_ln = draw_path(ax, view.remaining, cell_size=cs)
    dest_rect = draw_destination(ax, view.destination, cell_size=cs)
    agent_rect = draw_agent(ax, view.position, cell_size=cs)
    if viz.show_help:
        ax.set_xlabel(HELP_TEXT, fontsize=8)

    running = {"v": True}

    def on_key(event):
        running["v"] = handle_key(session, event.key)

    def on_click(event):
        if event.inaxes is ax:
            handle_click(session, event.xdata, event.ydata, event.button)

    fig.canvas.mpl_connect("key_press_event", on_key)
    fig.canvas.mpl_connect("button_press_event", on_click)

    def render() -> None:
        v = session.view()
        image.set_data(v.grid)
        path_ln.set_data(*path_points(v.remaining, cs))
        set_destination_marker(dest_rect, v.destination, cell_size=cs)
        set_agent_marker(agent_rect, v.position, cell_size=cs)
        suffix = " (unreachable)" if v.unreachable else ""
        ax.set_title(f"{viz.title} - {v.algorithm} - {v.state.value}{suffix}")
        fig.canvas.draw_idle()

    plt.ion()
    plt.show()

    try:
        for tick in range(1, viz.max_steps + 1):
            if not running["v"] or not plt.fignum_exists(fig.number):
                break
            session.tick()
            if telemetry is not None:
                telemetry.log_view(tick, session.view())
            render()
            plt.pause(viz.frame_dt)
    finally:
        if telemetry is not None:
            telemetry.close()

    plt.ioff()
    plt.close(fig)
