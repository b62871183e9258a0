from __future__ import annotations

from typing import Optional

from loguru import logger

from navsim.logging.telemetry import TelemetryLogger
from navsim.session import NavigationSession


def run_headless(
    session: NavigationSession,
    *,
    max_steps: int,
    telemetry: Optional[TelemetryLogger] = None,
    stop_when_idle: bool = True,
) -> int:
    """
    Tick the session without any display.

    Each step: one agent tick, then (optionally) one telemetry row.
    Stops after max_steps, or earlier once the agent has no waypoint left
    when stop_when_idle is set. Returns the number of ticks run.
    """
    if max_steps < 0:
        raise ValueError(f"max_steps must be >= 0, got {max_steps}")

    ticks = 0
    for ticks in range(1, max_steps + 1):
        session.tick()
        if telemetry is not None:
            telemetry.log_view(ticks, session.view())
        if stop_when_idle and session.agent.is_idle:
            break

    logger.info(
        "Headless run finished after {} ticks: state={}, cell={}",
        ticks, session.state.value, session.agent.cell,
    )
    return ticks
