from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from loguru import logger

from navsim.agent import Agent
from navsim.errors import OutOfBounds
from navsim.io import layout
from navsim.map_grid import GridMap
from navsim.planners.registry import Algorithm, find_path
from navsim.types import Cell, Path, SessionState, SessionView


@dataclass(frozen=True)
class SessionConfig:
    speed: float = 2.0                          # continuous units per tick
    algorithm: Algorithm = Algorithm.UNWEIGHTED
    start: Cell = (0, 0)
    layout_path: str = "warehouse_layout.txt"

    def __post_init__(self) -> None:
        if not self.speed >= 0.0:
            raise ValueError(f"speed must be >= 0, got {self.speed}")
        if not isinstance(self.algorithm, Algorithm):
            raise ValueError(f"algorithm must be an Algorithm, got {self.algorithm!r}")
        if len(self.start) != 2:
            raise ValueError(f"start must be a (col, row) pair, got {self.start!r}")


class NavigationSession:
    """
    Owns grid, agent, destination and strategy; decides when to replan.

    States:
      - IDLE: no destination
      - COMMITTED: destination set, agent still en route or unable to move
      - ARRIVED: destination set and the agent's cell is the destination

    Every replan is a full search from the agent's current logical cell.
    An empty plan means "stand still", never an error.
    """

    def __init__(self, grid: GridMap, config: SessionConfig = SessionConfig()):
        start = (int(config.start[0]), int(config.start[1]))
        if not grid.in_bounds(start):
            raise OutOfBounds(start, grid.shape)

        self.grid = grid
        self.config = config
        self.algorithm: Algorithm = config.algorithm
        self.agent = Agent(start, cell_size=grid.cell_size)
        self.destination: Optional[Cell] = None

    # ----------------------------
    # Queries
    # ----------------------------

    @property
    def path(self) -> Path:
        return self.agent.path

    @property
    def has_destination(self) -> bool:
        return self.destination is not None

    @property
    def state(self) -> SessionState:
        if self.destination is None:
            return SessionState.IDLE
        if self.agent.is_idle and self.agent.cell == self.destination:
            return SessionState.ARRIVED
        return SessionState.COMMITTED

    @property
    def unreachable(self) -> bool:
        """Destination set but the current plan cannot get the agent there."""
        return (
            self.destination is not None
            and self.agent.is_idle
            and self.agent.cell != self.destination
        )

    def view(self) -> SessionView:
        return SessionView(
            grid=self.grid.snapshot().tolist(),
            position=self.agent.position,
            cell=self.agent.cell,
            path=list(self.agent.path),
            remaining=self.agent.remaining,
            algorithm=self.algorithm.display_name,
            destination=self.destination,
            state=self.state,
            unreachable=self.unreachable,
        )

    # ----------------------------
    # Operations
    # ----------------------------

    def set_destination(self, cell: Cell) -> bool:
        """
        Plan to cell from the agent's current cell.

        A non-navigable cell is ignored (returns False, no state change).
        """
        cell = (int(cell[0]), int(cell[1]))
        if not self.grid.is_navigable(cell):
            logger.debug("Ignoring destination {}: not navigable", cell)
            return False

        self.destination = cell
        logger.info("Destination set to {}", cell)
        self._replan()
        return True

    def toggle_obstacle(self, cell: Cell) -> bool:
        """Flip a cell; reroute live if a destination is active. Returns the new blocked state."""
        cell = (int(cell[0]), int(cell[1]))
        blocked = self.grid.toggle_obstacle(cell)
        logger.debug("Cell {} is now {}", cell, "blocked" if blocked else "free")
        if self.destination is not None:
            self._replan()
        return blocked

    def switch_algorithm(self, algorithm: Union[Algorithm, str]) -> None:
        self.algorithm = Algorithm.parse(algorithm)
        logger.info("Algorithm set to {}", self.algorithm.display_name)
        if self.destination is not None:
            self._replan()

    def cycle_algorithm(self) -> Algorithm:
        self.switch_algorithm(self.algorithm.next())
        return self.algorithm

    def clear(self) -> None:
        """Drop destination and path; the agent stays where it is."""
        self.destination = None
        self.agent.clear_path()
        logger.info("Navigation cleared at {}", self.agent.cell)

    def tick(self) -> bool:
        """One simulation step. Returns True if the agent reached a waypoint."""
        arrived = self.agent.tick(self.config.speed)
        if arrived and self.state is SessionState.ARRIVED:
            logger.info("Arrived at {}", self.destination)
        return arrived

    def save_layout(self, path: Optional[str] = None) -> None:
        layout.save_layout(self.grid, path or self.config.layout_path)

    def load_layout(self, path: Optional[str] = None) -> None:
        """Load a layout file; nothing changes if it is unreadable or malformed."""
        layout.load_layout(self.grid, path or self.config.layout_path)
        if self.destination is not None:
            self._replan()

    # ----------------------------
    # Replanning
    # ----------------------------

    def _replan(self) -> None:
        assert self.destination is not None
        start = self.agent.cell
        path = find_path(self.algorithm, start, self.destination, self.grid)
        self.agent.assign_path(path)

        if path:
            logger.info(
                "[{}] planned {} -> {}: {} steps",
                self.algorithm.display_name, start, self.destination, len(path),
            )
        elif start != self.destination:
            logger.warning(
                "[{}] destination {} unreachable from {}",
                self.algorithm.display_name, self.destination, start,
            )
