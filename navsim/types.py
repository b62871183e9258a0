from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple


Cell = Tuple[int, int]  # (col, row), row grows downward
Point2 = Tuple[float, float]  # continuous (x, y), same axes as Cell
Path = List[Cell]  # excludes the start cell, ends at the goal


class SessionState(Enum):
	IDLE = "idle"
	COMMITTED = "committed"
	ARRIVED = "arrived"


@dataclass(frozen=True)
class SessionView:
	"""Read-only snapshot handed to whatever renders the session."""
	grid: List[List[int]]  # row-major copy, 0 free / 1 blocked
	position: Point2
	cell: Cell
	path: Path
	remaining: Path
	algorithm: str
	destination: Optional[Cell]
	state: SessionState
	unreachable: bool

	@property
	def has_destination(self) -> bool:
		return self.destination is not None
