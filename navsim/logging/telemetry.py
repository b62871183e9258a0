# navsim/logging/telemetry.py
from __future__ import annotations

import csv
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from navsim.types import SessionView

FIELDNAMES = [
    "tick",
    "x",
    "y",
    "col",
    "row",
    "cursor",
    "path_len",
    "algorithm",
    "state",
    "has_destination",
    "unreachable",
]


def telemetry_row(tick: int, view: SessionView) -> Dict[str, Any]:
    """Flatten one session snapshot into a telemetry row."""
    return {
        "tick": tick,
        "x": view.position[0],
        "y": view.position[1],
        "col": view.cell[0],
        "row": view.cell[1],
        "cursor": len(view.path) - len(view.remaining),
        "path_len": len(view.path),
        "algorithm": view.algorithm,
        "state": view.state.value,
        "has_destination": int(view.has_destination),
        "unreachable": int(view.unreachable),
    }


@dataclass
class TelemetryLogger:
    """
    Buffered per-tick CSV telemetry.

    - Call `log_view(tick, view)` once per simulation tick.
    - Rows are buffered and written every `flush_every` rows.
    - The schema is fixed (FIELDNAMES); rows with other keys are rejected.
    """
    path: str
    flush_every: int = 200

    _buffer: List[Dict[str, Any]] = field(default_factory=list, init=False)
    _writer: Optional[csv.DictWriter] = field(default=None, init=False)
    _file: Any = field(default=None, init=False)

    def __post_init__(self) -> None:
        if self.flush_every < 1:
            raise ValueError(f"flush_every must be >= 1, got {self.flush_every}")

    def log_view(self, tick: int, view: SessionView) -> None:
        self.log(telemetry_row(tick, view))

    def log(self, row: Dict[str, Any]) -> None:
        missing = [k for k in FIELDNAMES if k not in row]
        extra = [k for k in row if k not in FIELDNAMES]
        if missing or extra:
            raise ValueError(f"telemetry row mismatch: missing={missing}, unexpected={extra}")

        self._buffer.append(row)
        if len(self._buffer) >= self.flush_every:
            self.flush()

    def flush(self) -> None:
        if not self._buffer:
            return

        if self._writer is None:
            parent = os.path.dirname(self.path)
            if parent:
                os.makedirs(parent, exist_ok=True)
            self._file = open(self.path, "w", newline="")
            self._writer = csv.DictWriter(self._file, fieldnames=FIELDNAMES)
            self._writer.writeheader()

        self._writer.writerows(self._buffer)
        self._buffer.clear()
        self._file.flush()

    def close(self) -> None:
        self.flush()
        if self._file is not None:
            self._file.close()
        self._file = None
        self._writer = None

    def __enter__(self) -> "TelemetryLogger":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
