import csv

import pytest

from navsim.logging.telemetry import FIELDNAMES, TelemetryLogger, telemetry_row
from navsim.map_grid import GridMap
from navsim.session import NavigationSession, SessionConfig


def test_row_from_view():
    session = NavigationSession(GridMap(4, 4), SessionConfig(speed=1000.0))
    session.set_destination((2, 0))
    session.tick()
    row = telemetry_row(1, session.view())
    assert list(row) == FIELDNAMES
    assert row["col"] == 1 and row["row"] == 0
    assert row["cursor"] == 1
    assert row["path_len"] == 2
    assert row["algorithm"] == "BFS"
    assert row["state"] == "committed"
    assert row["has_destination"] == 1
    assert row["unreachable"] == 0


def test_buffers_until_flush_every(tmp_path):
    out = tmp_path / "logs" / "run.csv"
    session = NavigationSession(GridMap(3, 3))
    telemetry = TelemetryLogger(str(out), flush_every=3)

    telemetry.log_view(1, session.view())
    telemetry.log_view(2, session.view())
    assert not out.exists()

    telemetry.log_view(3, session.view())
    assert out.exists()
    telemetry.close()

    with open(out, newline="") as f:
        rows = list(csv.DictReader(f))
    assert [r["tick"] for r in rows] == ["1", "2", "3"]
    assert rows[0]["state"] == "idle"


def test_context_manager_flushes_remaining_rows(tmp_path):
    out = tmp_path / "run.csv"
    session = NavigationSession(GridMap(3, 3))
    with TelemetryLogger(str(out)) as telemetry:
        telemetry.log_view(1, session.view())
    with open(out, newline="") as f:
        assert len(list(csv.DictReader(f))) == 1


def test_rejects_rows_outside_schema(tmp_path):
    telemetry = TelemetryLogger(str(tmp_path / "run.csv"))
    with pytest.raises(ValueError):
        telemetry.log({"tick": 1})


def test_flush_every_must_be_positive(tmp_path):
    with pytest.raises(ValueError):
        TelemetryLogger(str(tmp_path / "run.csv"), flush_every=0)
