# tests/conftest.py
from __future__ import annotations

import asyncio
from datetime import datetime, timedelta
from typing import Dict, List, Optional

import pytest
from loguru import logger

from lagerboard.engines.period_engine import Period
from lagerboard.models.project import Project


@pytest.fixture(autouse=True)
def disable_file_logger():
    logger.remove()
    logger.add(lambda msg: None)
    yield


def make_project(sp_id: int, **overrides) -> Project:
    base = dict(
        sp_id=sp_id,
        displayname=f"Tour {sp_id}",
        project=f"Artist {sp_id}",
        sp_start_pp=datetime(2026, 1, 5, 8, 0) + timedelta(hours=sp_id),
        sp_end_pp=datetime(2026, 1, 9, 16, 0),
        sp_start_up=datetime(2026, 1, 5, 7, 0),
        sp_end_up=datetime(2026, 1, 9, 18, 0),
        wh_out_letter="A",
        wh_in_letter="B",
    )
    base.update(overrides)
    return Project(**base)


@pytest.fixture
def projects():
    """Factory: projects(n, start=0) → n distinct projects in order."""

    def _make(n: int, start: int = 0) -> List[Project]:
        return [make_project(i) for i in range(start, start + n)]

    return _make


class FakeGateway:
    """
    In-memory gateway. `data` can be swapped between refreshes; `gate`
    (an asyncio.Event) holds every fetch until set; `raises` makes a
    period's fetch raise instead of returning.
    """

    def __init__(self, data: Optional[Dict[Period, List[Project]]] = None):
        self.data = data or {}
        self.calls: List[Period] = []
        self.gate: Optional[asyncio.Event] = None
        self.raises: Dict[Period, BaseException] = {}

    async def fetch_period(self, period: Period) -> List[Project]:
        self.calls.append(period)
        if self.gate is not None:
            await self.gate.wait()
        else:
            await asyncio.sleep(0)
        if period in self.raises:
            raise self.raises[period]
        return list(self.data.get(period, []))


class RecordingRenderer:
    def __init__(self):
        self.panels: Dict[Period, tuple] = {}
        self.panel_calls = 0
        self.clocks: List[datetime] = []
        self.counters: List[Dict[Period, str]] = []

    def render_panel(self, period, page, index, page_count):
        self.panel_calls += 1
        self.panels[period] = (tuple(page) if page else None, index, page_count)

    def render_clock(self, now):
        self.clocks.append(now)

    def render_counters(self, counters):
        self.counters.append(dict(counters))


@pytest.fixture
def fake_gateway():
    return FakeGateway()


@pytest.fixture
def recording_renderer():
    return RecordingRenderer()


# ============================================================
# SQLite stand-in for the production project database
# ============================================================
_SCHEMA = [
    """CREATE TABLE project_with_sp (
        subproject_id INTEGER PRIMARY KEY,
        subproject_name TEXT,
        project_id INTEGER,
        project_name TEXT,
        sp_start_pp TIMESTAMP, sp_end_pp TIMESTAMP,
        sp_start_up TIMESTAMP, sp_end_up TIMESTAMP,
        wh_out INTEGER, wh_in INTEGER,
        sp_status INTEGER,
        is_planning INTEGER
    )""",
    "CREATE TABLE crew (rentman_id INTEGER PRIMARY KEY, letter TEXT)",
    "CREATE TABLE rentman_status (status INTEGER PRIMARY KEY, name TEXT)",
    "CREATE TABLE transport (id INTEGER PRIMARY KEY, subproject_id INTEGER, truck TEXT, up_end TIMESTAMP)",
]

# (id, name, project, start_pp, end_pp, start_up, end_up, status, planning)
_SUBPROJECTS = [
    (10, "Roskilde A", "Roskilde", "2026-01-08 08:00:00", "2026-01-12 18:00:00", "2026-01-08 07:00:00", "2026-01-12 20:00:00", 3, 1),
    (11, "Roskilde B", "Roskilde", "2026-01-07 09:00:00", "2026-01-12 18:00:00", "2026-01-07 06:00:00", "2026-01-12 20:00:00", 3, 1),
    (12, "Draft", "Draft", "2026-01-09 23:30:00", "2026-01-20 18:00:00", "2026-01-09 23:00:00", "2026-01-20 20:00:00", 3, 0),
    (13, "Later", "Later", "2026-01-15 08:00:00", "2026-01-20 18:00:00", "2026-01-15 07:00:00", "2026-01-20 20:00:00", 3, 1),
    (20, "Smukfest", "Smukfest", "2026-01-06 02:00:00", "2026-01-07 20:00:00", "2026-01-06 00:00:00", "2026-01-07 22:00:00", 4, 1),
    (21, "Tinderbox", "Tinderbox", "2026-01-15 08:00:00", "2026-01-20 18:00:00", "2026-01-14 23:30:00", "2026-01-20 20:00:00", 4, 1),
    (22, "Skanderborg", "Skanderborg", "2026-01-07 08:00:00", "2026-01-12 18:00:00", "2026-01-06 16:00:00", "2026-01-12 20:00:00", 4, 1),
    (30, "Jazz", "Jazz", "2025-11-20 08:00:00", "2025-12-01 10:00:00", "2025-11-20 07:00:00", "2025-12-01 12:00:00", 5, 1),
    (31, "NorthSide", "NorthSide", "2026-01-02 08:00:00", "2026-01-10 12:00:00", "2026-01-02 07:00:00", "2026-01-10 14:00:00", 5, 1),
    (32, "Vega", "Vega", "2026-01-01 08:00:00", "2026-01-07 11:00:00", "2026-01-01 07:00:00", "2026-01-07 13:00:00", 4, 1),
    (40, "Grøn", "Grøn Koncerter", "2025-12-20 08:00:00", "2026-01-02 12:00:00", "2025-12-20 07:00:00", "2026-01-02 14:00:00", 9, 1),
]


@pytest.fixture
def database_url(tmp_path) -> str:
    from sqlalchemy import create_engine, text

    url = f"sqlite:///{tmp_path / 'projects.db'}"
    engine = create_engine(url)
    with engine.begin() as conn:
        for ddl in _SCHEMA:
            conn.execute(text(ddl))
        conn.execute(text("INSERT INTO crew VALUES (1, 'A'), (2, 'B')"))
        conn.execute(text("INSERT INTO rentman_status VALUES (3, 'Bekræftet'), (4, 'Pakket'), (5, 'Ude'), (9, 'Retur')"))
        for sp in _SUBPROJECTS:
            conn.execute(
                text(
                    "INSERT INTO project_with_sp VALUES "
                    "(:id, :name, :pid, :project, :spp, :epp, :sup, :eup, 1, 2, :status, :planning)"
                ),
                dict(zip(("id", "name", "project", "spp", "epp", "sup", "eup", "status", "planning"), sp), pid=sp[0] // 10),
            )
        conn.execute(text(
            "INSERT INTO transport VALUES "
            "(1, 20, 'Lastbil 2', '2026-01-10 12:00:00'), "
            "(2, 31, 'Lastbil 7', '2026-03-01 12:00:00')"
        ))
    engine.dispose()
    return url


@pytest.fixture
def store(database_url):
    from lagerboard.adapters.project_store_adapter import SqlProjectStore

    s = SqlProjectStore.from_url(database_url)
    yield s
    s.engine.dispose()
