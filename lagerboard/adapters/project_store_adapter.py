#!filepath: lagerboard/adapters/project_store_adapter.py
from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, List, Protocol

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError, SQLAlchemyError

from lagerboard.adapters.base_adapter import BaseAdapter
from lagerboard.engines.period_engine import DateWindow, Period
from lagerboard.utils.errors import StoreError
from lagerboard.utils.retry import Retry


class ProjectStore(Protocol):
    def fetch(self, period: Period, window: DateWindow) -> List[Dict[str, Any]]:
        """
        Rows for `period` inside `window`, JSON-ready, in display order.

        Raises
        ------
        StoreError
            the backing query failed
        """
        ...


_PROJECT_COLUMNS = """
            subproject_id AS sp_id,
            subproject_name AS displayname,
            sp_start_pp,
            sp_end_pp,
            sp_start_up,
            sp_end_up,
            project_name AS project,
            (SELECT letter FROM crew WHERE rentman_id = wh_out) AS wh_out_letter,
            (SELECT letter FROM crew WHERE rentman_id = wh_in) AS wh_in_letter,
            (SELECT name FROM rentman_status WHERE status = sp_status) AS status_name
"""

# status codes of the rental system: 3 confirmed, 4 prepped (out),
# 5 on location (coming home), 9 unpacked / to be invoiced
QUERIES: Dict[Period, str] = {
    Period.CONFIRMED: f"""
        SELECT {_PROJECT_COLUMNS}
        FROM project_with_sp
        WHERE sp_start_pp BETWEEN :start AND :end
          AND is_planning = 1
          AND sp_status = 3
        ORDER BY sp_start_up ASC
    """,
    Period.PREPPED: f"""
        SELECT {_PROJECT_COLUMNS}
        FROM project_with_sp
        WHERE sp_start_up BETWEEN :start AND :end
          AND is_planning = 1
          AND sp_status = 4
        ORDER BY sp_start_up ASC
    """,
    Period.ON_LOCATION: f"""
        SELECT {_PROJECT_COLUMNS}
        FROM project_with_sp
        WHERE sp_end_pp BETWEEN :start AND :end
          AND is_planning = 1
          AND sp_status = 5
        ORDER BY sp_end_up ASC
    """,
    Period.TO_BE_INVOICED: f"""
        SELECT {_PROJECT_COLUMNS}
        FROM project_with_sp
        WHERE sp_end_pp BETWEEN :start AND :end
          AND is_planning = 1
          AND sp_status = 9
        ORDER BY sp_end_up ASC
    """,
    Period.DELAYED: """
        SELECT subproject_id AS sp_id,
               subproject_name AS displayname,
               sp_start_up,
               sp_end_pp,
               project_name AS project
        FROM project_with_sp
        WHERE sp_status IN (4, 5)
          AND sp_end_pp BETWEEN :start AND :end
          AND is_planning = 1
        ORDER BY sp_end_pp ASC
    """,
    Period.TRANSPORT: """
        SELECT t.*,
               sp.subproject_name AS displayname,
               sp.project_name AS project,
               sp.sp_start_up,
               sp.sp_end_pp
        FROM transport AS t
        JOIN project_with_sp AS sp
          ON t.subproject_id = sp.subproject_id
        WHERE t.up_end BETWEEN :start AND :end
        ORDER BY t.up_end ASC
    """,
}

_SQL_TS = "%Y-%m-%d %H:%M:%S"


def _json_ready(row: Dict[str, Any]) -> Dict[str, Any]:
    out = {}
    for key, value in row.items():
        if isinstance(value, (datetime, date)):
            value = value.isoformat()
        out[key] = value
    return out


class SqlProjectStore(BaseAdapter):
    """
    Adapter layer:
    - reads the `project_with_sp` view (MySQL in production, SQLite in tests)
    - one SQL statement per period, bound to the period's date window
    """

    def __init__(self, engine: Engine):
        self.engine = engine

    @classmethod
    def from_url(cls, url: str, pool_recycle: int = 3600) -> "SqlProjectStore":
        return cls(create_engine(url, pool_pre_ping=True, pool_recycle=pool_recycle))

    def fetch(self, period: Period, window: DateWindow) -> List[Dict[str, Any]]:
        start, end = window.bounds()
        params = {"start": start.strftime(_SQL_TS), "end": end.strftime(_SQL_TS)}
        try:
            with self.timer(f"query_{period.value}"):
                rows = self._query(QUERIES[period], params)
        except SQLAlchemyError as e:
            raise StoreError(f"{period.value} query failed: {e}") from e
        return [_json_ready(r) for r in rows]

    # --------------------------------------------------
    @Retry.decorator(exceptions=(OperationalError,), max_attempts=2, delay=0.5)
    def _query(self, sql: str, params: Dict[str, Any]) -> List[Dict[str, Any]]:
        with self.engine.connect() as conn:
            result = conn.execute(text(sql), params)
            return [dict(r._mapping) for r in result]
