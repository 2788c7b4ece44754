from __future__ import annotations

from typing import Sequence

from ..core.constants import DEFAULT_STANDARD_HOURS
from ..core.exceptions import DataFetchError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, parse_day_list, time_of_day_text, translate_errors
from .model import ShiftDefinition
from .repository import ShiftRepository


class MySQLShiftRepository(ShiftRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_company(self, company_id: str) -> Sequence[ShiftDefinition]:
        with translate_errors(DataFetchError, "Failed to load shifts"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    SELECT shift_id, company_id, shift_name, start_time, end_time, applicable_days,
                           standard_hours, break_duration_minutes, is_active
                    FROM shifts
                    WHERE company_id=%s
                    ORDER BY shift_id
                    """,
                    (company_id,),
                )
                rows = fetchall(cur)

            return [
                ShiftDefinition(
                    shift_id=str(r["shift_id"]),
                    company_id=str(r["company_id"]),
                    shift_name=r["shift_name"],
                    start_time=time_of_day_text(r["start_time"]),
                    end_time=time_of_day_text(r["end_time"]),
                    applicable_days=parse_day_list(r.get("applicable_days")),
                    standard_hours=float(r.get("standard_hours") or DEFAULT_STANDARD_HOURS),
                    break_minutes=int(r.get("break_duration_minutes") or 0),
                    is_active=bool(r.get("is_active", 1)),
                )
                for r in rows
            ]
