from __future__ import annotations

from datetime import date
from typing import Collection, Sequence

from ..core.exceptions import DataFetchError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, in_clause, translate_errors
from .model import ScheduleAssignment
from .repository import ScheduleRepository


class MySQLScheduleRepository(ScheduleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_employees(
        self,
        *,
        employee_ids: Collection[str],
        start: date,
        end: date,
    ) -> Sequence[ScheduleAssignment]:
        ids = sorted(set(employee_ids))
        if not ids:
            return []

        with translate_errors(DataFetchError, "Failed to load schedule assignments"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"""
                    SELECT assignment_id, employee_id, work_date, shift_id
                    FROM schedule_assignments
                    WHERE employee_id IN ({in_clause(ids)})
                      AND work_date BETWEEN %s AND %s
                    ORDER BY work_date ASC, assignment_id ASC
                    """,
                    (*ids, start, end),
                )
                rows = fetchall(cur)

            return [
                ScheduleAssignment(
                    assignment_id=str(r["assignment_id"]),
                    employee_id=str(r["employee_id"]),
                    work_date=r["work_date"],
                    shift_id=str(r["shift_id"]),
                )
                for r in rows
            ]
