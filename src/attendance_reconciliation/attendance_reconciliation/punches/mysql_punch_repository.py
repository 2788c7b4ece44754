from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Optional, Sequence

from ..attendance_exceptions.model import ExceptionRecord
from ..core.enums import ExceptionType, MatchQuality
from ..core.exceptions import DataFetchError, PersistenceError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import ROW_DECODE_ERRORS, db_cursor, fetchall, in_clause, translate_errors
from .model import PunchRecord
from .repository import PunchRepository

logger = logging.getLogger(__name__)


def _row_to_punch(r: dict) -> PunchRecord:
    detected = r.get("exceptions_detected")
    if isinstance(detected, (bytes, bytearray)):
        detected = detected.decode("utf-8")
    if isinstance(detected, str):
        detected = json.loads(detected) if detected else []
    return PunchRecord(
        entry_id=str(r["entry_id"]),
        employee_id=str(r["employee_id"]),
        company_id=str(r["company_id"]),
        clock_in=r.get("clock_in"),
        clock_out=r.get("clock_out"),
        break_duration_minutes=int(r.get("break_duration_minutes") or 0),
        matched_at=r.get("matched_at"),
        shift_id=str(r["shift_id"]) if r.get("shift_id") is not None else None,
        match_quality=MatchQuality(r["match_quality"]) if r.get("match_quality") else None,
        scheduled_start=r.get("scheduled_start"),
        scheduled_end=r.get("scheduled_end"),
        rounded_clock_in=r.get("rounded_clock_in"),
        rounded_clock_out=r.get("rounded_clock_out"),
        rounding_rule_applied=r.get("rounding_rule_applied"),
        break_minutes_expected=r.get("break_minutes_expected"),
        regular_hours=float(r.get("regular_hours") or 0),
        overtime_hours=float(r.get("overtime_hours") or 0),
        exceptions_detected=tuple(ExceptionType(t) for t in (detected or [])),
    )


def _decode_or_placeholder(r: dict, company_id: str) -> PunchRecord:
    """Decode one row; an unreadable row comes back without a clock-in so the run skips it."""
    try:
        return _row_to_punch(r)
    except ROW_DECODE_ERRORS as e:
        logger.warning("entry %s has unreadable columns: %r", r.get("entry_id"), e)
        return PunchRecord(
            entry_id=str(r.get("entry_id")),
            employee_id=str(r.get("employee_id") or ""),
            company_id=company_id,
            clock_in=None,
        )


class MySQLPunchRepository(PunchRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_unmatched(
        self,
        *,
        company_id: str,
        entry_ids: Optional[Sequence[str]] = None,
        since: Optional[datetime] = None,
        limit: int,
    ) -> Sequence[PunchRecord]:
        clauses = ["company_id=%s", "matched_at IS NULL"]
        params: list[object] = [company_id]

        if entry_ids:
            clauses.append(f"entry_id IN ({in_clause(entry_ids)})")
            params.extend(entry_ids)
        elif since is not None:
            clauses.append("clock_in >= %s")
            params.append(since)

        where = " AND ".join(clauses)
        params.append(int(limit))

        with translate_errors(DataFetchError, "Failed to load time clock entries"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"""
                    SELECT *
                    FROM time_clock_entries
                    WHERE {where}
                    ORDER BY (match_quality IS NOT NULL AND clock_out IS NULL) ASC, clock_in ASC, entry_id ASC
                    LIMIT %s
                    """,
                    tuple(params),
                )
                rows = fetchall(cur)
        return [_decode_or_placeholder(r, company_id) for r in rows]

    def save_reconciliation(
        self,
        *,
        punch: PunchRecord,
        exceptions: Sequence[ExceptionRecord],
    ) -> bool:
        with translate_errors(PersistenceError, f"Failed to save entry {punch.entry_id}"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    UPDATE time_clock_entries
                    SET shift_id=%s, match_quality=%s, scheduled_start=%s, scheduled_end=%s,
                        rounded_clock_in=%s, rounded_clock_out=%s, rounding_rule_applied=%s,
                        break_minutes_expected=%s, regular_hours=%s, overtime_hours=%s,
                        exceptions_detected=%s, matched_at=%s
                    WHERE entry_id=%s AND matched_at IS NULL
                    """,
                    (
                        punch.shift_id,
                        punch.match_quality.value if punch.match_quality else None,
                        punch.scheduled_start,
                        punch.scheduled_end,
                        punch.rounded_clock_in,
                        punch.rounded_clock_out,
                        punch.rounding_rule_applied,
                        punch.break_minutes_expected,
                        punch.regular_hours,
                        punch.overtime_hours,
                        json.dumps([t.value for t in punch.exceptions_detected]),
                        punch.matched_at,
                        punch.entry_id,
                    ),
                )
                if cur.rowcount == 0:
                    return False

                # Rows left by an earlier pass over a still-open punch are replaced, not duplicated.
                cur.execute("DELETE FROM attendance_exceptions WHERE time_entry_id=%s", (punch.entry_id,))
                if exceptions:
                    cur.executemany(
                        """
                        INSERT INTO attendance_exceptions(
                            company_id, employee_id, time_entry_id, shift_id, exception_date,
                            exception_type, severity, scheduled_time, actual_time, variance_minutes
                        )
                        VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                        """,
                        [
                            (
                                e.company_id,
                                e.employee_id,
                                e.time_entry_id,
                                e.shift_id,
                                e.exception_date,
                                e.exception_type.value,
                                e.severity.value,
                                e.scheduled_time,
                                e.actual_time,
                                e.variance_minutes,
                            )
                            for e in exceptions
                        ],
                    )
                return True
