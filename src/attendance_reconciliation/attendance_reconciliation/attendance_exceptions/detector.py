from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from ..common.datetime_utils import minutes_between
from ..core.constants import (
    BREAK_TOLERANCE_MINUTES,
    EARLY_LEAVE_CRITICAL_MINUTES,
    EARLY_LEAVE_THRESHOLD_MINUTES,
    LATE_CRITICAL_MINUTES,
    LATE_THRESHOLD_MINUTES,
    MISSED_PUNCH_HOURS,
    OVERTIME_WARNING_HOURS,
)
from ..core.enums import ExceptionType, Severity
from ..matching.matcher import MatchResult
from ..payroll.calculator.base import WorkedHours
from ..punches.model import PunchRecord
from .model import ExceptionRecord


@dataclass(frozen=True)
class DetectionThresholds:
    late_minutes: int = LATE_THRESHOLD_MINUTES
    late_critical_minutes: int = LATE_CRITICAL_MINUTES
    early_leave_minutes: int = EARLY_LEAVE_THRESHOLD_MINUTES
    early_leave_critical_minutes: int = EARLY_LEAVE_CRITICAL_MINUTES
    break_tolerance_minutes: int = BREAK_TOLERANCE_MINUTES
    overtime_warning_hours: float = OVERTIME_WARNING_HOURS
    missed_punch_hours: float = MISSED_PUNCH_HOURS


class ExceptionDetector:
    """Stateless classifier run once per punch after matching, rounding and hours.

    Checks are independent, so one punch may raise several exceptions.
    Schedule-relative checks (late, early, break, overtime) only run for
    matched punches.
    """

    def __init__(self, thresholds: DetectionThresholds | None = None):
        self._t = thresholds or DetectionThresholds()

    def detect(
        self,
        *,
        punch: PunchRecord,
        match: MatchResult,
        hours: WorkedHours,
        now: datetime,
    ) -> List[ExceptionRecord]:
        found: List[ExceptionRecord] = []
        clock_in = punch.clock_in
        if clock_in is None:
            return found

        def add(
            exception_type: ExceptionType,
            severity: Severity,
            *,
            scheduled: Optional[datetime] = None,
            actual: Optional[datetime] = None,
            variance: float = 0,
        ) -> None:
            found.append(
                ExceptionRecord(
                    company_id=punch.company_id,
                    employee_id=punch.employee_id,
                    time_entry_id=punch.entry_id,
                    shift_id=match.shift_id,
                    exception_date=clock_in.date(),
                    exception_type=exception_type,
                    severity=severity,
                    scheduled_time=scheduled,
                    actual_time=actual,
                    variance_minutes=int(round(variance)),
                )
            )

        if match.matched:
            start = match.scheduled_start
            end = match.scheduled_end

            late = minutes_between(clock_in, start)
            if late > self._t.late_minutes:
                severity = Severity.CRITICAL if late > self._t.late_critical_minutes else Severity.WARNING
                add(ExceptionType.LATE_ARRIVAL, severity, scheduled=start, actual=clock_in, variance=late)

            if punch.clock_out is not None:
                early = minutes_between(end, punch.clock_out)
                if early > self._t.early_leave_minutes:
                    severity = Severity.CRITICAL if early > self._t.early_leave_critical_minutes else Severity.WARNING
                    add(ExceptionType.EARLY_DEPARTURE, severity, scheduled=end, actual=punch.clock_out, variance=early)

            expected = match.shift.break_minutes
            actual = int(punch.break_duration_minutes or 0)
            if expected > 0 and actual == 0:
                if punch.clock_out is not None:
                    add(ExceptionType.MISSING_BREAK, Severity.WARNING, variance=expected)
            elif abs(actual - expected) > self._t.break_tolerance_minutes:
                kind = ExceptionType.LONG_BREAK if actual > expected else ExceptionType.SHORT_BREAK
                add(kind, Severity.INFO, variance=abs(actual - expected))

            if hours.overtime_hours > 0:
                severity = Severity.WARNING if hours.overtime_hours > self._t.overtime_warning_hours else Severity.INFO
                add(
                    ExceptionType.OVERTIME,
                    severity,
                    scheduled=end,
                    actual=punch.clock_out,
                    variance=hours.overtime_hours * 60,
                )
        else:
            add(ExceptionType.UNSCHEDULED_WORK, Severity.INFO, actual=clock_in)

        if punch.clock_out is None:
            elapsed = minutes_between(now, clock_in)
            if elapsed > self._t.missed_punch_hours * 60:
                add(ExceptionType.MISSED_PUNCH, Severity.CRITICAL, actual=clock_in, variance=elapsed)

        return found
