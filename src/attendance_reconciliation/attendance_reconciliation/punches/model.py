from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple

from ..core.enums import ExceptionType, MatchQuality


@dataclass(frozen=True)
class PunchRecord:
    """Domain entity: one clock-in/clock-out pair for one employee-day.

    The first block is captured by the time clock; the rest is written by
    the reconciliation run.
    """

    entry_id: str
    employee_id: str
    company_id: str
    clock_in: Optional[datetime]
    clock_out: Optional[datetime] = None
    break_duration_minutes: int = 0
    matched_at: Optional[datetime] = None

    shift_id: Optional[str] = None
    match_quality: Optional[MatchQuality] = None
    scheduled_start: Optional[datetime] = None
    scheduled_end: Optional[datetime] = None
    rounded_clock_in: Optional[datetime] = None
    rounded_clock_out: Optional[datetime] = None
    rounding_rule_applied: Optional[str] = None
    break_minutes_expected: Optional[int] = None
    regular_hours: float = 0.0
    overtime_hours: float = 0.0
    exceptions_detected: Tuple[ExceptionType, ...] = ()

    @property
    def is_complete(self) -> bool:
        return self.clock_in is not None and self.clock_out is not None
