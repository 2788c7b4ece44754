from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...common.datetime_utils import minutes_between
from .base import HoursCalculator, WorkedHours


class StandardHoursCalculator(HoursCalculator):
    """Standard rule: (out - in) - break_minutes, not below 0; hours past the
    shift's standard hours are overtime."""

    def calculate(
        self,
        *,
        clock_in: datetime,
        clock_out: Optional[datetime],
        break_minutes: int,
        standard_hours: float,
    ) -> WorkedHours:
        break_minutes = int(break_minutes or 0)
        if clock_out is None:
            return WorkedHours(total_hours=0.0, regular_hours=0.0, overtime_hours=0.0, break_minutes=break_minutes)

        minutes = max(minutes_between(clock_out, clock_in) - break_minutes, 0.0)
        total = minutes / 60
        regular = min(total, standard_hours)
        overtime = max(0.0, total - standard_hours)
        return WorkedHours(
            total_hours=round(total, 2),
            regular_hours=round(regular, 2),
            overtime_hours=round(overtime, 2),
            break_minutes=break_minutes,
        )
