from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class ScheduleAssignment:
    """Binds one employee to one shift on one calendar date."""

    assignment_id: str
    employee_id: str
    work_date: date
    shift_id: str
