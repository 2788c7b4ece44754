from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import ExceptionType, Severity


@dataclass(frozen=True)
class ExceptionRecord:
    """One detected attendance anomaly tied to one punch."""

    company_id: str
    employee_id: str
    time_entry_id: str
    exception_date: date
    exception_type: ExceptionType
    severity: Severity
    shift_id: Optional[str] = None
    scheduled_time: Optional[datetime] = None
    actual_time: Optional[datetime] = None
    variance_minutes: int = 0
