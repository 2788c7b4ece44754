from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class WorkedHours:
    total_hours: float
    regular_hours: float
    overtime_hours: float
    break_minutes: int


class HoursCalculator(ABC):
    """Calculator interface (Strategy Pattern for worked hours)."""

    @abstractmethod
    def calculate(
        self,
        *,
        clock_in: datetime,
        clock_out: Optional[datetime],
        break_minutes: int,
        standard_hours: float,
    ) -> WorkedHours:
        raise NotImplementedError
