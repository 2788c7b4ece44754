from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import FrozenSet

from ..common.datetime_utils import combine_on, parse_time_of_day, sunday_based_weekday
from ..core.constants import DEFAULT_STANDARD_HOURS


@dataclass(frozen=True)
class ShiftOccurrence:
    """A shift template projected onto one calendar date."""

    shift_id: str
    scheduled_start: datetime
    scheduled_end: datetime


@dataclass(frozen=True)
class ShiftDefinition:
    """Domain entity: reusable shift template owned by a company."""

    shift_id: str
    company_id: str
    shift_name: str
    start_time: str
    end_time: str
    applicable_days: FrozenSet[int] = frozenset()
    standard_hours: float = DEFAULT_STANDARD_HOURS
    break_minutes: int = 0
    is_active: bool = True

    def applies_on(self, day: date) -> bool:
        return sunday_based_weekday(day) in self.applicable_days

    def occurrence_on(self, day: date, *, like: datetime) -> ShiftOccurrence:
        """Scheduled start/end on `day`; an end not after the start rolls to the next day."""
        start = combine_on(day, parse_time_of_day(self.start_time), like=like)
        end = combine_on(day, parse_time_of_day(self.end_time), like=like)
        if end <= start:
            end = combine_on(day + timedelta(days=1), parse_time_of_day(self.end_time), like=like)
        return ShiftOccurrence(shift_id=self.shift_id, scheduled_start=start, scheduled_end=end)
