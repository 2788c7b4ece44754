from __future__ import annotations

from enum import Enum


class MatchQuality(str, Enum):
    """How closely a punch's clock-in lines up with its matched shift start."""

    EXACT = "exact"
    CLOSE = "close"
    UNMATCHED = "unmatched"


class RuleType(str, Enum):
    """Which punch side a rounding rule applies to."""

    CLOCK_IN = "clock_in"
    CLOCK_OUT = "clock_out"
    BOTH = "both"

    def covers(self, side: "PunchSide") -> bool:
        return self == RuleType.BOTH or self.value == side.value


class PunchSide(str, Enum):
    CLOCK_IN = "clock_in"
    CLOCK_OUT = "clock_out"


class RoundingDirection(str, Enum):
    NEAREST = "nearest"
    UP = "up"
    DOWN = "down"
    FAVOR_EMPLOYER = "favor_employer"
    FAVOR_EMPLOYEE = "favor_employee"


class GraceDirection(str, Enum):
    """Where the grace period applies.

    BEFORE/AFTER pick a side of the anchor; IN/OUT restrict grace to
    clock-in or clock-out punches (either side of the anchor).
    """

    BEFORE = "before"
    AFTER = "after"
    IN = "in"
    OUT = "out"
    BOTH = "both"


class ExceptionType(str, Enum):
    LATE_ARRIVAL = "late_arrival"
    EARLY_DEPARTURE = "early_departure"
    MISSING_BREAK = "missing_break"
    LONG_BREAK = "long_break"
    SHORT_BREAK = "short_break"
    OVERTIME = "overtime"
    UNSCHEDULED_WORK = "unscheduled_work"
    MISSED_PUNCH = "missed_punch"


class Severity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    CRITICAL = "critical"
