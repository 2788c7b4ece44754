from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import GraceDirection, PunchSide, RoundingDirection, RuleType


@dataclass(frozen=True)
class RoundingRule:
    """Time-rounding policy; `shift_id=None` marks a company-wide default."""

    rule_id: str
    company_id: str
    rule_type: RuleType
    rounding_interval_minutes: int
    rounding_direction: RoundingDirection
    shift_id: Optional[str] = None
    rule_name: str = ""
    grace_period_minutes: int = 0
    grace_period_direction: GraceDirection = GraceDirection.BOTH
    apply_to_overtime: bool = True
    is_active: bool = True
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    priority: int = 0

    def covers(self, side: PunchSide) -> bool:
        return self.rule_type.covers(side)

    def is_effective_on(self, day: date) -> bool:
        if not self.is_active:
            return False
        if self.start_date and day < self.start_date:
            return False
        if self.end_date and day > self.end_date:
            return False
        return True
