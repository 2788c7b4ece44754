from __future__ import annotations

from datetime import datetime

import pytest

from src.attendance_reconciliation.attendance_reconciliation.core.enums import GraceDirection, RoundingDirection, RuleType
from src.attendance_reconciliation.attendance_reconciliation.rounding.model import RoundingRule
from src.attendance_reconciliation.attendance_reconciliation.shifts.model import ShiftDefinition

WEEKDAYS = frozenset({1, 2, 3, 4, 5})


@pytest.fixture
def fixed_now() -> datetime:
    # Monday
    return datetime(2026, 2, 2, 18, 0, 0)


@pytest.fixture
def day_shift() -> ShiftDefinition:
    return ShiftDefinition(
        shift_id="shift-day",
        company_id="co-1",
        shift_name="Day",
        start_time="09:00",
        end_time="17:00",
        applicable_days=WEEKDAYS,
        standard_hours=8.0,
        break_minutes=60,
    )


@pytest.fixture
def nearest_15_rule() -> RoundingRule:
    return RoundingRule(
        rule_id="rule-default",
        company_id="co-1",
        rule_type=RuleType.BOTH,
        rounding_interval_minutes=15,
        rounding_direction=RoundingDirection.NEAREST,
        grace_period_minutes=5,
        grace_period_direction=GraceDirection.BOTH,
    )
