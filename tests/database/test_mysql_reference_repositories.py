from __future__ import annotations

from datetime import date, timedelta

import pytest

from src.attendance_reconciliation.attendance_reconciliation.core.enums import GraceDirection, RuleType
from src.attendance_reconciliation.attendance_reconciliation.core.exceptions import DataFetchError
from src.attendance_reconciliation.attendance_reconciliation.rounding.mysql_rounding_rule_repository import (
    MySQLRoundingRuleRepository,
)
from src.attendance_reconciliation.attendance_reconciliation.schedules.mysql_schedule_repository import (
    MySQLScheduleRepository,
)
from src.attendance_reconciliation.attendance_reconciliation.shifts.mysql_shift_repository import (
    MySQLShiftRepository,
)


def _rule_row(**overrides):
    row = {
        "rule_id": "rule-1",
        "company_id": "co-1",
        "shift_id": None,
        "rule_name": "Default",
        "rule_type": "both",
        "rounding_interval_minutes": 15,
        "rounding_direction": "nearest",
        "grace_period_minutes": 5,
        "grace_period_direction": None,
        "apply_to_overtime": 1,
        "is_active": 1,
        "start_date": None,
        "end_date": None,
        "priority": 0,
    }
    row.update(overrides)
    return row


def _shift_row(**overrides):
    row = {
        "shift_id": "shift-day",
        "company_id": "co-1",
        "shift_name": "Day",
        "start_time": timedelta(hours=9),
        "end_time": timedelta(hours=17),
        "applicable_days": "[1,2,3,4,5]",
        "standard_hours": 8,
        "break_duration_minutes": 60,
        "is_active": 1,
    }
    row.update(overrides)
    return row


def test_rules_are_decoded(fake_db):
    rules = MySQLRoundingRuleRepository(fake_db(rows=[_rule_row(grace_period_direction="in")])).list_for_company(
        "co-1"
    )

    assert rules[0].rule_type == RuleType.BOTH
    assert rules[0].grace_period_direction == GraceDirection.IN


def test_null_grace_direction_means_both(fake_db):
    rules = MySQLRoundingRuleRepository(fake_db(rows=[_rule_row()])).list_for_company("co-1")

    assert rules[0].grace_period_direction == GraceDirection.BOTH


@pytest.mark.parametrize(
    "overrides",
    [
        {"rule_type": "in"},
        {"rounding_direction": "sideways"},
        {"grace_period_direction": "around"},
        {"rounding_interval_minutes": None},
    ],
)
def test_unreadable_rule_row_is_a_data_fetch_error(fake_db, overrides):
    repo = MySQLRoundingRuleRepository(fake_db(rows=[_rule_row(**overrides)]))

    with pytest.raises(DataFetchError, match="Failed to load rounding rules"):
        repo.list_for_company("co-1")


def test_shifts_are_decoded(fake_db):
    shifts = MySQLShiftRepository(fake_db(rows=[_shift_row()])).list_for_company("co-1")

    assert shifts[0].start_time == "09:00"
    assert shifts[0].applicable_days == frozenset({1, 2, 3, 4, 5})


@pytest.mark.parametrize(
    "overrides",
    [
        {"applicable_days": "[mon, tue"},
        {"standard_hours": "eight"},
        {"start_time": timedelta(hours=9), "end_time": 17},
    ],
)
def test_unreadable_shift_row_is_a_data_fetch_error(fake_db, overrides):
    repo = MySQLShiftRepository(fake_db(rows=[_shift_row(**overrides)]))

    with pytest.raises(DataFetchError, match="Failed to load shifts"):
        repo.list_for_company("co-1")


def test_unreadable_schedule_row_is_a_data_fetch_error(fake_db):
    db = fake_db(rows=[{"assignment_id": "as-1", "employee_id": "emp-1", "work_date": date(2026, 2, 2)}])

    with pytest.raises(DataFetchError, match="Failed to load schedule assignments"):
        MySQLScheduleRepository(db).list_for_employees(
            employee_ids={"emp-1"}, start=date(2026, 2, 2), end=date(2026, 2, 2)
        )
