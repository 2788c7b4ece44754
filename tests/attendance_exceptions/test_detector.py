from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from src.attendance_reconciliation.attendance_reconciliation.attendance_exceptions.detector import (
    DetectionThresholds,
    ExceptionDetector,
)
from src.attendance_reconciliation.attendance_reconciliation.core.enums import ExceptionType, MatchQuality, Severity
from src.attendance_reconciliation.attendance_reconciliation.matching.matcher import UNMATCHED, MatchResult
from src.attendance_reconciliation.attendance_reconciliation.payroll.calculator.base import WorkedHours
from src.attendance_reconciliation.attendance_reconciliation.punches.model import PunchRecord

NO_HOURS = WorkedHours(total_hours=0.0, regular_hours=0.0, overtime_hours=0.0, break_minutes=0)


def _at(hour, minute=0, second=0, *, day=2):
    return datetime(2026, 2, day, hour, minute, second)


def _punch(clock_in=_at(9), clock_out=_at(17), break_minutes=60):
    return PunchRecord(
        entry_id="te-1",
        employee_id="emp-1",
        company_id="co-1",
        clock_in=clock_in,
        clock_out=clock_out,
        break_duration_minutes=break_minutes,
    )


@pytest.fixture
def matched(day_shift):
    return MatchResult(
        quality=MatchQuality.EXACT,
        shift=day_shift,
        occurrence=day_shift.occurrence_on(_at(9).date(), like=_at(9)),
    )


@pytest.fixture
def detector():
    return ExceptionDetector()


def _types(found):
    return [e.exception_type for e in found]


def _only(found, exception_type):
    hits = [e for e in found if e.exception_type == exception_type]
    assert len(hits) == 1
    return hits[0]


def test_clean_punch_has_no_exceptions(detector, matched, fixed_now):
    assert detector.detect(punch=_punch(), match=matched, hours=NO_HOURS, now=fixed_now) == []


@pytest.mark.parametrize(
    "clock_in, expected",
    [
        (_at(9, 5), None),
        (_at(9, 5, 30), Severity.WARNING),
        (_at(9, 15), Severity.WARNING),
        (_at(9, 15, 1), Severity.CRITICAL),
        (_at(9, 16), Severity.CRITICAL),
    ],
)
def test_late_arrival_thresholds(detector, matched, fixed_now, clock_in, expected):
    found = detector.detect(punch=_punch(clock_in=clock_in), match=matched, hours=NO_HOURS, now=fixed_now)

    if expected is None:
        assert ExceptionType.LATE_ARRIVAL not in _types(found)
    else:
        late = _only(found, ExceptionType.LATE_ARRIVAL)
        assert late.severity == expected
        assert late.scheduled_time == _at(9)
        assert late.actual_time == clock_in


def test_late_arrival_variance_and_identity(detector, matched, fixed_now):
    late = _only(
        detector.detect(punch=_punch(clock_in=_at(9, 16)), match=matched, hours=NO_HOURS, now=fixed_now),
        ExceptionType.LATE_ARRIVAL,
    )

    assert late.variance_minutes == 16
    assert late.time_entry_id == "te-1"
    assert late.employee_id == "emp-1"
    assert late.shift_id == "shift-day"
    assert late.exception_date == _at(9).date()


@pytest.mark.parametrize(
    "clock_out, expected",
    [
        (_at(16, 55), None),
        (_at(16, 30), Severity.WARNING),
        (_at(16, 29), Severity.CRITICAL),
    ],
)
def test_early_departure_thresholds(detector, matched, fixed_now, clock_out, expected):
    found = detector.detect(punch=_punch(clock_out=clock_out), match=matched, hours=NO_HOURS, now=fixed_now)

    if expected is None:
        assert ExceptionType.EARLY_DEPARTURE not in _types(found)
    else:
        assert _only(found, ExceptionType.EARLY_DEPARTURE).severity == expected


def test_missing_break(detector, matched, fixed_now):
    found = detector.detect(punch=_punch(break_minutes=0), match=matched, hours=NO_HOURS, now=fixed_now)

    missing = _only(found, ExceptionType.MISSING_BREAK)
    assert missing.severity == Severity.WARNING
    assert ExceptionType.SHORT_BREAK not in _types(found)


def test_break_within_tolerance_is_not_flagged(detector, matched, fixed_now):
    for minutes in (50, 70):
        found = detector.detect(punch=_punch(break_minutes=minutes), match=matched, hours=NO_HOURS, now=fixed_now)
        assert found == []


def test_long_and_short_breaks_are_info(detector, matched, fixed_now):
    long_found = detector.detect(punch=_punch(break_minutes=75), match=matched, hours=NO_HOURS, now=fixed_now)
    short_found = detector.detect(punch=_punch(break_minutes=45), match=matched, hours=NO_HOURS, now=fixed_now)

    long_break = _only(long_found, ExceptionType.LONG_BREAK)
    short_break = _only(short_found, ExceptionType.SHORT_BREAK)
    assert long_break.severity == Severity.INFO
    assert long_break.variance_minutes == 15
    assert short_break.severity == Severity.INFO
    assert short_break.variance_minutes == 15


@pytest.mark.parametrize(
    "overtime, expected",
    [(0.0, None), (1.0, Severity.INFO), (2.0, Severity.INFO), (2.5, Severity.WARNING)],
)
def test_overtime_severity(detector, matched, fixed_now, overtime, expected):
    hours = WorkedHours(total_hours=8.0 + overtime, regular_hours=8.0, overtime_hours=overtime, break_minutes=60)

    found = detector.detect(punch=_punch(clock_out=_at(19)), match=matched, hours=hours, now=fixed_now)

    if expected is None:
        assert ExceptionType.OVERTIME not in _types(found)
    else:
        ot = _only(found, ExceptionType.OVERTIME)
        assert ot.severity == expected
        assert ot.variance_minutes == int(round(overtime * 60))


def test_unmatched_punch_only_gets_unscheduled_work(detector, fixed_now):
    hours = WorkedHours(total_hours=11.0, regular_hours=8.0, overtime_hours=3.0, break_minutes=0)

    found = detector.detect(
        punch=_punch(clock_in=_at(3, 10), clock_out=_at(14, 10), break_minutes=0),
        match=UNMATCHED,
        hours=hours,
        now=fixed_now,
    )

    assert _types(found) == [ExceptionType.UNSCHEDULED_WORK]
    assert found[0].severity == Severity.INFO
    assert found[0].shift_id is None


def test_open_punch_is_not_missed_at_exactly_twelve_hours(detector, matched):
    punch = _punch(clock_out=None)

    found = detector.detect(punch=punch, match=matched, hours=NO_HOURS, now=_at(9) + timedelta(hours=12))

    assert ExceptionType.MISSED_PUNCH not in _types(found)
    # No clock-out yet, so the missing break is not flagged either.
    assert ExceptionType.MISSING_BREAK not in _types(found)


def test_open_punch_is_missed_after_twelve_hours(detector, matched):
    found = detector.detect(
        punch=_punch(clock_out=None), match=matched, hours=NO_HOURS, now=_at(9) + timedelta(hours=12, minutes=1)
    )

    missed = _only(found, ExceptionType.MISSED_PUNCH)
    assert missed.severity == Severity.CRITICAL
    assert missed.variance_minutes == 721


def test_one_punch_can_raise_several_exceptions(detector, matched, fixed_now):
    hours = WorkedHours(total_hours=9.0, regular_hours=8.0, overtime_hours=1.0, break_minutes=0)

    found = detector.detect(
        punch=_punch(clock_in=_at(9, 20), clock_out=_at(19, 20), break_minutes=0),
        match=matched,
        hours=hours,
        now=fixed_now,
    )

    assert set(_types(found)) == {
        ExceptionType.LATE_ARRIVAL,
        ExceptionType.MISSING_BREAK,
        ExceptionType.OVERTIME,
    }


def test_thresholds_are_configurable(matched, fixed_now):
    strict = ExceptionDetector(DetectionThresholds(late_minutes=0, late_critical_minutes=2))

    found = strict.detect(punch=_punch(clock_in=_at(9, 3)), match=matched, hours=NO_HOURS, now=fixed_now)

    assert _only(found, ExceptionType.LATE_ARRIVAL).severity == Severity.CRITICAL
