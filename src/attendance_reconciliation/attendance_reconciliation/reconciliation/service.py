from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime, timedelta
from typing import Callable, Dict, List, Sequence, Tuple

from ..attendance_exceptions.detector import ExceptionDetector
from ..attendance_exceptions.model import ExceptionRecord
from ..common.datetime_utils import now_local
from ..core.constants import DEFAULT_BATCH_LIMIT, DEFAULT_LOOKBACK_DAYS, DEFAULT_STANDARD_HOURS
from ..core.exceptions import MalformedInputError, PersistenceError
from ..matching.matcher import ScheduleMatcher
from ..payroll.calculator.base import HoursCalculator
from ..payroll.calculator.standard_calculator import StandardHoursCalculator
from ..punches.model import PunchRecord
from ..punches.repository import PunchRepository
from ..rounding.repository import RoundingRuleRepository
from ..rounding.resolver import RoundingRuleResolver
from ..rounding.rounder import TimeRounder
from ..schedules.model import ScheduleAssignment
from ..schedules.repository import ScheduleRepository
from ..shifts.catalog import ShiftCatalog
from ..shifts.repository import ShiftRepository
from .model import RunRequest, RunSummary

logger = logging.getLogger(__name__)


class ReconciliationService:
    """Batch pass over a company's unmatched punches.

    Reference data is loaded once up front; a failure there propagates as
    DataFetchError and nothing is written. Each punch is then reconciled
    and written back on its own, so one failed write does not stop the
    batch.
    """

    def __init__(
        self,
        punches: PunchRepository,
        shifts: ShiftRepository,
        schedules: ScheduleRepository,
        rules: RoundingRuleRepository,
        *,
        rounder: TimeRounder | None = None,
        calculator: HoursCalculator | None = None,
        detector: ExceptionDetector | None = None,
        batch_limit: int = DEFAULT_BATCH_LIMIT,
        lookback_days: int = DEFAULT_LOOKBACK_DAYS,
        clock: Callable[[], datetime] = now_local,
    ):
        self._punches = punches
        self._shifts = shifts
        self._schedules = schedules
        self._rules = rules
        self._rounder = rounder or TimeRounder()
        self._calculator = calculator or StandardHoursCalculator()
        self._detector = detector or ExceptionDetector()
        self._batch_limit = int(batch_limit)
        self._lookback_days = int(lookback_days)
        self._clock = clock

    def _load_punches(self, request: RunRequest, now: datetime) -> Sequence[PunchRecord]:
        since = None
        if not request.entry_ids and not request.process_all:
            since = now - timedelta(days=self._lookback_days)
        return self._punches.list_unmatched(
            company_id=request.company_id,
            entry_ids=request.entry_ids,
            since=since,
            limit=self._batch_limit,
        )

    def _load_assignments(self, punches: Sequence[PunchRecord]) -> Dict[str, List[ScheduleAssignment]]:
        days = [p.clock_in.date() for p in punches if p.clock_in is not None]
        if not days:
            return {}
        assignments = self._schedules.list_for_employees(
            employee_ids={p.employee_id for p in punches},
            start=min(days),
            end=max(days),
        )
        by_employee: Dict[str, List[ScheduleAssignment]] = {}
        for a in assignments:
            by_employee.setdefault(a.employee_id, []).append(a)
        return by_employee

    def reconcile_punch(
        self,
        punch: PunchRecord,
        *,
        matcher: ScheduleMatcher,
        resolver: RoundingRuleResolver,
        assignments: Sequence[ScheduleAssignment] = (),
        now: datetime,
    ) -> Tuple[PunchRecord, List[ExceptionRecord]]:
        """Match, round, total and classify one punch. Pure: nothing is persisted."""
        if punch.clock_in is None:
            raise MalformedInputError(f"Entry {punch.entry_id} has no readable clock-in")

        match = matcher.match(employee_id=punch.employee_id, clock_in=punch.clock_in, assignments=assignments)
        rules = resolver.resolve(match.shift_id, on=punch.clock_in.date())
        rounded = self._rounder.round_punch(
            clock_in=punch.clock_in,
            clock_out=punch.clock_out,
            scheduled_start=match.scheduled_start,
            scheduled_end=match.scheduled_end,
            rules=rules,
        )
        standard_hours = match.shift.standard_hours if match.shift else DEFAULT_STANDARD_HOURS
        hours = self._calculator.calculate(
            clock_in=rounded.clock_in,
            clock_out=rounded.clock_out,
            break_minutes=punch.break_duration_minutes,
            standard_hours=standard_hours,
        )
        exceptions = self._detector.detect(punch=punch, match=match, hours=hours, now=now)

        updated = replace(
            punch,
            shift_id=match.shift_id,
            match_quality=match.quality,
            scheduled_start=match.scheduled_start,
            scheduled_end=match.scheduled_end,
            rounded_clock_in=rounded.clock_in,
            rounded_clock_out=rounded.clock_out,
            rounding_rule_applied=rounded.rule_applied,
            break_minutes_expected=match.shift.break_minutes if match.shift else None,
            regular_hours=hours.regular_hours,
            overtime_hours=hours.overtime_hours,
            exceptions_detected=tuple(e.exception_type for e in exceptions),
            # An open punch stays eligible until its clock-out arrives.
            matched_at=now if punch.is_complete else None,
        )
        return updated, exceptions

    def run(self, request: RunRequest, *, now: datetime | None = None) -> RunSummary:
        now = now or self._clock()

        punches = self._load_punches(request, now)
        catalog = ShiftCatalog(self._shifts.list_for_company(request.company_id))
        resolver = RoundingRuleResolver(self._rules.list_for_company(request.company_id))
        assignments = self._load_assignments(punches)
        matcher = ScheduleMatcher(catalog)

        logger.info(
            "reconciling company=%s punches=%d shifts=%d",
            request.company_id,
            len(punches),
            len(catalog),
        )

        summary = RunSummary(processed=len(punches))
        for punch in punches:
            try:
                updated, exceptions = self.reconcile_punch(
                    punch,
                    matcher=matcher,
                    resolver=resolver,
                    assignments=assignments.get(punch.employee_id, ()),
                    now=now,
                )
            except MalformedInputError as e:
                logger.warning("skipping entry %s: %s", punch.entry_id, e)
                summary.record_malformed()
                continue

            try:
                saved = self._punches.save_reconciliation(punch=updated, exceptions=exceptions)
            except PersistenceError as e:
                logger.error("could not save entry %s: %s", punch.entry_id, e)
                summary.record_failure(punch.entry_id, str(e))
                continue

            if not saved:
                logger.info("entry %s already reconciled by another run", punch.entry_id)
                summary.skipped += 1
                continue

            summary.record(updated, exceptions)

        logger.info(
            "reconciliation done company=%s matched=%d unmatched=%d failed=%d",
            request.company_id,
            summary.matched,
            summary.unmatched,
            summary.failed,
        )
        return summary
