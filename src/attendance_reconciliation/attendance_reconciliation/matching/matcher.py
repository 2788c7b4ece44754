from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import minutes_between
from ..core.constants import EXACT_MATCH_MINUTES, MATCH_WINDOW_MINUTES
from ..core.enums import MatchQuality
from ..schedules.model import ScheduleAssignment
from ..shifts.catalog import ShiftCatalog
from ..shifts.model import ShiftDefinition, ShiftOccurrence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MatchResult:
    quality: MatchQuality
    shift: Optional[ShiftDefinition] = None
    occurrence: Optional[ShiftOccurrence] = None

    @property
    def matched(self) -> bool:
        return self.shift is not None

    @property
    def shift_id(self) -> Optional[str]:
        return self.shift.shift_id if self.shift else None

    @property
    def scheduled_start(self) -> Optional[datetime]:
        return self.occurrence.scheduled_start if self.occurrence else None

    @property
    def scheduled_end(self) -> Optional[datetime]:
        return self.occurrence.scheduled_end if self.occurrence else None


UNMATCHED = MatchResult(quality=MatchQuality.UNMATCHED)


class ScheduleMatcher:
    """Finds the shift occurrence a clock-in belongs to.

    Specific schedule assignments are tried before generic weekday patterns.
    Within each tier the first candidate (by id) inside the match window
    wins; there is no best-of-N selection.
    """

    def __init__(
        self,
        catalog: ShiftCatalog,
        *,
        match_window_minutes: int = MATCH_WINDOW_MINUTES,
        exact_minutes: int = EXACT_MATCH_MINUTES,
    ):
        self._catalog = catalog
        self._window = match_window_minutes
        self._exact = exact_minutes

    def _try(self, shift: ShiftDefinition, clock_in: datetime) -> Optional[MatchResult]:
        occurrence = shift.occurrence_on(clock_in.date(), like=clock_in)
        diff = abs(minutes_between(clock_in, occurrence.scheduled_start))
        if diff > self._window:
            return None
        quality = MatchQuality.EXACT if diff <= self._exact else MatchQuality.CLOSE
        return MatchResult(quality=quality, shift=shift, occurrence=occurrence)

    def match(
        self,
        *,
        employee_id: str,
        clock_in: datetime,
        assignments: Iterable[ScheduleAssignment] = (),
    ) -> MatchResult:
        work_date = clock_in.date()

        todays: Sequence[ScheduleAssignment] = sorted(
            (a for a in assignments if a.employee_id == employee_id and a.work_date == work_date),
            key=lambda a: a.assignment_id,
        )
        for assignment in todays:
            shift = self._catalog.get(assignment.shift_id)
            if shift is None:
                logger.warning(
                    "assignment %s references unknown shift %s", assignment.assignment_id, assignment.shift_id
                )
                continue
            result = self._try(shift, clock_in)
            if result:
                return result

        for shift in self._catalog.active_on(work_date):
            result = self._try(shift, clock_in)
            if result:
                return result

        return UNMATCHED
