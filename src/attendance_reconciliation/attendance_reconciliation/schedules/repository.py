from __future__ import annotations

from datetime import date
from typing import Collection, Protocol, Sequence

from .model import ScheduleAssignment


class ScheduleRepository(Protocol):
    def list_for_employees(
        self,
        *,
        employee_ids: Collection[str],
        start: date,
        end: date,
    ) -> Sequence[ScheduleAssignment]:
        """Assignments of the given employees dated within [start, end]."""

        raise NotImplementedError
