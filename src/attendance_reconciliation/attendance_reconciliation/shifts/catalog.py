from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Sequence

from .model import ShiftDefinition


class ShiftCatalog:
    """Read-only view over a company's shift templates for one run."""

    def __init__(self, shifts: Iterable[ShiftDefinition]):
        self._shifts = sorted(shifts, key=lambda s: s.shift_id)
        self._by_id = {s.shift_id: s for s in self._shifts}

    def get(self, shift_id: Optional[str]) -> Optional[ShiftDefinition]:
        if shift_id is None:
            return None
        return self._by_id.get(shift_id)

    def active_on(self, day: date) -> Sequence[ShiftDefinition]:
        """Active shifts whose applicable weekdays include `day`, ordered by id."""
        return [s for s in self._shifts if s.is_active and s.applies_on(day)]

    def __len__(self) -> int:
        return len(self._shifts)
