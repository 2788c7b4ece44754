from __future__ import annotations

from typing import Protocol, Sequence

from .model import ShiftDefinition


class ShiftRepository(Protocol):
    def list_for_company(self, company_id: str) -> Sequence[ShiftDefinition]:
        """All shifts of a company (active and inactive), ordered by id."""

        raise NotImplementedError
