from __future__ import annotations

from typing import Protocol, Sequence

from .model import RoundingRule


class RoundingRuleRepository(Protocol):
    def list_for_company(self, company_id: str) -> Sequence[RoundingRule]:
        """Every rounding rule of a company, shift-specific and default."""

        raise NotImplementedError
