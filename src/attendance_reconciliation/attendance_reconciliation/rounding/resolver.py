from __future__ import annotations

from datetime import date
from typing import Dict, Iterable, List, Optional, Sequence

from .model import RoundingRule


class RoundingRuleResolver:
    """Two-tier rule lookup keyed by optional shift id.

    Rules scoped to the matched shift are used exclusively when any apply;
    otherwise the company defaults (shift_id=None) are used. The two tiers
    are never merged.
    """

    def __init__(self, rules: Iterable[RoundingRule]):
        self._by_shift: Dict[Optional[str], List[RoundingRule]] = {}
        for rule in rules:
            self._by_shift.setdefault(rule.shift_id, []).append(rule)
        for tier in self._by_shift.values():
            tier.sort(key=lambda r: (-r.priority, r.rule_id))

    def _tier(self, shift_id: Optional[str], on: date) -> List[RoundingRule]:
        return [r for r in self._by_shift.get(shift_id, []) if r.is_effective_on(on)]

    def resolve(self, shift_id: Optional[str], *, on: date) -> Sequence[RoundingRule]:
        if shift_id is not None:
            specific = self._tier(shift_id, on)
            if specific:
                return specific
        return self._tier(None, on)
