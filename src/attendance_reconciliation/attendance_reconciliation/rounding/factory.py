from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict

from ..core.enums import RoundingDirection
from .strategies.base import RoundingStrategy
from .strategies.directional import DownStrategy, NearestStrategy, UpStrategy
from .strategies.favor import FavorEmployeeStrategy, FavorEmployerStrategy


def _default_strategies() -> Dict[RoundingDirection, RoundingStrategy]:
    return {
        RoundingDirection.NEAREST: NearestStrategy(),
        RoundingDirection.UP: UpStrategy(),
        RoundingDirection.DOWN: DownStrategy(),
        RoundingDirection.FAVOR_EMPLOYER: FavorEmployerStrategy(),
        RoundingDirection.FAVOR_EMPLOYEE: FavorEmployeeStrategy(),
    }


@dataclass
class RoundingStrategyFactory:
    """Factory Pattern: choose the rounding strategy for a direction."""

    strategies: Dict[RoundingDirection, RoundingStrategy] = field(default_factory=_default_strategies)

    def for_direction(self, direction: RoundingDirection) -> RoundingStrategy:
        return self.strategies[direction]
