from __future__ import annotations

from datetime import timedelta

from ...core.enums import PunchSide
from .base import RoundingStrategy, ceil_to, floor_to


class FavorEmployerStrategy(RoundingStrategy):
    """Shrinks the paid window: clock-in rounds later, clock-out rounds earlier."""

    def round_offset(self, offset: timedelta, interval: timedelta, *, side: PunchSide) -> timedelta:
        if side == PunchSide.CLOCK_IN:
            return ceil_to(offset, interval)
        return floor_to(offset, interval)


class FavorEmployeeStrategy(RoundingStrategy):
    """Mirror of FavorEmployerStrategy: the paid window only ever grows."""

    def round_offset(self, offset: timedelta, interval: timedelta, *, side: PunchSide) -> timedelta:
        if side == PunchSide.CLOCK_IN:
            return floor_to(offset, interval)
        return ceil_to(offset, interval)
