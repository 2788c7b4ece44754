from __future__ import annotations

from datetime import timedelta

from ...core.enums import PunchSide
from .base import RoundingStrategy, ceil_to, floor_to, nearest_to


class NearestStrategy(RoundingStrategy):
    def round_offset(self, offset: timedelta, interval: timedelta, *, side: PunchSide) -> timedelta:
        return nearest_to(offset, interval)


class UpStrategy(RoundingStrategy):
    def round_offset(self, offset: timedelta, interval: timedelta, *, side: PunchSide) -> timedelta:
        return ceil_to(offset, interval)


class DownStrategy(RoundingStrategy):
    def round_offset(self, offset: timedelta, interval: timedelta, *, side: PunchSide) -> timedelta:
        return floor_to(offset, interval)
