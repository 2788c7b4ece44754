from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import timedelta

from ...core.enums import PunchSide


def floor_to(offset: timedelta, interval: timedelta) -> timedelta:
    return (offset // interval) * interval


def ceil_to(offset: timedelta, interval: timedelta) -> timedelta:
    down = floor_to(offset, interval)
    return down if down == offset else down + interval


def nearest_to(offset: timedelta, interval: timedelta) -> timedelta:
    """Closest multiple of `interval`; an exact half rounds up."""
    remainder = offset % interval
    down = offset - remainder
    return down + interval if remainder * 2 >= interval else down


class RoundingStrategy(ABC):
    """Strategy Pattern: one rounding direction.

    Works on the offset of a timestamp from its local midnight so rounding
    lands on wall-clock interval boundaries.
    """

    @abstractmethod
    def round_offset(self, offset: timedelta, interval: timedelta, *, side: PunchSide) -> timedelta:
        raise NotImplementedError
