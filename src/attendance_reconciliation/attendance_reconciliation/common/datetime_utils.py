from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from typing import Any

from ..core.exceptions import MalformedInputError


def parse_time_of_day(value: Any) -> time:
    """Parse an "HH:MM" (or "HH:MM:SS") time-of-day.

    Raises MalformedInputError so callers can skip the affected punch.
    """
    if isinstance(value, time):
        return value
    text = str(value or "").strip()
    for fmt in ("%H:%M", "%H:%M:%S"):
        try:
            return datetime.strptime(text, fmt).time()
        except ValueError:
            continue
    raise MalformedInputError(f"Invalid time of day: {value!r}")


def sunday_based_weekday(day: date) -> int:
    """Weekday numbered 0=Sunday .. 6=Saturday."""
    return day.isoweekday() % 7


def combine_on(day: date, at: time, *, like: datetime) -> datetime:
    """Project a time-of-day onto a date, keeping the timezone of `like`."""
    return datetime.combine(day, at, tzinfo=like.tzinfo)


def minutes_between(later: datetime, earlier: datetime) -> float:
    """Signed elapsed minutes from `earlier` to `later`.

    Aware datetimes are compared on the UTC timeline so DST transitions
    do not distort durations; a naive value mixed with an aware one is
    taken as system local time.
    """
    if later.tzinfo is None and earlier.tzinfo is None:
        return (later - earlier) / timedelta(minutes=1)
    return (later.astimezone(timezone.utc) - earlier.astimezone(timezone.utc)) / timedelta(minutes=1)


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
