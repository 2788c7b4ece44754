from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional, Sequence

from ..common.datetime_utils import minutes_between
from ..core.enums import GraceDirection, PunchSide
from .factory import RoundingStrategyFactory
from .model import RoundingRule


@dataclass(frozen=True)
class RoundedPunch:
    clock_in: datetime
    clock_out: Optional[datetime]
    rule_applied: Optional[str] = None


def within_grace(variance_minutes: float, rule: RoundingRule, side: PunchSide) -> bool:
    grace = rule.grace_period_minutes
    direction = rule.grace_period_direction
    if grace <= 0:
        return False
    if direction == GraceDirection.BEFORE:
        return -grace <= variance_minutes <= 0
    if direction == GraceDirection.AFTER:
        return 0 <= variance_minutes <= grace
    if direction == GraceDirection.IN and side != PunchSide.CLOCK_IN:
        return False
    if direction == GraceDirection.OUT and side != PunchSide.CLOCK_OUT:
        return False
    return abs(variance_minutes) <= grace


class TimeRounder:
    def __init__(self, strategy_factory: RoundingStrategyFactory | None = None):
        self._factory = strategy_factory or RoundingStrategyFactory()

    def round_timestamp(
        self,
        raw: datetime,
        *,
        anchor: Optional[datetime],
        rule: RoundingRule,
        side: PunchSide,
    ) -> datetime:
        # Grace is a hard short-circuit: snap to the anchor, no interval rounding.
        if anchor is not None and within_grace(minutes_between(raw, anchor), rule, side):
            return anchor

        if rule.rounding_interval_minutes <= 0:
            return raw

        midnight = raw.replace(hour=0, minute=0, second=0, microsecond=0)
        offset = raw - midnight
        strategy = self._factory.for_direction(rule.rounding_direction)
        rounded = strategy.round_offset(offset, timedelta(minutes=rule.rounding_interval_minutes), side=side)
        return midnight + rounded

    @staticmethod
    def _first_covering(rules: Sequence[RoundingRule], side: PunchSide) -> Optional[RoundingRule]:
        for rule in rules:
            if rule.covers(side):
                return rule
        return None

    def round_punch(
        self,
        *,
        clock_in: datetime,
        clock_out: Optional[datetime],
        scheduled_start: Optional[datetime],
        scheduled_end: Optional[datetime],
        rules: Sequence[RoundingRule],
    ) -> RoundedPunch:
        """Round each side with the first rule (in resolver order) covering it."""
        applied: Optional[str] = None

        rounded_in = clock_in
        in_rule = self._first_covering(rules, PunchSide.CLOCK_IN)
        if in_rule:
            rounded_in = self.round_timestamp(clock_in, anchor=scheduled_start, rule=in_rule, side=PunchSide.CLOCK_IN)
            applied = in_rule.rule_id

        rounded_out = clock_out
        out_rule = self._first_covering(rules, PunchSide.CLOCK_OUT)
        if clock_out is not None and out_rule:
            # Time worked past the scheduled end stays exact unless the rule covers
            # overtime; a clock-out within grace still snaps back to the end.
            in_overtime = scheduled_end is not None and clock_out > scheduled_end
            snaps = in_overtime and within_grace(
                minutes_between(clock_out, scheduled_end), out_rule, PunchSide.CLOCK_OUT
            )
            if out_rule.apply_to_overtime or not in_overtime or snaps:
                rounded_out = self.round_timestamp(
                    clock_out, anchor=scheduled_end, rule=out_rule, side=PunchSide.CLOCK_OUT
                )
                applied = applied or out_rule.rule_id

        return RoundedPunch(clock_in=rounded_in, clock_out=rounded_out, rule_applied=applied)
