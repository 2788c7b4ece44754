from __future__ import annotations

from typing import Sequence

from ..core.enums import GraceDirection, RoundingDirection, RuleType
from ..core.exceptions import DataFetchError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, translate_errors
from .model import RoundingRule
from .repository import RoundingRuleRepository


class MySQLRoundingRuleRepository(RoundingRuleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_company(self, company_id: str) -> Sequence[RoundingRule]:
        with translate_errors(DataFetchError, "Failed to load rounding rules"):
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    SELECT rule_id, company_id, shift_id, rule_name, rule_type,
                           rounding_interval_minutes, rounding_direction,
                           grace_period_minutes, grace_period_direction, apply_to_overtime,
                           is_active, start_date, end_date, priority
                    FROM shift_rounding_rules
                    WHERE company_id=%s
                    ORDER BY priority DESC, rule_id ASC
                    """,
                    (company_id,),
                )
                rows = fetchall(cur)

            return [
                RoundingRule(
                    rule_id=str(r["rule_id"]),
                    company_id=str(r["company_id"]),
                    shift_id=str(r["shift_id"]) if r.get("shift_id") is not None else None,
                    rule_name=r.get("rule_name") or "",
                    rule_type=RuleType(r["rule_type"]),
                    rounding_interval_minutes=int(r["rounding_interval_minutes"]),
                    rounding_direction=RoundingDirection(r["rounding_direction"]),
                    grace_period_minutes=int(r.get("grace_period_minutes") or 0),
                    grace_period_direction=GraceDirection(r.get("grace_period_direction") or GraceDirection.BOTH.value),
                    apply_to_overtime=bool(r.get("apply_to_overtime", 1)),
                    is_active=bool(r.get("is_active", 1)),
                    start_date=r.get("start_date"),
                    end_date=r.get("end_date"),
                    priority=int(r.get("priority") or 0),
                )
                for r in rows
            ]
