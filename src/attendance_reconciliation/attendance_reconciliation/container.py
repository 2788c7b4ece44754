from __future__ import annotations

from dataclasses import dataclass

from .core.constants import DEFAULT_BATCH_LIMIT, DEFAULT_LOOKBACK_DAYS
from .database.connection import DBConfig, DatabaseConnection
from .punches.mysql_punch_repository import MySQLPunchRepository
from .reconciliation.service import ReconciliationService
from .rounding.mysql_rounding_rule_repository import MySQLRoundingRuleRepository
from .schedules.mysql_schedule_repository import MySQLScheduleRepository
from .shifts.mysql_shift_repository import MySQLShiftRepository


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection

    punches_repo: MySQLPunchRepository
    shifts_repo: MySQLShiftRepository
    schedules_repo: MySQLScheduleRepository
    rules_repo: MySQLRoundingRuleRepository

    reconciliation_service: ReconciliationService


def build_container(
    *,
    db_config: dict,
    batch_limit: int = DEFAULT_BATCH_LIMIT,
    lookback_days: int = DEFAULT_LOOKBACK_DAYS,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    punches_repo = MySQLPunchRepository(conn)
    shifts_repo = MySQLShiftRepository(conn)
    schedules_repo = MySQLScheduleRepository(conn)
    rules_repo = MySQLRoundingRuleRepository(conn)

    reconciliation_service = ReconciliationService(
        punches_repo,
        shifts_repo,
        schedules_repo,
        rules_repo,
        batch_limit=batch_limit,
        lookback_days=lookback_days,
    )

    return Container(
        conn=conn,
        punches_repo=punches_repo,
        shifts_repo=shifts_repo,
        schedules_repo=schedules_repo,
        rules_repo=rules_repo,
        reconciliation_service=reconciliation_service,
    )
