"""Example: run a reconciliation pass through the service layer (no Flask).

The HTTP controller and the CLI script are thin wrappers around the same call.
"""

import importlib
import json

from config import get_settings_module

from src.attendance_reconciliation.attendance_reconciliation.common.logging_config import configure_logging
from src.attendance_reconciliation.attendance_reconciliation.container import build_container
from src.attendance_reconciliation.attendance_reconciliation.reconciliation.model import RunRequest


def main():
    settings = importlib.import_module(get_settings_module())
    configure_logging(level=settings.LOG_LEVEL)
    container = build_container(db_config=settings.DB_CONFIG)

    summary = container.reconciliation_service.run(RunRequest(company_id="demo-co", process_all=True))
    print(json.dumps(summary.to_dict(), indent=2))


if __name__ == "__main__":
    main()
