"""Run one reconciliation pass for a company (for cron / schedulers).

Exit code is 0 on success, 1 when some punches could not be saved and 2 when
the run could not load its data.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from src.attendance_reconciliation.attendance_reconciliation.common.logging_config import configure_logging
from src.attendance_reconciliation.attendance_reconciliation.container import build_container
from src.attendance_reconciliation.attendance_reconciliation.core.exceptions import DataFetchError, ValidationError
from src.attendance_reconciliation.attendance_reconciliation.main import load_settings
from src.attendance_reconciliation.attendance_reconciliation.reconciliation.model import RunRequest


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Reconcile unmatched time clock punches.")
    parser.add_argument("--company-id", required=True)
    parser.add_argument("--entry-id", action="append", dest="entry_ids", help="Reconcile only this entry (repeatable)")
    parser.add_argument("--process-all", action="store_true", help="Ignore the look-back window")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    _, settings = load_settings()
    configure_logging(level=getattr(settings, "LOG_LEVEL", "INFO"))

    container = build_container(
        db_config=settings.DB_CONFIG,
        batch_limit=settings.RECONCILIATION_BATCH_LIMIT,
        lookback_days=settings.RECONCILIATION_LOOKBACK_DAYS,
    )

    try:
        request = RunRequest.from_payload(
            {"company_id": args.company_id, "entry_ids": args.entry_ids, "process_all": args.process_all}
        )
        summary = container.reconciliation_service.run(request)
    except ValidationError as e:
        print(f"Invalid request: {e}", file=sys.stderr)
        return 2
    except DataFetchError as e:
        print(f"Reconciliation aborted: {e}", file=sys.stderr)
        return 2

    print(json.dumps(summary.to_dict(), indent=2))
    return 1 if summary.failed else 0


if __name__ == "__main__":
    raise SystemExit(main())
