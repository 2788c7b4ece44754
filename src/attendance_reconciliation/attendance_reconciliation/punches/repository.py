from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..attendance_exceptions.model import ExceptionRecord
from .model import PunchRecord


class PunchRepository(Protocol):
    def list_unmatched(
        self,
        *,
        company_id: str,
        entry_ids: Optional[Sequence[str]] = None,
        since: Optional[datetime] = None,
        limit: int,
    ) -> Sequence[PunchRecord]:
        """Punches whose matched_at marker is unset, oldest clock-in first.

        Open punches already reconciled by an earlier pass sort after every
        other punch so they cannot fill the page and starve newer entries.
        Rows that cannot be decoded come back with clock_in=None.
        """

        raise NotImplementedError

    def save_reconciliation(
        self,
        *,
        punch: PunchRecord,
        exceptions: Sequence[ExceptionRecord],
    ) -> bool:
        """Write computed fields and replace the punch's exception rows in one transaction.

        The update is conditional on matched_at still being unset; returns
        False (and writes nothing) when another run got there first.
        """

        raise NotImplementedError
