from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence

from ..attendance_exceptions.model import ExceptionRecord
from ..common.validators import require_bool, require_id_list, require_non_empty
from ..core.enums import MatchQuality
from ..core.exceptions import ValidationError
from ..punches.model import PunchRecord


@dataclass(frozen=True)
class RunRequest:
    """What to reconcile: explicit entry ids win over the look-back window."""

    company_id: str
    entry_ids: Optional[Sequence[str]] = None
    process_all: bool = False

    @classmethod
    def from_payload(cls, payload: Any) -> "RunRequest":
        if not isinstance(payload, dict):
            raise ValidationError("Request body must be a JSON object")
        return cls(
            company_id=require_non_empty(payload.get("company_id"), "company_id"),
            entry_ids=require_id_list(payload.get("entry_ids"), "entry_ids"),
            process_all=require_bool(payload.get("process_all"), "process_all"),
        )


@dataclass(frozen=True)
class RecordFailure:
    entry_id: str
    reason: str


@dataclass
class RunSummary:
    processed: int = 0
    matched: int = 0
    exact: int = 0
    close: int = 0
    unmatched: int = 0
    skipped: int = 0
    exceptions_by_type: Counter = field(default_factory=Counter)
    failures: List[RecordFailure] = field(default_factory=list)

    @property
    def failed(self) -> int:
        return len(self.failures)

    def record(self, punch: PunchRecord, exceptions: Sequence[ExceptionRecord]) -> None:
        quality = punch.match_quality
        if quality == MatchQuality.EXACT:
            self.exact += 1
            self.matched += 1
        elif quality == MatchQuality.CLOSE:
            self.close += 1
            self.matched += 1
        else:
            self.unmatched += 1
        for e in exceptions:
            self.exceptions_by_type[e.exception_type.value] += 1

    def record_malformed(self) -> None:
        self.unmatched += 1

    def record_failure(self, entry_id: str, reason: str) -> None:
        self.failures.append(RecordFailure(entry_id=entry_id, reason=reason))

    def to_dict(self) -> dict:
        return {
            "processed": self.processed,
            "matched": self.matched,
            "exact": self.exact,
            "close": self.close,
            "unmatched": self.unmatched,
            "skipped": self.skipped,
            "failed": self.failed,
            "exceptions_by_type": dict(sorted(self.exceptions_by_type.items())),
            "failures": [{"entry_id": f.entry_id, "reason": f.reason} for f in self.failures],
        }
