"""In-memory health record store — one rolling record per target.

Records live for the process lifetime (no persistence). Each record has
its own lock so that status, timing, counters and resource usage always
change together; readers get copies and never see a half-written record.
Overlapping cycles may still race on the same target: the last write wins.
"""

from __future__ import annotations

import math
import threading
from collections.abc import Iterable
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Any

from src.health.engine import ProbeFailure, ProbeOutcome, ProbeSuccess, Status
from src.health.usage import NOT_AVAILABLE
from src.targets.registry import Target


def uptime_percent(success_count: int, failure_count: int) -> int:
    """Success rate rounded half-up to a whole percent; 0 with no probes."""
    total = success_count + failure_count
    if total == 0:
        return 0
    return math.floor(success_count * 100 / total + 0.5)


@dataclass
class HealthRecord:
    """Mutable status/statistics snapshot for one target."""

    target_id: str
    name: str
    url: str
    status: Status = Status.UNKNOWN
    response_time_ms: int = 0
    last_ping_at: str | None = None
    success_count: int = 0
    failure_count: int = 0
    resource_usage: str = NOT_AVAILABLE
    last_error: str | None = None

    @classmethod
    def for_target(cls, target: Target) -> HealthRecord:
        return cls(target_id=target.id, name=target.name, url=target.url)

    @property
    def uptime_percent(self) -> int:
        return uptime_percent(self.success_count, self.failure_count)

    @property
    def uptime(self) -> str:
        return f"{self.uptime_percent}%"

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "name": self.name,
            "url": self.url,
            "status": self.status.value,
            "responseTime": self.response_time_ms,
            "lastPing": self.last_ping_at,
            "successCount": self.success_count,
            "failureCount": self.failure_count,
            "uptime": self.uptime,
            "resourceUsage": self.resource_usage,
        }
        if self.status == Status.FAILED:
            d["error"] = self.last_error
        return d


class HealthRecordStore:
    """Process-wide health state, keyed by target id, in registry order."""

    def __init__(self, targets: Iterable[Target]) -> None:
        self._records: dict[str, HealthRecord] = {}
        self._locks: dict[str, threading.Lock] = {}
        for t in targets:
            self._records[t.id] = HealthRecord.for_target(t)
            self._locks[t.id] = threading.Lock()

    # -- writes ----------------------------------------------------------------

    def record_success(
        self,
        target_id: str,
        response_time_ms: int,
        resource_usage: str = NOT_AVAILABLE,
        at: str | None = None,
    ) -> HealthRecord:
        at = at or datetime.now(timezone.utc).isoformat()
        with self._locks[target_id]:
            rec = self._records[target_id]
            rec.status = Status.SUCCESS
            rec.response_time_ms = response_time_ms
            rec.last_ping_at = at
            rec.success_count += 1
            rec.resource_usage = resource_usage
            rec.last_error = None
            return replace(rec)

    def record_failure(
        self,
        target_id: str,
        error: str,
        at: str | None = None,
    ) -> HealthRecord:
        at = at or datetime.now(timezone.utc).isoformat()
        with self._locks[target_id]:
            rec = self._records[target_id]
            rec.status = Status.FAILED
            rec.response_time_ms = 0
            rec.last_ping_at = at
            rec.failure_count += 1
            rec.resource_usage = NOT_AVAILABLE
            rec.last_error = error
            return replace(rec)

    def apply(
        self,
        outcome: ProbeOutcome,
        resource_usage: str = NOT_AVAILABLE,
        at: str | None = None,
    ) -> HealthRecord:
        """Fold one probe outcome into its target's record; returns a copy."""
        if isinstance(outcome, ProbeSuccess):
            return self.record_success(
                outcome.target_id, outcome.response_time_ms, resource_usage, at=at,
            )
        if isinstance(outcome, ProbeFailure):
            return self.record_failure(outcome.target_id, outcome.error, at=at)
        raise TypeError(f"Unsupported probe outcome: {outcome!r}")

    # -- reads -----------------------------------------------------------------

    def get(self, target_id: str) -> HealthRecord:
        with self._locks[target_id]:
            return replace(self._records[target_id])

    def snapshot(self) -> dict[str, HealthRecord]:
        """Consistent per-record copies of every record."""
        return {target_id: self.get(target_id) for target_id in self._records}

    def to_dict(self) -> dict[str, dict[str, Any]]:
        """Serialize the snapshot in the ``pingResults`` wire format."""
        return {target_id: rec.to_dict() for target_id, rec in self.snapshot().items()}

    def __contains__(self, target_id: object) -> bool:
        return target_id in self._records

    def __len__(self) -> int:
        return len(self._records)
