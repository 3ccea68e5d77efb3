"""Health subsystem — prober, record store, cycle aggregator, scheduler."""

from .aggregator import Aggregator
from .engine import ProbeFailure, ProbeOutcome, ProbeSuccess, Status, probe
from .scheduler import HealthScheduler, SchedulerState
from .store import HealthRecord, HealthRecordStore
from .usage import extract_resource_usage

__all__ = [
    "Aggregator",
    "HealthRecord",
    "HealthRecordStore",
    "HealthScheduler",
    "ProbeFailure",
    "ProbeOutcome",
    "ProbeSuccess",
    "SchedulerState",
    "Status",
    "extract_resource_usage",
    "probe",
]
