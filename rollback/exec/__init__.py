"""Batch execution: aggregation, rollback coordination, and entry points."""

from rollback.exec.aggregate import parallel_all
from rollback.exec.callbacks import (
    run_all,
    run_rollback,
    schedule_all,
    schedule_rollback,
)
from rollback.exec.coordinator import parallel_rollback

__all__ = [
    "parallel_all",
    "parallel_rollback",
    "schedule_all",
    "schedule_rollback",
    "run_all",
    "run_rollback",
]
