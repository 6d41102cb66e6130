"""rollback: concurrent task batches with compensation on failure.

Runs independent asynchronous tasks concurrently, reports every task's outcome
without aborting on the first failure, and, when a batch partially fails,
invokes compensating actions for the tasks that succeeded.

Primary API:
    parallel_all() - Run all tasks, collect per-task errors and results
    parallel_rollback() - Same, then undo succeeded tasks if any task failed
    schedule_all(), schedule_rollback() - Background variants with a callback
    run_all(), run_rollback() - Synchronous variants driving their own loop
    RollbackTask - Action paired with an optional compensating action

Example:
    from rollback import RollbackTask, parallel_rollback

    errors, results = await parallel_rollback(
        {
            "bucket": RollbackTask(create_bucket, undo=delete_bucket),
            "queue": RollbackTask(create_queue, undo=delete_queue),
        }
    )
    if errors is not None:
        ...  # every created resource has been deleted again
"""

from __future__ import annotations

from rollback import logging
from rollback._version import __version__
from rollback.config import DEFAULT_CONFIG, CoordinatorConfig
from rollback.exec import (
    parallel_all,
    parallel_rollback,
    run_all,
    run_rollback,
    schedule_all,
    schedule_rollback,
)
from rollback.tasks import (
    CallbackError,
    RollbackTask,
    TaskCollection,
    from_callback,
    normalize_tasks,
    undo_from_callback,
)
from rollback.types import AggregatedOutcome, TaskOutcome, TaskShape

__all__ = [
    # Version
    "__version__",
    # Execution (primary API)
    "parallel_all",
    "parallel_rollback",
    "schedule_all",
    "schedule_rollback",
    "run_all",
    "run_rollback",
    # Tasks
    "RollbackTask",
    "TaskCollection",
    "normalize_tasks",
    "from_callback",
    "undo_from_callback",
    "CallbackError",
    # Types
    "TaskShape",
    "TaskOutcome",
    "AggregatedOutcome",
    # Configuration
    "CoordinatorConfig",
    "DEFAULT_CONFIG",
    # Utilities
    "logging",
]
