"""Task collections, normalization, and calling-convention adapters."""

from rollback.tasks.adapters import (
    CallbackError,
    from_callback,
    invoke,
    undo_from_callback,
)
from rollback.tasks.collection import TaskCollection
from rollback.tasks.normalize import RollbackTask, normalize_task, normalize_tasks

__all__ = [
    "TaskCollection",
    "RollbackTask",
    "normalize_task",
    "normalize_tasks",
    "CallbackError",
    "from_callback",
    "undo_from_callback",
    "invoke",
]
