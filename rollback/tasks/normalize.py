"""Normalization of heterogeneous task entries into ``RollbackTask`` records."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional

from rollback.tasks.collection import TaskCollection
from rollback.types.base import Action, Compensation


@dataclass(frozen=True)
class RollbackTask:
    """A task action paired with an optional compensating action.

    Attributes:
        action: Zero-argument callable performing the work.
        undo: Callable receiving the action's success value and reversing its
            effect. A non-callable value is stored as None.
    """

    action: Action
    undo: Optional[Compensation] = None

    def __post_init__(self) -> None:
        if not callable(self.action):
            raise TypeError(
                f"Task action must be callable, got {type(self.action).__name__}"
            )
        if self.undo is not None and not callable(self.undo):
            object.__setattr__(self, "undo", None)

    @property
    def has_undo(self) -> bool:
        return self.undo is not None


def normalize_task(entry: Any) -> RollbackTask:
    """Coerce one task entry into a ``RollbackTask``.

    Accepted forms:
        - a ``RollbackTask`` (returned unchanged);
        - a bare callable, which becomes a task without undo;
        - a mapping with a callable ``"do"`` and optional ``"undo"``.

    Raises:
        TypeError: If the entry matches none of the accepted forms.
    """
    if isinstance(entry, RollbackTask):
        return entry
    if callable(entry):
        return RollbackTask(action=entry)
    if isinstance(entry, Mapping):
        if "do" not in entry:
            raise TypeError("Task mapping requires a 'do' entry")
        return RollbackTask(action=entry["do"], undo=entry.get("undo"))
    raise TypeError(
        f"Task must be a callable or a {{'do', 'undo'}} mapping, got {type(entry).__name__}"
    )


def normalize_tasks(tasks: Any) -> TaskCollection[RollbackTask]:
    """Normalize every entry of a task collection, preserving its shape."""
    return TaskCollection.from_input(tasks).map(normalize_task)
