"""Immutable outcome containers for task batches."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional

from rollback.types.base import ShapedCollection, TaskKey, TaskShape


@dataclass(frozen=True)
class TaskOutcome:
    """Outcome of a single task: exactly one of error or result is meaningful.

    Attributes:
        error: Exception raised by the task, or None when it succeeded.
        result: Success value; None when the task failed.
    """

    error: Optional[BaseException] = None
    result: Any = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, result: Any) -> "TaskOutcome":
        return cls(error=None, result=result)

    @classmethod
    def failure(cls, error: BaseException) -> "TaskOutcome":
        return cls(error=error, result=None)


@dataclass(frozen=True)
class AggregatedOutcome:
    """Combined outcome of a batch, shaped like the input collection.

    Unpacks as ``errors, results = outcome``.

    Attributes:
        errors: None when no task failed. Otherwise a list or dict matching the
            input, holding the exception for each failed task and None for each
            succeeded task.
        results: List or dict matching the input, holding the success value for
            each succeeded task and None for each failed task.
        shape: Shape of the input collection.
    """

    errors: Optional[ShapedCollection]
    results: ShapedCollection
    shape: TaskShape

    def __iter__(self) -> Iterator[Any]:
        yield self.errors
        yield self.results

    @property
    def failed(self) -> bool:
        return self.errors is not None

    def _pairs(self, collection: ShapedCollection) -> Iterator[tuple[TaskKey, Any]]:
        if self.shape is TaskShape.MAPPING:
            return iter(collection.items())
        return enumerate(collection)

    def failed_keys(self) -> List[TaskKey]:
        """Return the positions or keys of failed tasks, in input order."""
        if self.errors is None:
            return []
        return [key for key, err in self._pairs(self.errors) if err is not None]

    def _json_keys(self) -> Dict[TaskKey, str]:
        """Map mapping keys to JSON object keys, refusing ambiguous ones."""
        json_keys: Dict[TaskKey, str] = {}
        owners: Dict[str, TaskKey] = {}
        for key in self.results:
            name = key if isinstance(key, str) else str(key)
            if name in owners:
                raise ValueError(
                    f"Task keys {owners[name]!r} and {key!r} both serialize as {name!r}"
                )
            owners[name] = key
            json_keys[key] = name
        return json_keys

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-friendly summary.

        Errors are rendered with ``repr``; results are passed through as-is and
        must be JSON-safe themselves for the summary to serialize. Mapping keys
        that are not strings are converted with ``str``.

        Raises:
            ValueError: If two mapping keys convert to the same string.
        """
        errors: Any = None
        results: Any = list(self.results)
        if self.shape is TaskShape.MAPPING:
            json_keys = self._json_keys()
            results = {json_keys[key]: value for key, value in self.results.items()}
            if self.errors is not None:
                errors = {
                    json_keys[key]: None if err is None else repr(err)
                    for key, err in self.errors.items()
                }
        elif self.errors is not None:
            errors = [None if err is None else repr(err) for err in self.errors]
        return {
            "shape": self.shape.name.lower(),
            "failed": self.failed,
            "errors": errors,
            "results": results,
        }
