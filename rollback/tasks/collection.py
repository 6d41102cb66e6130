"""Shape-preserving container for task collections.

A caller hands in either an ordered sequence of tasks or a mapping of unique
keys to tasks. ``TaskCollection`` records which of the two it was, once, at the
boundary. Everything downstream works on the flat ``items`` tuple and rebuilds
outputs through :meth:`TaskCollection.build`, so a list input always yields
lists and a mapping input always yields dicts with the same keys in the same
order.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Set
from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterator, Tuple, TypeVar

from rollback.types.base import ShapedCollection, TaskKey, TaskShape

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class TaskCollection(Generic[T]):
    """Tagged sequence-or-mapping collection.

    Attributes:
        shape: Whether the collection came from a sequence or a mapping.
        keys: Positions (``0..n-1``) for sequences, original keys for mappings.
        items: Entries aligned with ``keys``.
    """

    shape: TaskShape
    keys: Tuple[TaskKey, ...]
    items: Tuple[T, ...]

    def __post_init__(self) -> None:
        if len(self.keys) != len(self.items):
            raise ValueError(
                f"TaskCollection has {len(self.keys)} keys but {len(self.items)} items"
            )

    @classmethod
    def from_input(cls, tasks: Any) -> "TaskCollection[Any]":
        """Detect the shape of a caller-supplied collection.

        Args:
            tasks: A mapping of keys to entries, an ordered iterable of entries,
                or an existing ``TaskCollection`` (returned unchanged).

        Returns:
            The collection with its shape fixed.

        Raises:
            TypeError: If ``tasks`` is a string, bytes, a set, or not iterable.
        """
        if isinstance(tasks, TaskCollection):
            return tasks
        if isinstance(tasks, Mapping):
            return cls(
                shape=TaskShape.MAPPING,
                keys=tuple(tasks.keys()),
                items=tuple(tasks.values()),
            )
        if isinstance(tasks, (str, bytes, bytearray)) or isinstance(tasks, Set):
            raise TypeError(
                f"tasks must be a sequence or a mapping, got {type(tasks).__name__}"
            )
        if not isinstance(tasks, Iterable):
            raise TypeError(
                f"tasks must be a sequence or a mapping, got {type(tasks).__name__}"
            )
        items = tuple(tasks)
        return cls(
            shape=TaskShape.SEQUENCE,
            keys=tuple(range(len(items))),
            items=items,
        )

    def __len__(self) -> int:
        return len(self.items)

    def pairs(self) -> Iterator[Tuple[TaskKey, T]]:
        """Iterate ``(key, item)`` pairs in input order."""
        return zip(self.keys, self.items)

    def map(self, fn: Callable[[T], U]) -> "TaskCollection[U]":
        """Apply ``fn`` to every item, keeping shape and keys."""
        return TaskCollection(
            shape=self.shape,
            keys=self.keys,
            items=tuple(fn(item) for item in self.items),
        )

    def build(self, values: Iterable[Any]) -> ShapedCollection:
        """Rebuild a caller-facing collection from values aligned with ``keys``.

        Returns:
            A list for sequence collections, a dict keyed like the input for
            mapping collections.

        Raises:
            ValueError: If the number of values differs from the collection size.
        """
        values = list(values)
        if len(values) != len(self.keys):
            raise ValueError(
                f"Expected {len(self.keys)} values to build collection, got {len(values)}"
            )
        if self.shape is TaskShape.MAPPING:
            return dict(zip(self.keys, values))
        return values
