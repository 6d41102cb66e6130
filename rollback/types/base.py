"""Base enums and aliases for task batches."""

from __future__ import annotations

from enum import IntEnum
from typing import Any, Awaitable, Callable, Dict, Hashable, List, Union

#: Zero-argument task action. May be a coroutine function, a callable returning
#: an awaitable, or a plain synchronous callable returning a value.
Action = Callable[[], Union[Awaitable[Any], Any]]

#: Compensating action. Receives the success value of the task it reverses.
Compensation = Callable[[Any], Union[Awaitable[Any], Any]]

#: Key addressing one task in a collection: list index or mapping key.
TaskKey = Hashable

#: Output collection, shaped like the input task collection.
ShapedCollection = Union[List[Any], Dict[Any, Any]]


class TaskShape(IntEnum):
    """Structural form of a task collection.

    The shape is decided once when a collection enters the package and is
    preserved in every output built from it.
    """

    #: Ordered sequence of tasks. Outputs are lists aligned by position.
    SEQUENCE = 1
    #: Mapping of unique keys to tasks. Outputs are dicts with the same keys.
    MAPPING = 2
