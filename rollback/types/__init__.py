"""Shared typing constructs for rollback.

Defines the shape enum, callable aliases, and immutable outcome containers
used across the package. Contains no execution logic.
"""

from rollback.types.base import (
    Action,
    Compensation,
    ShapedCollection,
    TaskKey,
    TaskShape,
)
from rollback.types.dto import AggregatedOutcome, TaskOutcome

__all__ = [
    # Enums
    "TaskShape",
    # Type aliases
    "Action",
    "Compensation",
    "ShapedCollection",
    "TaskKey",
    # DTOs
    "TaskOutcome",
    "AggregatedOutcome",
]
