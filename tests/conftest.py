"""Global pytest configuration.

Provides task factories shared across the suite. Tests drive coroutines with
``asyncio.run`` from plain synchronous test functions.
"""

from __future__ import annotations

import asyncio
from typing import Any, Callable, List, Optional

import pytest


class UndoRecorder:
    """Async compensating action that records the results it receives."""

    def __init__(self, error: Optional[Exception] = None) -> None:
        self.calls: List[Any] = []
        self.error = error

    async def __call__(self, result: Any) -> None:
        await asyncio.sleep(0)
        self.calls.append(result)
        if self.error is not None:
            raise self.error


@pytest.fixture
def sample_task() -> Callable[..., Callable[[], Any]]:
    """Factory for async tasks that sleep, then return ``value`` or raise ``error``."""

    def make(
        value: Any = None, error: Optional[Exception] = None, delay: float = 0.0
    ) -> Callable[[], Any]:
        async def task() -> Any:
            await asyncio.sleep(delay)
            if error is not None:
                raise error
            return value

        return task

    return make


@pytest.fixture
def task_error() -> ValueError:
    return ValueError("task two failed")


@pytest.fixture
def success_tasks(sample_task) -> dict:
    # Later keys finish first so completion order differs from input order.
    return {
        "one": sample_task(1, delay=0.03),
        "two": sample_task(2, delay=0.02),
        "three": sample_task(3, delay=0.01),
    }


@pytest.fixture
def fail_tasks(sample_task, task_error) -> dict:
    return {
        "one": sample_task(1, delay=0.03),
        "two": sample_task(error=task_error, delay=0.02),
        "three": sample_task(3, delay=0.01),
    }


@pytest.fixture
def undo_recorder() -> Callable[..., UndoRecorder]:
    """Factory for recording compensating actions."""
    return UndoRecorder

