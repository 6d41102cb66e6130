"""Callback-style and synchronous entry points.

``schedule_all``/``schedule_rollback`` start a batch on the running event loop
and deliver ``callback(errors, results)`` exactly once when it finishes.
``run_all``/``run_rollback`` drive a fresh event loop for synchronous callers.
"""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, Optional, Set

from rollback.config import CoordinatorConfig
from rollback.exec.aggregate import parallel_all
from rollback.exec.coordinator import parallel_rollback
from rollback.logging import get_logger
from rollback.tasks.normalize import normalize_tasks
from rollback.types.base import ShapedCollection
from rollback.types.dto import AggregatedOutcome

logger = get_logger(__name__)

#: ``callback(errors, results)`` invoked once a scheduled batch completes.
BatchCallback = Callable[[Optional[ShapedCollection], ShapedCollection], Any]

# Strong references to scheduled batches; the event loop only keeps weak ones.
_BACKGROUND: Set["asyncio.Task[AggregatedOutcome]"] = set()


def _schedule(
    runner: Callable[..., Awaitable[AggregatedOutcome]],
    tasks: Any,
    callback: Optional[BatchCallback],
    config: Optional[CoordinatorConfig],
) -> "asyncio.Task[AggregatedOutcome]":
    # Normalize eagerly so malformed input raises here, not inside the task.
    normalized = normalize_tasks(tasks)
    loop = asyncio.get_running_loop()

    async def deliver() -> AggregatedOutcome:
        outcome = await runner(normalized, config=config)
        if callback is not None:
            try:
                callback(outcome.errors, outcome.results)
            except Exception as e:
                logger.error(
                    f"Callback for scheduled batch failed: {type(e).__name__}: {e}"
                )
                raise
        return outcome

    task = loop.create_task(deliver())
    _BACKGROUND.add(task)
    task.add_done_callback(_BACKGROUND.discard)
    return task


def schedule_all(
    tasks: Any,
    callback: Optional[BatchCallback] = None,
    *,
    config: Optional[CoordinatorConfig] = None,
) -> "asyncio.Task[AggregatedOutcome]":
    """Start :func:`parallel_all` in the background.

    Without a callback the batch still runs every task to completion. Must be
    called from inside a running event loop. If the callback raises, the
    exception is logged at ERROR and becomes the asyncio task's exception.

    Returns:
        The asyncio task, resolving to the aggregated outcome.
    """
    return _schedule(parallel_all, tasks, callback, config)


def schedule_rollback(
    tasks: Any,
    callback: Optional[BatchCallback] = None,
    *,
    config: Optional[CoordinatorConfig] = None,
) -> "asyncio.Task[AggregatedOutcome]":
    """Start :func:`parallel_rollback` in the background. See :func:`schedule_all`."""
    return _schedule(parallel_rollback, tasks, callback, config)


def run_all(tasks: Any, *, config: Optional[CoordinatorConfig] = None) -> AggregatedOutcome:
    """Run :func:`parallel_all` on a new event loop and return its outcome."""
    return asyncio.run(parallel_all(tasks, config=config))


def run_rollback(
    tasks: Any, *, config: Optional[CoordinatorConfig] = None
) -> AggregatedOutcome:
    """Run :func:`parallel_rollback` on a new event loop and return its outcome."""
    return asyncio.run(parallel_rollback(tasks, config=config))
