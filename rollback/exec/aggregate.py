"""All-results aggregation over a batch of concurrent tasks.

``asyncio.gather`` propagates the first exception it sees. Every task is
therefore wrapped by :func:`capture`, which turns success or failure into a
:class:`TaskOutcome` and never raises an ``Exception``. ``gather`` only ever
sees successful wrappers, so no sibling is abandoned, and the per-task records
are split into shape-matched error and result collections once all have
finished.
"""

from __future__ import annotations

import asyncio
from operator import attrgetter
from typing import Any, Callable, Iterable, Sequence

from rollback.config import CoordinatorConfig, resolve_config
from rollback.logging import get_logger
from rollback.tasks.adapters import invoke
from rollback.tasks.collection import TaskCollection
from rollback.tasks.normalize import normalize_tasks
from rollback.types.base import Action
from rollback.types.dto import AggregatedOutcome, TaskOutcome

logger = get_logger(__name__)


async def capture(
    fn: Callable[..., Any], *args: Any, run_sync_in_thread: bool = False
) -> TaskOutcome:
    """Run one task and record its outcome instead of raising.

    Synchronous raises from ``fn`` are recorded the same way as asynchronous
    failures. Only ``Exception`` subclasses are captured; cancellation and
    interpreter exits propagate.
    """
    try:
        result = await invoke(fn, *args, run_sync_in_thread=run_sync_in_thread)
    except Exception as exc:
        return TaskOutcome.failure(exc)
    return TaskOutcome.success(result)


async def gather_outcomes(
    calls: Iterable[Sequence[Any]], config: CoordinatorConfig
) -> list[TaskOutcome]:
    """Run ``fn(*args)`` for every ``(fn, *args)`` call concurrently.

    Returns outcomes in call order once every call has completed.
    """
    return list(
        await asyncio.gather(
            *(
                capture(fn, *args, run_sync_in_thread=config.run_sync_in_thread)
                for fn, *args in calls
            )
        )
    )


def aggregate(
    collection: TaskCollection[Any], outcomes: Sequence[TaskOutcome]
) -> AggregatedOutcome:
    """Split per-task outcomes into shape-matched error and result collections.

    ``errors`` is None when no outcome failed, so callers can tell a clean
    batch apart from one whose entries are all None.
    """
    errors = [outcome.error for outcome in outcomes]
    results = [outcome.result for outcome in outcomes]
    failed = any(error is not None for error in errors)
    return AggregatedOutcome(
        errors=collection.build(errors) if failed else None,
        results=collection.build(results),
        shape=collection.shape,
    )


async def run_actions(
    actions: TaskCollection[Action], config: CoordinatorConfig
) -> AggregatedOutcome:
    """Run an already-normalized collection of actions to completion."""
    if not len(actions):
        logger.debug("Empty %s batch; nothing to run", actions.shape.name.lower())
        return aggregate(actions, [])

    logger.debug("Running %d tasks concurrently", len(actions))
    outcomes = await gather_outcomes(((action,) for action in actions.items), config)
    outcome = aggregate(actions, outcomes)
    if outcome.failed:
        logger.debug(
            "Batch finished: %d of %d tasks failed",
            len(outcome.failed_keys()),
            len(actions),
        )
    else:
        logger.debug("Batch finished: all %d tasks succeeded", len(actions))
    return outcome


async def parallel_all(
    tasks: Any, *, config: CoordinatorConfig | None = None
) -> AggregatedOutcome:
    """Run every task concurrently and report all outcomes.

    Unlike ``asyncio.gather``, a failing task neither aborts the batch nor
    hides the results of its siblings.

    Args:
        tasks: Sequence or mapping of tasks. Entries may be bare callables,
            ``RollbackTask`` records, or ``{"do", "undo"}`` mappings; only the
            actions run here.
        config: Optional runtime options; defaults to ``DEFAULT_CONFIG``.

    Returns:
        Outcome unpacking to ``(errors, results)``. ``errors`` is None when no
        task failed, otherwise a list or dict matching ``tasks`` with the
        exception of each failed task and None elsewhere. ``results`` always
        holds the value of each succeeded task and None for failed ones.

    Raises:
        TypeError: If ``tasks`` or one of its entries has an unsupported form.
    """
    cfg = resolve_config(config)
    actions = normalize_tasks(tasks).map(attrgetter("action"))
    return await run_actions(actions, cfg)
