"""Rollback coordination: compensate succeeded tasks when a batch fails."""

from __future__ import annotations

from operator import attrgetter
from typing import Any, List, Tuple

from rollback.config import CoordinatorConfig, resolve_config
from rollback.exec.aggregate import gather_outcomes, run_actions
from rollback.logging import get_logger
from rollback.tasks.collection import TaskCollection
from rollback.tasks.normalize import RollbackTask, normalize_tasks
from rollback.types.base import Compensation, TaskKey
from rollback.types.dto import AggregatedOutcome

logger = get_logger(__name__)


def plan_compensations(
    tasks: TaskCollection[RollbackTask], outcome: AggregatedOutcome
) -> List[Tuple[TaskKey, Compensation, Any]]:
    """Select ``(key, undo, result)`` for every succeeded task that has an undo.

    Failed tasks never committed anything and are skipped, as are succeeded
    tasks without a compensating action.
    """
    if outcome.errors is None:
        return []
    planned = []
    for key, task in tasks.pairs():
        if outcome.errors[key] is not None or not task.has_undo:
            continue
        planned.append((key, task.undo, outcome.results[key]))
    return planned


async def compensate(
    planned: List[Tuple[TaskKey, Compensation, Any]], config: CoordinatorConfig
) -> int:
    """Run planned compensations concurrently and return how many failed.

    Failures are never raised; with ``log_compensation_errors`` enabled each
    one is logged at WARNING.
    """
    outcomes = await gather_outcomes(
        ((undo, result) for _, undo, result in planned), config
    )
    failures = 0
    for (key, _, _), outcome in zip(planned, outcomes):
        if outcome.ok:
            continue
        failures += 1
        if config.log_compensation_errors:
            logger.warning("Compensation for task %r failed: %r", key, outcome.error)
    return failures


async def parallel_rollback(
    tasks: Any, *, config: CoordinatorConfig | None = None
) -> AggregatedOutcome:
    """Run tasks concurrently and roll back succeeded ones if any task fails.

    Each entry is a bare callable, a ``RollbackTask``, or a
    ``{"do": action, "undo": compensation}`` mapping. All actions run as in
    :func:`~rollback.exec.aggregate.parallel_all`. When at least one fails,
    ``undo(result)`` runs concurrently for every succeeded task that has one,
    after the whole batch has finished. Compensation failures are swallowed.

    Args:
        tasks: Sequence or mapping of task entries.
        config: Optional runtime options; defaults to ``DEFAULT_CONFIG``.

    Returns:
        The aggregated outcome of the actions, unchanged by compensation.

    Raises:
        TypeError: If ``tasks`` or one of its entries has an unsupported form.
    """
    cfg = resolve_config(config)
    normalized = normalize_tasks(tasks)
    outcome = await run_actions(normalized.map(attrgetter("action")), cfg)
    if not outcome.failed:
        return outcome

    planned = plan_compensations(normalized, outcome)
    if not planned:
        logger.debug("Batch failed; no compensating actions to run")
        return outcome

    logger.debug("Batch failed; running %d compensating actions", len(planned))
    failures = await compensate(planned, cfg)
    logger.debug(
        "Compensation finished: %d of %d actions failed", failures, len(planned)
    )
    return outcome
