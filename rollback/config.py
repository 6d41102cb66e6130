"""Configuration for batch execution and compensation."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CoordinatorConfig:
    """Runtime options shared by the aggregator and the rollback coordinator."""

    # Run plain synchronous callables in a worker thread (asyncio.to_thread)
    # instead of inline on the event loop.
    run_sync_in_thread: bool = False

    # Emit a WARNING for each compensating action that fails. Compensation
    # failures are never surfaced to the caller either way.
    log_compensation_errors: bool = False


# Global configuration instance
DEFAULT_CONFIG = CoordinatorConfig()


def resolve_config(config: CoordinatorConfig | None) -> CoordinatorConfig:
    """Return ``config`` or the global default when it is None."""
    return DEFAULT_CONFIG if config is None else config
